"""Model validation and delimited-string codec tests."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from grow.models.enums import ProjectStatus
from grow.models.project import Participant, ParticipantFeedback, ProjectCreate, ProjectUpdate
from grow.models.skills import TeamSkillsUpdate
from grow.serialization import (
    parse_participants,
    participant_ids_string,
    participant_mapping_string,
    split_tokens,
)

NOW = datetime(2026, 5, 1, tzinfo=timezone.utc)


def _fields(**overrides) -> dict:
    fields = {
        "title": "  Search relevance tuning  ",
        "description": "x" * 250,
        "required_skills": ["python", " lucene "],
        "support_documents": [],
        "team_size": 4,
        "project_start_date": NOW,
        "project_end_date": NOW + timedelta(days=7),
    }
    fields.update(overrides)
    return fields


def test_project_create_normalizes_title_and_skills():
    body = ProjectCreate(**_fields())
    assert body.title == "Search relevance tuning"
    assert body.required_skills == ["python", "lucene"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": "   "},
        {"title": "t" * 101},
        {"description": "too short"},
        {"description": "x" * 401},
        {"required_skills": ["python"]},
        {"required_skills": ["a", "b", "c", "d", "e", "f"]},
        {"required_skills": ["python", "Python"]},
        {"required_skills": ["python", "x" * 21]},
        {"required_skills": ["python", 'say "hi"']},
        {"required_skills": ["python", "a|b"]},
        {"support_documents": ["ftp://files.contoso.com/a"]},
        {"support_documents": ["https://contoso.com/a"] * 4},
        {"team_size": 0},
        {"team_size": 21},
        {"project_end_date": NOW - timedelta(days=1)},
        {"unexpected": True},
    ],
)
def test_project_create_rejects(overrides):
    with pytest.raises(ValidationError):
        ProjectCreate(**_fields(**overrides))


def test_naive_dates_are_treated_as_utc():
    body = ProjectCreate(**_fields(project_start_date=datetime(2026, 5, 1), project_end_date=datetime(2026, 5, 2)))
    assert body.project_start_date.tzinfo == timezone.utc


def test_project_update_status():
    assert ProjectUpdate(**_fields()).status == ProjectStatus.NOT_STARTED
    assert ProjectUpdate(**_fields(status=3)).status == ProjectStatus.BLOCKED
    with pytest.raises(ValidationError):
        ProjectUpdate(**_fields(status=4))


def test_participant_feedback_limits():
    ParticipantFeedback(user_id="u1", acquired_skills=["go"], feedback="f" * 250)
    with pytest.raises(ValidationError):
        ParticipantFeedback(user_id="u1", acquired_skills=[], feedback="")
    with pytest.raises(ValidationError):
        ParticipantFeedback(user_id="u1", acquired_skills=["go"], feedback="f" * 251)


def test_team_skills_need_five_to_twenty():
    TeamSkillsUpdate(skills=[f"s{i}" for i in range(5)])
    TeamSkillsUpdate(skills=[f"s{i}" for i in range(20)])
    with pytest.raises(ValidationError):
        TeamSkillsUpdate(skills=[f"s{i}" for i in range(4)])
    with pytest.raises(ValidationError):
        TeamSkillsUpdate(skills=[f"s{i}" for i in range(21)])


def test_split_tokens():
    assert split_tokens("go; rust;;") == ["go", "rust"]
    assert split_tokens("") == []
    assert split_tokens(None) == []


def test_participant_strings_come_from_one_list():
    participants = [Participant(user_id="u1", display_name="Ann"), Participant(user_id="u2", display_name="Bob")]
    assert participant_ids_string(participants) == "u1;u2"
    assert participant_mapping_string(participants) == "u1:Ann;u2:Bob"
    assert participant_ids_string([]) == ""


def test_mapping_string_strips_delimiters_from_names():
    participants = [Participant(user_id="u1", display_name="Smith; John"), Participant(user_id="u2", display_name="a:b")]
    mapping = participant_mapping_string(participants)
    assert mapping == "u1:Smith John;u2:a b"
    assert parse_participants("u1;u2", mapping)[0].display_name == "Smith John"


def test_parse_participants_ids_decide_membership():
    participants = parse_participants("u2;u1;u2", "u1:Ann;u2:Bob;u9:Ghost")
    assert [(p.user_id, p.display_name) for p in participants] == [("u2", "Bob"), ("u1", "Ann")]


def test_parse_participants_tolerates_missing_mapping():
    participants = parse_participants("u1", None)
    assert participants == [Participant(user_id="u1", display_name="")]
