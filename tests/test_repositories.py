"""Repository tests for acquired skills, team skills and project rows."""

from datetime import datetime, timedelta, timezone

import pytest

from grow.errors.exceptions import ConcurrencyConflict
from grow.models.enums import ProjectStatus
from grow.models.project import Project
from grow.models.skills import AcquiredSkill
from grow.repositories.acquired_skill_repo import AcquiredSkillRepository
from grow.repositories.project_repo import ProjectRepository, project_from_row
from grow.repositories.team_skill_repo import TeamSkillRepository

NOW = datetime(2026, 6, 1, tzinfo=timezone.utc)


def _skill(project_id: str, closed: datetime, skills=("go",)) -> AcquiredSkill:
    return AcquiredSkill(
        user_id="u1",
        project_id=project_id,
        acquired_skills=list(skills),
        feedback="ok",
        project_title=f"Title {project_id}",
        project_owner_name="Olivia",
        project_closed_date=closed,
        created_date=closed,
    )


async def test_acquired_skills_newest_first_and_upserted(db_session):
    repo = AcquiredSkillRepository(db_session)
    await repo.upsert(_skill("p1", NOW - timedelta(days=5)))
    await repo.upsert(_skill("p2", NOW))
    await repo.upsert(_skill("p1", NOW - timedelta(days=5), skills=("go", "rust")))
    await db_session.commit()

    skills = await repo.list_for_user("u1")
    assert [s.project_id for s in skills] == ["p2", "p1"]
    assert skills[1].acquired_skills == ["go", "rust"]
    assert skills[0].project_closed_date == NOW
    assert await repo.list_for_user("someone-else") == []


async def test_team_skill_upsert_keeps_creator(db_session):
    repo = TeamSkillRepository(db_session)
    assert await repo.get("team-1") is None

    await repo.upsert("team-1", ["a", "b", "c", "d", "e"], "lead-1")
    config = await repo.upsert("team-1", ["a", "b", "c", "d", "f"], "lead-2")
    assert config.created_by_user_id == "lead-1"
    assert config.updated_by_user_id == "lead-2"
    assert config.created_date is not None
    assert config.updated_date >= config.created_date
    assert (await repo.get("team-1")).skills == ["a", "b", "c", "d", "f"]


async def test_project_row_roundtrip_and_conditional_replace(db_session):
    repo = ProjectRepository(db_session)
    project = Project(
        project_id="p1",
        created_by_user_id="o1",
        created_by_name="Olivia",
        title="Indexing",
        description="d" * 200,
        required_skills=["go", "rust"],
        team_size=2,
        status=ProjectStatus.ACTIVE,
        project_start_date=NOW,
        project_end_date=NOW + timedelta(days=1),
        created_date=NOW,
        updated_date=NOW,
    )
    await repo.upsert(project)
    await db_session.commit()

    row = await repo.get("o1", "p1")
    assert project_from_row(row) == project
    assert await repo.get("o2", "p1") is None
    assert await repo.title_in_use("INDEXING") is True
    assert await repo.title_in_use("indexing", exclude_project_id="p1") is False

    stale_etag = row.etag
    new_etag = await repo.replace(project.model_copy(update={"team_size": 3}), stale_etag)
    await db_session.commit()
    assert (await repo.get("o1", "p1")).etag == new_etag

    with pytest.raises(ConcurrencyConflict):
        await repo.replace(project, stale_etag)
    assert (await repo.get("o1", "p1")).team_size == 3
