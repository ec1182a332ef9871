"""Pydantic models for projects, participants and workflow requests."""

import re
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from grow.models.enums import ProjectStatus

MAX_SKILL_LENGTH = 20
MAX_DOCUMENT_LINKS = 3
MAX_DOCUMENT_LINK_LENGTH = 400

_INVALID_SKILL_CHARACTERS = set('|"()\'\\')
_URL_PATTERN = re.compile(
    r"^http(s)?://(www\.)?[a-z0-9]+([\-.][a-z0-9]+)*\.[a-z]{2,5}(:[0-9]{1,5})?(/.*)?$",
    re.IGNORECASE,
)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_skills(skills: list[str], minimum: int, maximum: int) -> list[str]:
    """Trim and check a skill list; raises ValueError for pydantic to report."""
    cleaned = [skill.strip() for skill in skills]
    if len(cleaned) < minimum or len(cleaned) > maximum:
        raise ValueError(f"Between {minimum} and {maximum} skills are required")
    for skill in cleaned:
        if not skill:
            raise ValueError("Skill cannot be empty")
        if len(skill) > MAX_SKILL_LENGTH:
            raise ValueError(f"Skill '{skill}' exceeds {MAX_SKILL_LENGTH} characters")
        if _INVALID_SKILL_CHARACTERS.intersection(skill):
            raise ValueError(f"Special characters are not allowed in skill '{skill}'")
    if len({skill.lower() for skill in cleaned}) != len(cleaned):
        raise ValueError("Skills must be distinct")
    return cleaned


class Participant(BaseModel):
    """A user who joined a project."""

    user_id: str = Field(..., min_length=1)
    display_name: str = ""


class Project(BaseModel):
    """A project record as held by the Record Store or returned by search.

    Search projections may carry only a few fields, so everything has a
    default; creation rules live on ProjectCreate / ProjectUpdate.
    """

    model_config = ConfigDict(extra="ignore")

    project_id: str = ""
    created_by_user_id: str = ""
    created_by_name: str = ""
    title: str = ""
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)
    support_documents: list[str] = Field(default_factory=list)
    team_size: int = 0
    status: ProjectStatus | None = None
    project_start_date: datetime | None = None
    project_end_date: datetime | None = None
    created_date: datetime | None = None
    updated_date: datetime | None = None
    project_closed_date: datetime | None = None
    is_removed: bool = False
    participants: list[Participant] = Field(default_factory=list)

    @field_validator(
        "project_start_date",
        "project_end_date",
        "created_date",
        "updated_date",
        "project_closed_date",
    )
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @property
    def participant_ids(self) -> list[str]:
        return [p.user_id for p in self.participants]

    def has_participant(self, user_id: str) -> bool:
        return user_id in self.participant_ids

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.team_size


class _ProjectFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=200, max_length=400)
    required_skills: list[str]
    support_documents: list[str] = Field(default_factory=list)
    team_size: int = Field(..., ge=1, le=20)
    project_start_date: datetime
    project_end_date: datetime

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title cannot be blank")
        return value

    @field_validator("required_skills")
    @classmethod
    def _check_skills(cls, value: list[str]) -> list[str]:
        return validate_skills(value, 2, 5)

    @field_validator("support_documents")
    @classmethod
    def _check_documents(cls, value: list[str]) -> list[str]:
        if len(value) > MAX_DOCUMENT_LINKS:
            raise ValueError(f"At most {MAX_DOCUMENT_LINKS} document links are allowed")
        for link in value:
            if not link.strip():
                raise ValueError("Document link cannot be empty")
            if len(link) > MAX_DOCUMENT_LINK_LENGTH:
                raise ValueError("Document link is too long")
            if not _URL_PATTERN.match(link):
                raise ValueError(f"Document link '{link}' is not a valid URL")
        return value

    @field_validator("project_start_date", "project_end_date")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_date_range(self):
        if self.project_start_date > self.project_end_date:
            raise ValueError("Project start date must not be after end date")
        return self


class ProjectCreate(_ProjectFields):
    """Body of a create-project request."""


class ProjectUpdate(_ProjectFields):
    """Body of an edit-project request.

    ``status`` and ``participant_ids`` are optional: ``None`` keeps the current
    value. ``participant_ids`` lets the owner drop members and must be a
    subset of the current participants.
    """

    status: ProjectStatus | None = None
    participant_ids: list[str] | None = None

    @field_validator("status")
    @classmethod
    def _not_closed(cls, value: ProjectStatus | None) -> ProjectStatus | None:
        if value == ProjectStatus.CLOSED:
            raise ValueError("Use the close operation to close a project")
        return value


class JoinProjectRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)


class LeaveProjectRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)


class ParticipantFeedback(BaseModel):
    """Skills and feedback the owner records for one participant at closure."""

    user_id: str = Field(..., min_length=1)
    name: str = ""
    acquired_skills: list[str]
    feedback: str = Field("", max_length=250)

    @field_validator("acquired_skills")
    @classmethod
    def _check_skills(cls, value: list[str]) -> list[str]:
        return validate_skills(value, 1, 5)


class CloseProjectRequest(BaseModel):
    project_id: str = Field(..., min_length=1)
    participants: list[ParticipantFeedback] | None = None


class ProjectListResponse(BaseModel):
    """One caller-side page of discovery results."""

    projects: list[Project]
    page_count: int
    has_more: bool
