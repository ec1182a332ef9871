"""Pydantic models for acquired skills and team skill configuration."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from grow.models.project import ensure_utc, validate_skills


class AcquiredSkill(BaseModel):
    """Skills credited to one participant of one closed project."""

    user_id: str
    project_id: str
    acquired_skills: list[str]
    feedback: str = ""
    project_title: str
    project_owner_name: str
    project_closed_date: datetime
    created_date: datetime | None = None

    @field_validator("project_closed_date", "created_date")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class TeamSkillConfiguration(BaseModel):
    team_id: str
    skills: list[str] = Field(default_factory=list)
    created_by_user_id: str = ""
    updated_by_user_id: str = ""
    created_date: datetime | None = None
    updated_date: datetime | None = None

    @field_validator("created_date", "updated_date")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class TeamSkillsUpdate(BaseModel):
    """Body of a configure-team-skills request."""

    skills: list[str]

    @field_validator("skills")
    @classmethod
    def _check_skills(cls, value: list[str]) -> list[str]:
        return validate_skills(value, 5, 20)
