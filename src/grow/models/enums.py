"""Enumerations for project lifecycle and discovery."""

from enum import IntEnum, StrEnum


class ProjectStatus(IntEnum):
    NOT_STARTED = 1
    ACTIVE = 2
    BLOCKED = 3
    CLOSED = 4

    @property
    def is_joinable(self) -> bool:
        return self in (ProjectStatus.NOT_STARTED, ProjectStatus.ACTIVE)


class SearchScope(StrEnum):
    """Named discovery intents understood by the scope resolver."""

    ALL_PROJECTS = "AllProjects"
    CREATED_PROJECTS_BY_USER = "CreatedProjectsByUser"
    JOINED_PROJECTS = "JoinedProjects"
    UNIQUE_SKILLS = "UniqueSkills"
    FILTER_AS_PER_TEAM_SKILLS = "FilterAsPerTeamSkills"
    UNIQUE_PROJECT_OWNER_NAMES = "UniqueProjectOwnerNames"
    SEARCH_PROJECTS = "SearchProjects"
    FILTER_TEAM_PROJECTS = "FilterTeamProjects"


class QueryType(StrEnum):
    SIMPLE = "simple"
    FULL = "full"
