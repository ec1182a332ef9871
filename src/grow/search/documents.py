"""Search index document layout and conversion to Project models.

Documents are written by the service-side indexer straight from the project
table; this side only reads them.
"""

from typing import Any

from grow.models.enums import ProjectStatus
from grow.models.project import Project
from grow.serialization import parse_participants, split_tokens

PROJECT_ID = "ProjectId"
STATUS = "Status"
TITLE = "Title"
DESCRIPTION = "Description"
SUPPORT_DOCUMENTS = "SupportDocuments"
REQUIRED_SKILLS = "RequiredSkills"
PROJECT_START_DATE = "ProjectStartDate"
PROJECT_END_DATE = "ProjectEndDate"
CREATED_DATE = "CreatedDate"
CREATED_BY_NAME = "CreatedByName"
UPDATED_DATE = "UpdatedDate"
CREATED_BY_USER_ID = "CreatedByUserId"
TEAM_SIZE = "TeamSize"
IS_REMOVED = "IsRemoved"
PARTICIPANT_IDS = "ProjectParticipantsUserIds"
PARTICIPANT_MAPPING = "ProjectParticipantsUserMapping"
PROJECT_CLOSED_DATE = "ProjectClosedDate"

FULL_PROJECTION = (
    PROJECT_ID,
    STATUS,
    TITLE,
    DESCRIPTION,
    SUPPORT_DOCUMENTS,
    REQUIRED_SKILLS,
    PROJECT_START_DATE,
    PROJECT_END_DATE,
    CREATED_DATE,
    CREATED_BY_NAME,
    UPDATED_DATE,
    CREATED_BY_USER_ID,
    TEAM_SIZE,
    IS_REMOVED,
    PARTICIPANT_IDS,
    PARTICIPANT_MAPPING,
    PROJECT_CLOSED_DATE,
)


def project_from_document(document: dict[str, Any]) -> Project:
    """Convert one index document (possibly a narrow projection) to a Project."""
    status = document.get(STATUS)
    return Project(
        project_id=document.get(PROJECT_ID) or "",
        created_by_user_id=document.get(CREATED_BY_USER_ID) or "",
        created_by_name=document.get(CREATED_BY_NAME) or "",
        title=document.get(TITLE) or "",
        description=document.get(DESCRIPTION) or "",
        required_skills=split_tokens(document.get(REQUIRED_SKILLS)),
        support_documents=split_tokens(document.get(SUPPORT_DOCUMENTS)),
        team_size=document.get(TEAM_SIZE) or 0,
        status=ProjectStatus(status) if status else None,
        project_start_date=document.get(PROJECT_START_DATE),
        project_end_date=document.get(PROJECT_END_DATE),
        created_date=document.get(CREATED_DATE),
        updated_date=document.get(UPDATED_DATE),
        project_closed_date=document.get(PROJECT_CLOSED_DATE),
        is_removed=bool(document.get(IS_REMOVED, False)),
        participants=parse_participants(
            document.get(PARTICIPANT_IDS),
            document.get(PARTICIPANT_MAPPING),
        ),
    )
