"""Project repository: Record Store access with etag-conditional writes."""

import uuid
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from grow.db.models.project import ProjectRow
from grow.errors.exceptions import ConcurrencyConflict
from grow.models.enums import ProjectStatus
from grow.models.project import Project
from grow.repositories.base import BaseRepository
from grow.serialization import (
    join_tokens,
    parse_participants,
    participant_ids_string,
    participant_mapping_string,
    split_tokens,
)


def new_etag() -> str:
    return uuid.uuid4().hex


def project_from_row(row: ProjectRow) -> Project:
    return Project(
        project_id=row.project_id,
        created_by_user_id=row.created_by_user_id,
        created_by_name=row.created_by_name,
        title=row.title,
        description=row.description,
        required_skills=split_tokens(row.required_skills),
        support_documents=split_tokens(row.support_documents),
        team_size=row.team_size,
        status=ProjectStatus(row.status),
        project_start_date=row.project_start_date,
        project_end_date=row.project_end_date,
        created_date=row.created_date,
        updated_date=row.updated_date,
        project_closed_date=row.project_closed_date,
        is_removed=row.is_removed,
        participants=parse_participants(
            row.project_participants_user_ids,
            row.project_participants_user_mapping,
        ),
    )


def project_columns(project: Project) -> dict[str, Any]:
    """Column values for ``project``; the only place lists become strings."""
    return {
        "created_by_user_id": project.created_by_user_id,
        "created_by_name": project.created_by_name,
        "title": project.title,
        "description": project.description,
        "required_skills": join_tokens(project.required_skills),
        "support_documents": join_tokens(project.support_documents),
        "project_participants_user_ids": participant_ids_string(project.participants),
        "project_participants_user_mapping": participant_mapping_string(project.participants),
        "team_size": project.team_size,
        "status": int(project.status),
        "project_start_date": project.project_start_date,
        "project_end_date": project.project_end_date,
        "created_date": project.created_date,
        "updated_date": project.updated_date,
        "project_closed_date": project.project_closed_date,
        "is_removed": project.is_removed,
    }


class ProjectRepository(BaseRepository[ProjectRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ProjectRow)

    async def get(self, owner_id: str, project_id: str) -> ProjectRow | None:
        """Point read by (partition, row) key: owner id and project id."""
        return await self.get_by_key(created_by_user_id=owner_id, project_id=project_id)

    async def title_in_use(self, title: str, exclude_project_id: str | None = None) -> bool:
        """True if a live (not removed, not closed) project already has ``title``."""
        conditions = [
            func.lower(ProjectRow.title) == title.strip().lower(),
            ProjectRow.is_removed.is_(False),
            ProjectRow.status != int(ProjectStatus.CLOSED),
        ]
        if exclude_project_id:
            conditions.append(ProjectRow.project_id != exclude_project_id)
        stmt = select(func.count(ProjectRow.project_id)).where(*conditions)
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def upsert(self, project: Project) -> ProjectRow:
        """Unconditional insert-or-overwrite; stamps a fresh etag."""
        return await self.merge(
            ProjectRow(project_id=project.project_id, etag=new_etag(), **project_columns(project))
        )

    async def replace(self, project: Project, etag: str) -> str:
        """Overwrite the stored project only if it still carries ``etag``.

        Returns the new etag.

        Raises:
            ConcurrencyConflict: the record changed (or vanished) since it was read.
        """
        next_etag = new_etag()
        stmt = (
            update(ProjectRow)
            .where(ProjectRow.project_id == project.project_id, ProjectRow.etag == etag)
            .values(etag=next_etag, **project_columns(project))
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise ConcurrencyConflict(project.project_id)
        return next_etag
