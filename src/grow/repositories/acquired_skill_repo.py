"""Acquired skill repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from grow.db.models.acquired_skill import AcquiredSkillRow
from grow.models.skills import AcquiredSkill
from grow.repositories.base import BaseRepository
from grow.serialization import join_tokens, split_tokens


class AcquiredSkillRepository(BaseRepository[AcquiredSkillRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, AcquiredSkillRow)

    async def upsert(self, skill: AcquiredSkill) -> AcquiredSkillRow:
        """Insert or overwrite the record keyed by (user_id, project_id)."""
        return await self.merge(
            AcquiredSkillRow(
                user_id=skill.user_id,
                project_id=skill.project_id,
                acquired_skills=join_tokens(skill.acquired_skills),
                feedback=skill.feedback,
                project_title=skill.project_title,
                project_owner_name=skill.project_owner_name,
                project_closed_date=skill.project_closed_date,
                created_date=skill.created_date,
            )
        )

    async def list_for_user(self, user_id: str) -> list[AcquiredSkill]:
        stmt = (
            select(AcquiredSkillRow)
            .where(AcquiredSkillRow.user_id == user_id)
            .order_by(AcquiredSkillRow.project_closed_date.desc())
        )
        result = await self.session.execute(stmt)
        return [
            AcquiredSkill(
                user_id=row.user_id,
                project_id=row.project_id,
                acquired_skills=split_tokens(row.acquired_skills),
                feedback=row.feedback,
                project_title=row.project_title,
                project_owner_name=row.project_owner_name,
                project_closed_date=row.project_closed_date,
                created_date=row.created_date,
            )
            for row in result.scalars().all()
        ]
