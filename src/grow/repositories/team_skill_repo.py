"""Team skill configuration repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from grow.db.models.team_skill import TeamSkillRow
from grow.models.skills import TeamSkillConfiguration
from grow.repositories.base import BaseRepository
from grow.serialization import join_tokens, split_tokens


def team_skills_from_row(row: TeamSkillRow) -> TeamSkillConfiguration:
    return TeamSkillConfiguration(
        team_id=row.team_id,
        skills=split_tokens(row.skills),
        created_by_user_id=row.created_by_user_id,
        updated_by_user_id=row.updated_by_user_id,
        created_date=row.created_date,
        updated_date=row.updated_date,
    )


class TeamSkillRepository(BaseRepository[TeamSkillRow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, TeamSkillRow)

    async def get(self, team_id: str) -> TeamSkillConfiguration | None:
        row = await self.get_by_key(team_id=team_id)
        return team_skills_from_row(row) if row else None

    async def upsert(self, team_id: str, skills: list[str], user_id: str) -> TeamSkillConfiguration:
        """Create the configuration or replace its skills, keeping the creator."""
        row = await self.get_by_key(team_id=team_id)
        if row is None:
            row = await self.create(
                team_id=team_id,
                skills=join_tokens(skills),
                created_by_user_id=user_id,
                updated_by_user_id=user_id,
            )
        else:
            row = await self.update(row, skills=join_tokens(skills), updated_by_user_id=user_id)
        return team_skills_from_row(row)
