"""Team skill configuration and per-user acquired skills."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from grow.errors.exceptions import NotFoundError
from grow.models.skills import AcquiredSkill, TeamSkillConfiguration
from grow.repositories.acquired_skill_repo import AcquiredSkillRepository
from grow.repositories.team_skill_repo import TeamSkillRepository

logger = logging.getLogger(__name__)


async def get_team_skills(session: AsyncSession, team_id: str) -> TeamSkillConfiguration:
    config = await TeamSkillRepository(session).get(team_id)
    if config is None:
        raise NotFoundError("Team skills", team_id)
    return config


async def require_team_skills(session: AsyncSession, team_id: str) -> list[str]:
    """Skills configured for ``team_id``; a team without skills is not found."""
    config = await get_team_skills(session, team_id)
    if not config.skills:
        raise NotFoundError("Team skills", team_id)
    return config.skills


async def team_skills_or_empty(session: AsyncSession, team_id: str) -> list[str]:
    config = await TeamSkillRepository(session).get(team_id)
    return config.skills if config else []


async def upsert_team_skills(
    session: AsyncSession, team_id: str, skills: list[str], user_id: str
) -> TeamSkillConfiguration:
    """Create or replace the team's skill set; the first configurer stays creator."""
    config = await TeamSkillRepository(session).upsert(team_id, skills, user_id)
    await session.commit()
    logger.info("Team %s skills configured by %s (%d skills)", team_id, user_id, len(skills))
    return config


async def list_acquired_skills(session: AsyncSession, user_id: str) -> list[AcquiredSkill]:
    """Skills the user acquired across closed projects, most recent first."""
    return await AcquiredSkillRepository(session).list_for_user(user_id)
