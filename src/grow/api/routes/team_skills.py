"""Team skill configuration and acquired skills."""

from fastapi import APIRouter

from grow.dependencies import CurrentUser, DBSession
from grow.models.skills import TeamSkillsUpdate
from grow.services import team_skills

router = APIRouter(tags=["Skills"])


@router.get("/team-skills/{team_id}")
async def get_team_skills(team_id: str, db: DBSession, user: CurrentUser) -> dict:
    config = await team_skills.get_team_skills(db, team_id)
    return config.model_dump(mode="json")


@router.post("/team-skills/{team_id}")
async def configure_team_skills(
    team_id: str,
    body: TeamSkillsUpdate,
    db: DBSession,
    user: CurrentUser,
) -> dict:
    config = await team_skills.upsert_team_skills(db, team_id, body.skills, user["sub"])
    return config.model_dump(mode="json")


@router.get("/acquired-skills")
async def acquired_skills(db: DBSession, user: CurrentUser) -> list[dict]:
    skills = await team_skills.list_acquired_skills(db, user["sub"])
    return [skill.model_dump(mode="json") for skill in skills]
