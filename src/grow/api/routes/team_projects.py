"""Discovery scoped to a team's configured skills."""

from fastapi import APIRouter, Query

from grow.dependencies import CurrentUser, Cursor, DBSession, SearchClient
from grow.services import discovery, team_skills

router = APIRouter(tags=["Team projects"])


@router.get("/teams/{team_id}/projects")
async def team_projects(
    team_id: str,
    db: DBSession,
    search: SearchClient,
    cursor: Cursor,
    user: CurrentUser,
) -> dict:
    skills = await team_skills.require_team_skills(db, team_id)
    page = await discovery.team_projects(search, skills, cursor)
    return page.model_dump(mode="json")


@router.get("/teams/{team_id}/projects/filter")
async def team_filtered_projects(
    team_id: str,
    db: DBSession,
    search: SearchClient,
    cursor: Cursor,
    user: CurrentUser,
    status: str | None = Query(None),
    owner_names: str | None = Query(None),
    skills: str | None = Query(None),
) -> dict:
    team = await team_skills.require_team_skills(db, team_id)
    page = await discovery.team_filtered_projects(
        search, team, cursor, statuses=status, owner_names=owner_names, skills=skills
    )
    return page.model_dump(mode="json")


@router.get("/teams/{team_id}/projects/search")
async def team_search_projects(
    team_id: str,
    db: DBSession,
    search: SearchClient,
    cursor: Cursor,
    user: CurrentUser,
    search_text: str | None = Query(None),
) -> dict:
    skills = await team_skills.require_team_skills(db, team_id)
    page = await discovery.team_search_projects(search, skills, search_text, cursor)
    return page.model_dump(mode="json")


@router.get("/teams/{team_id}/projects/owners")
async def team_project_owner_names(
    team_id: str,
    db: DBSession,
    search: SearchClient,
    user: CurrentUser,
) -> list[str]:
    skills = await team_skills.team_skills_or_empty(db, team_id)
    return await discovery.team_project_owner_names(search, skills)
