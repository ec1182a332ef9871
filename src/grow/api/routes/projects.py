"""Project API routes: discovery feeds and owner CRUD."""

from fastapi import APIRouter, Query

from grow.dependencies import CurrentUser, Cursor, DBSession, Indexer, SearchClient
from grow.models.project import ProjectCreate, ProjectUpdate
from grow.services import discovery, workflow

router = APIRouter(tags=["Projects"])


@router.get("/projects")
async def list_projects(search: SearchClient, cursor: Cursor, user: CurrentUser) -> dict:
    page = await discovery.list_projects(search, cursor)
    return page.model_dump(mode="json")


@router.post("/projects", status_code=201)
async def create_project(
    body: ProjectCreate,
    db: DBSession,
    indexer: Indexer,
    user: CurrentUser,
) -> dict:
    project = await workflow.create_project(db, body, user["sub"], user.get("name", ""), indexer)
    return project.model_dump(mode="json")


@router.get("/projects/search")
async def search_projects(
    search: SearchClient,
    cursor: Cursor,
    user: CurrentUser,
    search_text: str | None = Query(None),
) -> dict:
    page = await discovery.search_projects(search, search_text, cursor)
    return page.model_dump(mode="json")


@router.get("/projects/filter")
async def filter_projects(
    search: SearchClient,
    cursor: Cursor,
    user: CurrentUser,
    status: str | None = Query(None, description="';'-delimited status codes"),
    owner_names: str | None = Query(None, description="';'-delimited owner names"),
    skills: str | None = Query(None, description="';'-delimited skills"),
) -> dict:
    page = await discovery.filter_projects(
        search, cursor, statuses=status, owner_names=owner_names, skills=skills
    )
    return page.model_dump(mode="json")


@router.get("/projects/unique-skills")
async def unique_skills(
    search: SearchClient,
    user: CurrentUser,
    search_text: str = Query(""),
) -> list[str]:
    return await discovery.list_unique_skills(search, search_text)


@router.get("/projects/owners")
async def project_owner_names(search: SearchClient, user: CurrentUser) -> list[str]:
    return await discovery.list_project_owner_names(search)


@router.get("/projects/joined")
async def joined_projects(search: SearchClient, cursor: Cursor, user: CurrentUser) -> dict:
    page = await discovery.joined_projects(search, user["sub"], cursor)
    return page.model_dump(mode="json")


@router.get("/projects/created")
async def created_projects(search: SearchClient, cursor: Cursor, user: CurrentUser) -> dict:
    page = await discovery.created_projects(search, user["sub"], cursor)
    return page.model_dump(mode="json")


@router.get("/projects/{owner_id}/{project_id}")
async def get_project(owner_id: str, project_id: str, db: DBSession, user: CurrentUser) -> dict:
    project = await workflow.get_project(db, owner_id, project_id)
    return project.model_dump(mode="json")


@router.patch("/projects/{project_id}")
async def edit_project(
    project_id: str,
    body: ProjectUpdate,
    db: DBSession,
    indexer: Indexer,
    user: CurrentUser,
) -> dict:
    project = await workflow.edit_project(db, user["sub"], project_id, body, indexer)
    return project.model_dump(mode="json")


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    db: DBSession,
    indexer: Indexer,
    user: CurrentUser,
) -> None:
    await workflow.delete_project(db, user["sub"], project_id, indexer)
