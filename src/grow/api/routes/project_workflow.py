"""Participation and closure transitions."""

from fastapi import APIRouter

from grow.dependencies import CurrentUser, DBSession, Indexer
from grow.models.project import CloseProjectRequest, JoinProjectRequest, LeaveProjectRequest
from grow.services import workflow

router = APIRouter(tags=["Project workflow"])


@router.post("/project-workflow/join")
async def join_project(
    body: JoinProjectRequest,
    db: DBSession,
    indexer: Indexer,
    user: CurrentUser,
) -> dict:
    project = await workflow.join_project(
        db, body.project_id, body.owner_id, user["sub"], user.get("name", ""), indexer
    )
    return project.model_dump(mode="json")


@router.post("/project-workflow/leave")
async def leave_project(
    body: LeaveProjectRequest,
    db: DBSession,
    indexer: Indexer,
    user: CurrentUser,
) -> dict:
    project = await workflow.leave_project(db, body.project_id, body.owner_id, user["sub"], indexer)
    return project.model_dump(mode="json")


@router.post("/project-workflow/close")
async def close_project(
    body: CloseProjectRequest,
    db: DBSession,
    indexer: Indexer,
    user: CurrentUser,
) -> dict:
    project = await workflow.close_project(db, user["sub"], body, indexer)
    return project.model_dump(mode="json")
