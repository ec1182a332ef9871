"""Master API router mounted at /api/v1."""

from fastapi import APIRouter

from grow.api.routes import (
    health,
    project_workflow,
    projects,
    team_projects,
    team_skills,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(projects.router)
api_router.include_router(project_workflow.router)
api_router.include_router(team_projects.router)
api_router.include_router(team_skills.router)
