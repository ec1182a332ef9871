"""Liveness and readiness endpoints."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from grow.logging_config import SERVICE_NAME
from grow.models.common import HealthStatus, ReadinessReport

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> HealthStatus:
    return HealthStatus(service=SERVICE_NAME, version=SERVICE_VERSION)


@router.get("/health/live")
async def liveness():
    return {"status": "alive"}


async def _database_check(request: Request) -> str:
    try:
        async with request.app.state.db_session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Readiness: Record Store unreachable: %s", exc)
        return f"error: {exc.__class__.__name__}"
    return "ok"


@router.get("/health/ready")
async def readiness(request: Request):
    """200 once the Record Store answers and a search client is wired; 503 otherwise."""
    checks = {
        "database": await _database_check(request),
        "search": "configured" if getattr(request.app.state, "search_client", None) else "missing",
    }
    ready = checks["database"] == "ok" and checks["search"] == "configured"
    report = ReadinessReport(status="ready" if ready else "not_ready", checks=checks)
    return JSONResponse(status_code=200 if ready else 503, content=report.model_dump())
