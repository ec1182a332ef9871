"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grow.api.middleware.auth import AuthMiddleware
from grow.api.middleware.trace_id import TraceIdMiddleware
from grow.api.router import api_router
from grow.config import settings
from grow.db.engine import create_db_engine, create_session_factory
from grow.errors.handlers import register_exception_handlers
from grow.logging_config import configure_logging
from grow.search.client import AzureSearchClient
from grow.search.indexer import SearchIndexer

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=not settings.local_mode)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    engine = create_db_engine()

    # Auto-create tables for SQLite (local dev, no migrations)
    if "sqlite" in settings.effective_database_url:
        from grow.db.base import Base
        import grow.db.models  # noqa: F401  register all ORM models

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite tables created (local mode)")

    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)

    app.state.search_client = AzureSearchClient.from_settings(settings)
    indexer_http = httpx.AsyncClient(
        base_url=settings.search_endpoint,
        headers={"api-key": settings.search_api_key},
        timeout=settings.search_timeout_seconds,
    )
    app.state.indexer = SearchIndexer.from_settings(settings, indexer_http)

    logger.info(
        "Grow API started (db=%s, index=%s)",
        "sqlite" if "sqlite" in settings.effective_database_url else "postgresql",
        settings.search_index_name,
    )
    yield

    # Shutdown
    await app.state.search_client.aclose()
    await indexer_http.aclose()
    await engine.dispose()
    logger.info("Grow API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Grow API",
        version="1.0.0",
        description="Internal project discovery, participation and skill tracking.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Order matters: last added = first executed
    app.add_middleware(AuthMiddleware)
    app.add_middleware(TraceIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()
