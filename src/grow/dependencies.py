"""FastAPI dependency injection providers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Query, Request

from grow.api.middleware.auth import ANONYMOUS
from grow.config import settings
from grow.errors.exceptions import AuthenticationError
from grow.search.client import SearchIndexClient
from grow.search.indexer import SearchIndexer
from grow.search.pagination import PageCursor

_AUTH_ERROR_MESSAGES = {
    "invalid_token": "Bearer token is invalid or expired",
    "missing_subject": "Bearer token carries no user id",
}


async def get_db(request: Request) -> AsyncGenerator:
    """Yield a database session from the app's session factory."""
    session_factory = request.app.state.db_session_factory
    async with session_factory() as session:
        yield session


def get_search_client(request: Request) -> SearchIndexClient:
    return request.app.state.search_client


def get_indexer(request: Request) -> SearchIndexer | None:
    return getattr(request.app.state, "indexer", None)


async def get_current_user(request: Request) -> dict:
    """Return the authenticated caller (``sub``, ``name``) or raise 401."""
    user = getattr(request.state, "user", None) or {}
    auth_error = user.get("_auth_error")
    if auth_error:
        raise AuthenticationError(_AUTH_ERROR_MESSAGES.get(auth_error, "Invalid credentials"))
    if user.get("sub", ANONYMOUS) == ANONYMOUS:
        raise AuthenticationError("Authentication required")
    return user


def get_page_cursor(page_count: int = Query(0)) -> PageCursor:
    """Caller page index for infinite scroll; negative values are rejected."""
    return PageCursor(page=page_count, page_size=settings.page_size)


# Type aliases for dependency injection
DBSession = Annotated[object, Depends(get_db)]
SearchClient = Annotated[SearchIndexClient, Depends(get_search_client)]
Indexer = Annotated[SearchIndexer | None, Depends(get_indexer)]
CurrentUser = Annotated[dict, Depends(get_current_user)]
Cursor = Annotated[PageCursor, Depends(get_page_cursor)]
