"""Project discovery: scope resolution, search, continuation draining and refinement.

``discover`` is the single entry point to the search backend. The other
functions compose it for one screen each and turn a caller page cursor into
``skip``/``top``. ``has_more`` is always computed from what the backend
returned, before any in-memory refinement drops projects.
"""

import asyncio
import logging

from grow.config import settings
from grow.errors.exceptions import SearchTimeoutError, ValidationError
from grow.models.enums import SearchScope
from grow.models.project import Project, ProjectListResponse
from grow.search.client import SearchIndexClient
from grow.search.pagination import PageCursor, drain_all, has_more_page
from grow.search.post_processing import (
    filter_by_participant,
    filter_by_skill_intersection,
    top_owner_names,
    unique_skills,
)
from grow.search.query_builder import (
    build_filter_query,
    build_skills_match_filter,
    build_skills_query,
)
from grow.search.scopes import resolve_scope
from grow.serialization import join_tokens, split_tokens

logger = logging.getLogger(__name__)


async def discover(
    client: SearchIndexClient,
    scope: SearchScope,
    search_text: str | None = None,
    user_id: str | None = None,
    top: int | None = None,
    skip: int | None = None,
    filter_query: str | None = None,
    timeout: float | None = None,
) -> list[Project]:
    """Run one scoped search and return every page of results, in order.

    Raises:
        SearchTimeoutError: the search and its continuation pages did not
            finish within ``timeout`` seconds; nothing partial is returned.
        SearchServiceError: the backend failed.
        PaginationLimitError: the continuation chain did not terminate.
    """
    if timeout is None:
        timeout = settings.search_timeout_seconds
    request = resolve_scope(
        scope,
        search_text=search_text,
        user_id=user_id,
        top=top,
        skip=skip,
        filter_query=filter_query,
        default_top=settings.search_default_top,
    )

    try:
        async with asyncio.timeout(timeout):
            first_page = await client.search(request)
            projects = await drain_all(
                first_page, client.continue_search, max_pages=settings.max_drain_pages
            )
    except TimeoutError as exc:
        logger.warning("Search for scope %s timed out after %ss", scope, timeout)
        raise SearchTimeoutError(timeout) from exc

    logger.debug("Scope %s returned %d projects (skip=%d)", scope, len(projects), request.skip)
    return projects


def _page(projects: list[Project], raw_count: int, cursor: PageCursor) -> ProjectListResponse:
    return ProjectListResponse(
        projects=projects,
        page_count=cursor.page,
        has_more=has_more_page(raw_count, cursor.page_size),
    )


async def _discover_page(
    client: SearchIndexClient, scope: SearchScope, cursor: PageCursor, **kwargs
) -> list[Project]:
    return await discover(client, scope, top=cursor.top, skip=cursor.skip, **kwargs)


async def list_projects(client: SearchIndexClient, cursor: PageCursor) -> ProjectListResponse:
    """Default discovery feed, newest first."""
    projects = await _discover_page(client, SearchScope.ALL_PROJECTS, cursor)
    return _page(projects, len(projects), cursor)


async def search_projects(
    client: SearchIndexClient, search_text: str | None, cursor: PageCursor
) -> ProjectListResponse:
    """Free-text search over title, description and skills."""
    projects = await _discover_page(
        client, SearchScope.SEARCH_PROJECTS, cursor, search_text=search_text
    )
    return _page(projects, len(projects), cursor)


async def filter_projects(
    client: SearchIndexClient,
    cursor: PageCursor,
    statuses: str | None = None,
    owner_names: str | None = None,
    skills: str | None = None,
) -> ProjectListResponse:
    """Filter-bar results; ``statuses``, ``owner_names`` and ``skills`` are ``;``-delimited."""
    projects = await _discover_page(
        client,
        SearchScope.FILTER_TEAM_PROJECTS,
        cursor,
        search_text=build_skills_query(skills),
        filter_query=build_filter_query(statuses, owner_names),
    )
    raw_count = len(projects)
    if split_tokens(skills):
        projects = filter_by_skill_intersection(projects, skills)
    return _page(projects, raw_count, cursor)


async def joined_projects(
    client: SearchIndexClient, user_id: str, cursor: PageCursor
) -> ProjectListResponse:
    """Projects the user participates in."""
    projects = await _discover_page(
        client, SearchScope.JOINED_PROJECTS, cursor, user_id=user_id
    )
    return _page(filter_by_participant(projects, user_id), len(projects), cursor)


async def created_projects(
    client: SearchIndexClient, user_id: str, cursor: PageCursor
) -> ProjectListResponse:
    """Projects owned by the user."""
    projects = await _discover_page(
        client, SearchScope.CREATED_PROJECTS_BY_USER, cursor, user_id=user_id
    )
    return _page(projects, len(projects), cursor)


async def list_unique_skills(client: SearchIndexClient, search_text: str) -> list[str]:
    """Distinct skills across live projects that contain ``search_text``."""
    if not search_text or not search_text.strip():
        raise ValidationError("Search text is required", {"search_text": search_text})
    search_text = search_text.strip()
    projects = await discover(client, SearchScope.UNIQUE_SKILLS, search_text=search_text)
    return unique_skills(projects, search_text)


async def list_project_owner_names(client: SearchIndexClient) -> list[str]:
    """Names of the owners with the most live projects, alphabetically."""
    projects = await discover(client, SearchScope.UNIQUE_PROJECT_OWNER_NAMES)
    return top_owner_names(projects, limit=settings.max_owner_names)


async def team_projects(
    client: SearchIndexClient, team_skills: list[str], cursor: PageCursor
) -> ProjectListResponse:
    """Projects sharing at least one skill with the team."""
    skills = join_tokens(team_skills)
    projects = await _discover_page(
        client,
        SearchScope.FILTER_AS_PER_TEAM_SKILLS,
        cursor,
        search_text=build_skills_query(skills),
    )
    return _page(filter_by_skill_intersection(projects, skills), len(projects), cursor)


async def team_filtered_projects(
    client: SearchIndexClient,
    team_skills: list[str],
    cursor: PageCursor,
    statuses: str | None = None,
    owner_names: str | None = None,
    skills: str | None = None,
) -> ProjectListResponse:
    """Filter-bar results restricted to the team's skills.

    Selected ``skills`` outside the team's set are ignored; with none
    selected every team skill applies.
    """
    team_set = set(team_skills)
    selected = [skill for skill in split_tokens(skills) if skill in team_set]
    effective = join_tokens(selected or team_skills)

    projects = await _discover_page(
        client,
        SearchScope.FILTER_TEAM_PROJECTS,
        cursor,
        search_text=build_skills_query(effective),
        filter_query=build_filter_query(statuses, owner_names),
    )
    return _page(filter_by_skill_intersection(projects, effective), len(projects), cursor)


async def team_search_projects(
    client: SearchIndexClient,
    team_skills: list[str],
    search_text: str | None,
    cursor: PageCursor,
) -> ProjectListResponse:
    """Free-text search limited to projects matching any team skill."""
    projects = await _discover_page(
        client,
        SearchScope.SEARCH_PROJECTS,
        cursor,
        search_text=search_text,
        filter_query=build_skills_match_filter(join_tokens(team_skills)),
    )
    return _page(projects, len(projects), cursor)


async def team_project_owner_names(client: SearchIndexClient, team_skills: list[str]) -> list[str]:
    """Top owner names among the projects matching the team's skills."""
    if not team_skills:
        return []
    skills = join_tokens(team_skills)
    projects = await discover(
        client, SearchScope.FILTER_AS_PER_TEAM_SKILLS, search_text=build_skills_query(skills)
    )
    projects = filter_by_skill_intersection(projects, skills)
    return top_owner_names(projects, limit=settings.max_owner_names)
