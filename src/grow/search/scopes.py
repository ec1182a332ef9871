"""Map named discovery scopes onto complete search requests."""

from dataclasses import dataclass

from grow.models.enums import QueryType, SearchScope
from grow.search.documents import (
    CREATED_BY_NAME,
    CREATED_BY_USER_ID,
    CREATED_DATE,
    DESCRIPTION,
    FULL_PROJECTION,
    PARTICIPANT_IDS,
    REQUIRED_SKILLS,
    TITLE,
    UPDATED_DATE,
)
from grow.search.query_builder import MATCH_ALL, escape_for_query, quote_literal

NOT_REMOVED_FILTER = "(IsRemoved eq false)"


@dataclass(frozen=True)
class SearchRequest:
    """Everything the search backend needs to run one query."""

    search_text: str
    filter: str
    search_fields: tuple[str, ...]
    select: tuple[str, ...]
    order_by: tuple[str, ...] = ()
    top: int = 1500
    skip: int = 0
    query_type: QueryType = QueryType.SIMPLE


@dataclass(frozen=True)
class ScopeConfig:
    search_fields: tuple[str, ...] = (TITLE,)
    order_by: tuple[str, ...] = ()
    select: tuple[str, ...] = FULL_PROJECTION
    query_type: QueryType = QueryType.SIMPLE
    top: int | None = None
    escape_search_text: bool = False
    requires_user: bool = False


_NEWEST_FIRST = (f"{CREATED_DATE} desc",)
_RECENTLY_UPDATED_FIRST = (f"{UPDATED_DATE} desc",)

UNIQUE_SKILLS_TOP = 5000

SCOPE_TABLE: dict[SearchScope, ScopeConfig] = {
    SearchScope.ALL_PROJECTS: ScopeConfig(order_by=_NEWEST_FIRST),
    SearchScope.CREATED_PROJECTS_BY_USER: ScopeConfig(
        order_by=_NEWEST_FIRST,
        requires_user=True,
    ),
    SearchScope.JOINED_PROJECTS: ScopeConfig(
        search_fields=(PARTICIPANT_IDS,),
        order_by=_NEWEST_FIRST,
        requires_user=True,
    ),
    SearchScope.UNIQUE_SKILLS: ScopeConfig(
        search_fields=(REQUIRED_SKILLS,),
        select=(REQUIRED_SKILLS,),
        top=UNIQUE_SKILLS_TOP,
    ),
    SearchScope.FILTER_AS_PER_TEAM_SKILLS: ScopeConfig(
        search_fields=(REQUIRED_SKILLS,),
        order_by=_RECENTLY_UPDATED_FIRST,
    ),
    SearchScope.UNIQUE_PROJECT_OWNER_NAMES: ScopeConfig(
        order_by=_RECENTLY_UPDATED_FIRST,
        select=(CREATED_BY_NAME, CREATED_BY_USER_ID),
    ),
    SearchScope.SEARCH_PROJECTS: ScopeConfig(
        search_fields=(TITLE, DESCRIPTION, REQUIRED_SKILLS),
        order_by=_RECENTLY_UPDATED_FIRST,
        query_type=QueryType.FULL,
        escape_search_text=True,
    ),
    SearchScope.FILTER_TEAM_PROJECTS: ScopeConfig(
        search_fields=(REQUIRED_SKILLS,),
        order_by=_RECENTLY_UPDATED_FIRST,
    ),
}


def _search_text(scope: SearchScope, config: ScopeConfig, search_text: str | None, user_id: str | None) -> str:
    if scope == SearchScope.JOINED_PROJECTS:
        return user_id
    if scope == SearchScope.CREATED_PROJECTS_BY_USER:
        return MATCH_ALL
    if not search_text or not search_text.strip() or search_text == MATCH_ALL:
        return MATCH_ALL
    if config.escape_search_text:
        return escape_for_query(search_text)
    return search_text


def _filter(scope: SearchScope, user_id: str | None, filter_query: str | None) -> str:
    if scope == SearchScope.CREATED_PROJECTS_BY_USER:
        return f"{CREATED_BY_USER_ID} eq {quote_literal(user_id)} and {NOT_REMOVED_FILTER}"
    if filter_query:
        return f"{NOT_REMOVED_FILTER} and ({filter_query})"
    return NOT_REMOVED_FILTER


def resolve_scope(
    scope: SearchScope,
    search_text: str | None = None,
    user_id: str | None = None,
    top: int | None = None,
    skip: int | None = None,
    filter_query: str | None = None,
    default_top: int = 1500,
) -> SearchRequest:
    """Build the search request for ``scope``.

    ``search_text`` is raw user input; it is escaped here for the scopes that
    need it, so callers must not escape it themselves. ``filter_query`` is an
    already-built predicate (see query_builder) and is ANDed with the
    soft-delete filter.

    Raises:
        ValueError: unknown scope, or a user-bound scope without ``user_id``.
    """
    try:
        scope = SearchScope(scope)
        config = SCOPE_TABLE[scope]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown search scope: {scope!r}") from exc

    if config.requires_user and not user_id:
        raise ValueError(f"Scope {scope} requires a user id")

    return SearchRequest(
        search_text=_search_text(scope, config, search_text, user_id),
        filter=_filter(scope, user_id, filter_query),
        search_fields=config.search_fields,
        select=config.select,
        order_by=config.order_by,
        top=config.top or (top if top is not None else default_top),
        skip=skip or 0,
        query_type=config.query_type,
    )
