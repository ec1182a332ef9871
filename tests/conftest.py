"""Shared test fixtures."""

import re
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from grow.config import settings
from grow.db.base import Base
# Import all models to register with Base.metadata
import grow.db.models  # noqa: F401
from grow.db.models.project import ProjectRow
from grow.models.project import Project
from grow.search import documents
from grow.search.documents import project_from_document
from grow.search.pagination import ContinuationToken, SearchPage
from grow.search.scopes import SearchRequest

_OWNER_FILTER = re.compile(r"CreatedByUserId eq '((?:[^']|'')*)'")
_SORT_KEYS = {
    "CreatedDate desc": lambda p: p.created_date,
    "UpdatedDate desc": lambda p: p.updated_date,
}


class FakeSearchIndex:
    """In-memory stand-in for the search service.

    Honors the soft-delete and owner filters, ordering, skip and top; other
    predicates are recorded but not evaluated. With ``page_size`` set, results
    are split into continuation pages.
    """

    def __init__(self, page_size: int | None = None):
        self.documents: list[Project] = []
        self.requests: list[SearchRequest] = []
        self.page_size = page_size
        self.continuations = 0

    def add(self, *projects: Project) -> None:
        self.documents.extend(projects)

    async def search(self, request: SearchRequest) -> SearchPage[Project]:
        self.requests.append(request)
        items = [p for p in self.documents if not p.is_removed]

        owner = _OWNER_FILTER.search(request.filter)
        if owner:
            owner_id = owner.group(1).replace("''", "'")
            items = [p for p in items if p.created_by_user_id == owner_id]

        for order in request.order_by:
            key = _SORT_KEYS.get(order)
            if key:
                items.sort(key=lambda p: key(p) or datetime.min.replace(tzinfo=timezone.utc), reverse=True)

        return self._page(items[request.skip:request.skip + request.top])

    async def continue_search(self, token: ContinuationToken) -> SearchPage[Project]:
        self.continuations += 1
        return self._page(token.payload)

    def _page(self, items: list[Project]) -> SearchPage[Project]:
        if self.page_size and len(items) > self.page_size:
            return SearchPage(items[:self.page_size], ContinuationToken(items[self.page_size:]))
        return SearchPage(items)

    @property
    def last_request(self) -> SearchRequest:
        return self.requests[-1]


def document_from_row(row: ProjectRow) -> dict:
    """Index document for a project row, column for field as the indexer maps them."""
    return {
        documents.PROJECT_ID: row.project_id,
        documents.STATUS: row.status,
        documents.TITLE: row.title,
        documents.DESCRIPTION: row.description,
        documents.SUPPORT_DOCUMENTS: row.support_documents,
        documents.REQUIRED_SKILLS: row.required_skills,
        documents.PROJECT_START_DATE: row.project_start_date,
        documents.PROJECT_END_DATE: row.project_end_date,
        documents.CREATED_DATE: row.created_date,
        documents.CREATED_BY_NAME: row.created_by_name,
        documents.UPDATED_DATE: row.updated_date,
        documents.CREATED_BY_USER_ID: row.created_by_user_id,
        documents.TEAM_SIZE: row.team_size,
        documents.IS_REMOVED: row.is_removed,
        documents.PARTICIPANT_IDS: row.project_participants_user_ids,
        documents.PARTICIPANT_MAPPING: row.project_participants_user_mapping,
        documents.PROJECT_CLOSED_DATE: row.project_closed_date,
    }


class FakeIndexer:
    """Copies every project row into the fake index as index documents."""

    def __init__(self, session_factory, index: FakeSearchIndex):
        self._session_factory = session_factory
        self._index = index
        self.runs = 0

    async def run_on_demand(self) -> bool:
        self.runs += 1
        async with self._session_factory() as session:
            result = await session.execute(select(ProjectRow))
            self._index.documents = [
                project_from_document(document_from_row(row))
                for row in result.scalars().all()
            ]
        return True


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def search_index():
    return FakeSearchIndex()


@pytest.fixture
def indexer(session_factory, search_index):
    return FakeIndexer(session_factory, search_index)


@pytest.fixture
def app(db_engine, session_factory, search_index, indexer):
    """Create a test application instance with in-memory DB and fake search."""
    from grow.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = session_factory
    _app.state.search_client = search_index
    _app.state.indexer = indexer
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_token(user_id: str, name: str = "", **claims) -> str:
    payload = {
        "oid": user_id,
        "name": name,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=30),
        **claims,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a caller."""

    def _headers(user_id: str = "user-owner", name: str = "Olivia Owner") -> dict:
        return {"Authorization": f"Bearer {make_token(user_id, name)}"}

    return _headers


@pytest.fixture
def project_payload():
    """A valid create-project body; override fields per test."""

    def _payload(**overrides) -> dict:
        now = datetime.now(timezone.utc)
        body = {
            "title": "Realtime telemetry dashboard",
            "description": "Build a dashboard that streams device telemetry into charts. " * 5,
            "required_skills": ["python", "react"],
            "support_documents": ["https://contoso.com/docs/telemetry"],
            "team_size": 2,
            "project_start_date": now.isoformat(),
            "project_end_date": (now + timedelta(days=30)).isoformat(),
        }
        body.update(overrides)
        return body

    return _payload
