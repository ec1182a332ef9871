"""Search client tests against a mocked Azure Search REST endpoint."""

import json

import httpx
import pytest

from grow.config import Settings
from grow.errors.exceptions import SearchServiceError
from grow.models.enums import ProjectStatus, SearchScope
from grow.search.client import AzureSearchClient, build_search_body
from grow.search.pagination import drain_all
from grow.search.scopes import resolve_scope

SETTINGS = Settings(search_index_name="projects-idx", search_api_version="2023-11-01")

DOCUMENT = {
    "ProjectId": "p-1",
    "Status": 2,
    "Title": "Telemetry",
    "RequiredSkills": "python; rust;",
    "SupportDocuments": "",
    "CreatedByUserId": "owner-1",
    "CreatedByName": "Olivia",
    "TeamSize": 3,
    "IsRemoved": False,
    "ProjectParticipantsUserIds": "u1;u2",
    "ProjectParticipantsUserMapping": "u1:Ann;u2:Bob",
    "CreatedDate": "2026-01-02T03:04:05Z",
}


def _client(handler) -> AzureSearchClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://search.test")
    return AzureSearchClient(http, SETTINGS)


def test_build_search_body():
    request = resolve_scope(SearchScope.SEARCH_PROJECTS, search_text="c#", top=50, skip=50)
    body = build_search_body(request)
    assert body["search"] == "c\\#"
    assert body["filter"] == "(IsRemoved eq false)"
    assert body["searchFields"] == "Title,Description,RequiredSkills"
    assert body["orderby"] == "UpdatedDate desc"
    assert body["queryType"] == "full"
    assert body["top"] == 50
    assert body["skip"] == 50


def test_build_search_body_omits_empty_order():
    body = build_search_body(resolve_scope(SearchScope.UNIQUE_SKILLS, search_text="*"))
    assert "orderby" not in body
    assert body["select"] == "RequiredSkills"


async def test_search_posts_query_and_parses_documents():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["api_version"] = request.url.params["api-version"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"value": [DOCUMENT]})

    client = _client(handler)
    page = await client.search(resolve_scope(SearchScope.ALL_PROJECTS))
    await client.aclose()

    assert seen["path"] == "/indexes/projects-idx/docs/search"
    assert seen["api_version"] == "2023-11-01"
    assert seen["body"]["search"] == "*"
    assert page.continuation_token is None

    [project] = page.items
    assert project.project_id == "p-1"
    assert project.status == ProjectStatus.ACTIVE
    assert project.required_skills == ["python", "rust"]
    assert project.participant_ids == ["u1", "u2"]
    assert project.participants[1].display_name == "Bob"
    assert project.created_date.tzinfo is not None


async def test_continuation_pages_are_followed():
    next_parameters = {"search": "*", "skip": 1000, "top": 500}
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        bodies.append(body)
        if body.get("skip") == 1000:
            return httpx.Response(200, json={"value": [{**DOCUMENT, "ProjectId": "p-2"}]})
        return httpx.Response(
            200,
            json={"value": [DOCUMENT], "@search.nextPageParameters": next_parameters},
        )

    client = _client(handler)
    first = await client.search(resolve_scope(SearchScope.ALL_PROJECTS))
    assert first.continuation_token is not None

    projects = await drain_all(first, client.continue_search)
    await client.aclose()

    assert [p.project_id for p in projects] == ["p-1", "p-2"]
    assert bodies[1] == next_parameters


async def test_narrow_projection_documents_parse():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"value": [{"RequiredSkills": "go;c#"}]})

    client = _client(handler)
    page = await client.search(resolve_scope(SearchScope.UNIQUE_SKILLS, search_text="*"))
    await client.aclose()
    assert page.items[0].required_skills == ["go", "c#"]
    assert page.items[0].status is None


async def test_http_error_becomes_search_service_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "busy"})

    client = _client(handler)
    with pytest.raises(SearchServiceError) as exc_info:
        await client.search(resolve_scope(SearchScope.ALL_PROJECTS))
    await client.aclose()
    assert exc_info.value.status_code == 502
    assert exc_info.value.details == {"status": 503}


async def test_transport_error_becomes_search_service_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(SearchServiceError):
        await client.search(resolve_scope(SearchScope.ALL_PROJECTS))
    await client.aclose()
