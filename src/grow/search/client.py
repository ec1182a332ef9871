"""Search Index Service client (Azure Cognitive Search REST API over httpx)."""

import logging
from typing import Any, Protocol

import httpx

from grow.config import Settings
from grow.errors.exceptions import SearchServiceError
from grow.models.project import Project
from grow.search.documents import project_from_document
from grow.search.pagination import ContinuationToken, SearchPage
from grow.search.scopes import SearchRequest

logger = logging.getLogger(__name__)

NEXT_PAGE_PARAMETERS = "@search.nextPageParameters"


class SearchIndexClient(Protocol):
    """What the discovery service needs from a search backend."""

    async def search(self, request: SearchRequest) -> SearchPage[Project]: ...

    async def continue_search(self, token: ContinuationToken) -> SearchPage[Project]: ...


def build_search_body(request: SearchRequest) -> dict[str, Any]:
    """Render a SearchRequest as an Azure Search POST body."""
    body: dict[str, Any] = {
        "search": request.search_text,
        "filter": request.filter,
        "searchFields": ",".join(request.search_fields),
        "select": ",".join(request.select),
        "top": request.top,
        "skip": request.skip,
        "queryType": str(request.query_type),
        "count": False,
    }
    if request.order_by:
        body["orderby"] = ",".join(request.order_by)
    return body


class AzureSearchClient:
    """Runs queries against one index and follows continuation pages."""

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self._http = http
        self._index_name = settings.search_index_name
        self._api_version = settings.search_api_version

    @classmethod
    def from_settings(cls, settings: Settings) -> "AzureSearchClient":
        http = httpx.AsyncClient(
            base_url=settings.search_endpoint,
            headers={"api-key": settings.search_api_key},
            timeout=settings.search_timeout_seconds,
        )
        return cls(http, settings)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def search(self, request: SearchRequest) -> SearchPage[Project]:
        return await self._post(build_search_body(request))

    async def continue_search(self, token: ContinuationToken) -> SearchPage[Project]:
        return await self._post(token.payload)

    async def _post(self, body: dict[str, Any]) -> SearchPage[Project]:
        url = f"/indexes/{self._index_name}/docs/search"
        try:
            resp = await self._http.post(url, params={"api-version": self._api_version}, json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("Search request failed with HTTP %d", status)
            raise SearchServiceError(f"Search service returned HTTP {status}", {"status": status}) from exc
        except httpx.TransportError as exc:
            logger.error("Search request failed: %s", exc)
            raise SearchServiceError("Search service unavailable") from exc

        data = resp.json()
        items = [project_from_document(doc) for doc in data.get("value", [])]
        next_parameters = data.get(NEXT_PAGE_PARAMETERS)
        token = ContinuationToken(next_parameters) if next_parameters else None
        return SearchPage(items=items, continuation_token=token)
