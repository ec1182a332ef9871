"""On-demand indexer runs that refresh the search index after writes."""

import asyncio
import logging
import uuid

import httpx

from grow.config import Settings

logger = logging.getLogger(__name__)

# Another run already in progress, or the service is throttling us.
_RETRYABLE_STATUS = {409, 429}


class SearchIndexer:
    """Triggers the indexer that copies project records into the search index.

    A run is a side effect of a successful write, so failures are logged and
    reported as ``False``; they never fail the write itself.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        indexer_name: str,
        api_version: str,
        retry_attempts: int = 2,
        retry_delay: float = 2.0,
    ):
        self._http = http
        self._indexer_name = indexer_name
        self._api_version = api_version
        self._retry_attempts = retry_attempts
        self._retry_delay = retry_delay

    @classmethod
    def from_settings(cls, settings: Settings, http: httpx.AsyncClient) -> "SearchIndexer":
        return cls(
            http,
            indexer_name=settings.search_indexer_name,
            api_version=settings.search_api_version,
            retry_attempts=settings.indexer_retry_attempts,
            retry_delay=settings.indexer_retry_delay_seconds,
        )

    async def run_on_demand(self) -> bool:
        """Request an indexer run, retrying conflicts/throttling with linear backoff."""
        request_id = uuid.uuid4().hex[:12]
        url = f"/indexers/{self._indexer_name}/run"

        for attempt in range(self._retry_attempts + 1):
            logger.info("On-demand indexer run #%s - start (attempt %d)", request_id, attempt + 1)
            try:
                resp = await self._http.post(url, params={"api-version": self._api_version})
            except httpx.TransportError as exc:
                logger.error("On-demand indexer run #%s failed: %s", request_id, exc)
                return False

            if resp.status_code < 300:
                logger.info("On-demand indexer run #%s - complete", request_id)
                return True
            if resp.status_code in _RETRYABLE_STATUS and attempt < self._retry_attempts:
                await asyncio.sleep(self._retry_delay * (attempt + 1))
                continue

            logger.error(
                "On-demand indexer run #%s failed with HTTP %d", request_id, resp.status_code
            )
            return False

        return False
