"""On-demand indexer run tests."""

import httpx

from grow.search.indexer import SearchIndexer


def _indexer(responses: list[int], calls: list[httpx.Request], retry_delay: float = 0) -> SearchIndexer:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(responses[min(len(calls), len(responses)) - 1])

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://search.test")
    return SearchIndexer(
        http,
        indexer_name="projects-indexer",
        api_version="2023-11-01",
        retry_delay=retry_delay,
    )


async def test_run_succeeds_first_time():
    calls = []
    indexer = _indexer([202], calls)
    assert await indexer.run_on_demand() is True
    assert len(calls) == 1
    assert calls[0].url.path == "/indexers/projects-indexer/run"
    assert calls[0].url.params["api-version"] == "2023-11-01"


async def test_conflict_and_throttling_are_retried():
    calls = []
    indexer = _indexer([409, 429, 202], calls)
    assert await indexer.run_on_demand() is True
    assert len(calls) == 3


async def test_gives_up_after_retries_without_raising():
    calls = []
    indexer = _indexer([409], calls)
    assert await indexer.run_on_demand() is False
    assert len(calls) == 3


async def test_other_errors_are_not_retried():
    calls = []
    indexer = _indexer([500], calls)
    assert await indexer.run_on_demand() is False
    assert len(calls) == 1


async def test_transport_failure_is_non_fatal():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="https://search.test")
    indexer = SearchIndexer(http, "projects-indexer", "2023-11-01", retry_delay=0)
    assert await indexer.run_on_demand() is False


async def test_backoff_is_linear(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("grow.search.indexer.asyncio.sleep", fake_sleep)
    calls = []
    indexer = _indexer([429, 429, 429], calls, retry_delay=2.0)
    assert await indexer.run_on_demand() is False
    assert delays == [2.0, 4.0]
