"""Pagination tests: continuation draining and caller page cursors."""

import pytest

from grow.errors.exceptions import PaginationLimitError, ValidationError
from grow.search.pagination import (
    ContinuationToken,
    PageCursor,
    SearchPage,
    drain_all,
    has_more_page,
)


def _chain(pages: list[list[int]]):
    """Return the first page and a fetcher walking the rest of ``pages``."""

    def page_at(index: int) -> SearchPage[int]:
        token = ContinuationToken(index + 1) if index + 1 < len(pages) else None
        return SearchPage(pages[index], token)

    calls = []

    async def fetch_next(token: ContinuationToken) -> SearchPage[int]:
        calls.append(token.payload)
        return page_at(token.payload)

    return page_at(0), fetch_next, calls


async def test_drain_all_single_page():
    first, fetch_next, calls = _chain([[1, 2]])
    assert await drain_all(first, fetch_next) == [1, 2]
    assert calls == []


async def test_drain_all_concatenates_pages_in_order():
    first, fetch_next, calls = _chain([[1, 2], [3], [], [4, 5]])
    assert await drain_all(first, fetch_next) == [1, 2, 3, 4, 5]
    assert calls == [1, 2, 3]


async def test_drain_all_aborts_on_endless_chain():
    async def fetch_forever(token):
        return SearchPage([token.payload], ContinuationToken(token.payload + 1))

    with pytest.raises(PaginationLimitError) as exc_info:
        await drain_all(SearchPage([0], ContinuationToken(1)), fetch_forever, max_pages=5)
    assert exc_info.value.details == {"max_pages": 5}


async def test_drain_all_allows_exactly_max_pages():
    first, fetch_next, _ = _chain([[0], [1], [2]])
    assert await drain_all(first, fetch_next, max_pages=2) == [0, 1, 2]


def test_page_cursor_skip_and_top():
    cursor = PageCursor(page=3)
    assert cursor.skip == 150
    assert cursor.top == 50


def test_negative_page_cursor_is_rejected():
    with pytest.raises(ValidationError):
        PageCursor(page=-1)


def test_has_more_page():
    assert has_more_page(50) is True
    assert has_more_page(49) is False
    assert has_more_page(0) is False
    assert has_more_page(10, page_size=10) is True

