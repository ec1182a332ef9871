"""Two independent pagination layers.

* ``ContinuationToken`` belongs to the search backend: a page may come back
  with a token meaning "more results for this same request". ``drain_all``
  follows the chain until it ends.
* ``PageCursor`` belongs to the caller: an infinite-scroll page index that
  becomes ``skip = cursor * page_size`` on the next request. A page shorter
  than ``page_size`` means the caller has reached the end.

Neither layer looks at the other.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from grow.errors.exceptions import PaginationLimitError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 50
DEFAULT_MAX_PAGES = 1000


@dataclass(frozen=True)
class ContinuationToken:
    """Opaque backend cursor; only the search client reads ``payload``."""

    payload: Any = field(compare=False)


@dataclass
class SearchPage(Generic[T]):
    items: list[T]
    continuation_token: ContinuationToken | None = None


async def drain_all(
    first_page: SearchPage[T],
    fetch_next: Callable[[ContinuationToken], Awaitable[SearchPage[T]]],
    max_pages: int = DEFAULT_MAX_PAGES,
) -> list[T]:
    """Concatenate ``first_page`` and every continuation page, in order.

    Pages are requested one at a time since each depends on the previous
    token.

    Raises:
        PaginationLimitError: the chain did not end within ``max_pages``
            follow-up requests.
    """
    items = list(first_page.items)
    token = first_page.continuation_token
    pages = 0
    while token is not None:
        if pages >= max_pages:
            logger.error("Continuation chain exceeded %d pages, aborting", max_pages)
            raise PaginationLimitError(max_pages)
        page = await fetch_next(token)
        pages += 1
        items.extend(page.items)
        token = page.continuation_token
    if pages:
        logger.debug("Drained %d continuation pages (%d items)", pages, len(items))
    return items


@dataclass(frozen=True)
class PageCursor:
    """Caller-side page index for infinite scroll."""

    page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page < 0:
            raise ValidationError("Page count cannot be less than zero", {"page_count": self.page})
        if self.page_size < 1:
            raise ValidationError("Page size must be positive", {"page_size": self.page_size})

    @property
    def skip(self) -> int:
        return self.page * self.page_size

    @property
    def top(self) -> int:
        return self.page_size


def has_more_page(returned_count: int, page_size: int = DEFAULT_PAGE_SIZE) -> bool:
    """A page with fewer than ``page_size`` results was the last one."""
    return returned_count >= page_size
