"""
Cursor pagination for GoCardless list endpoints.

This module turns a single-page fetch function into a lazy traversal of every
page, either as a blocking item iterator or as an async iterator of pages.
A run starts with no cursor and follows each page's ``after`` cursor until the
server returns a page without one.
"""

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from ._logging import logger
from .config import PaginationOptions
from .exceptions import PaginationLoopError

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """
    Represents a single page of results with its pagination cursors.

    Attributes:
        items: Resources on this page, in server order
        after: Cursor for the next page (None if this is the last page)
        before: Cursor for the previous page, when the server sends one
    """

    items: list[T]
    after: str | None
    before: str | None = None

    @property
    def count(self) -> int:
        """Number of items on this page."""
        return len(self.items)

    @property
    def has_more(self) -> bool:
        """Returns True if there are more pages available."""
        return self.after is not None


FetchPage = Callable[[str | None], Page[T]]
AsyncFetchPage = Callable[[str | None], Awaitable[Page[T]]]


class _RunState:
    """Per-run bookkeeping: page counter, seen cursors and optional guards."""

    def __init__(self, options: PaginationOptions | None) -> None:
        self.options = options or PaginationOptions()
        self.pages = 0
        self.items = 0
        self.seen: set[str] = set()

    def can_fetch(self) -> bool:
        max_pages = self.options.max_pages
        if max_pages is not None and self.pages >= max_pages:
            logger.warning(
                "Pagination stopped at page limit",
                extra={"pages": self.pages, "max_pages": max_pages},
            )
            return False
        return True

    def record(self, page: Page[T], cursor: str | None) -> None:
        self.pages += 1
        self.items += page.count
        logger.debug(
            "Fetched page",
            extra={"page": self.pages, "has_cursor": cursor is not None, "count": page.count},
        )

        if not self.options.detect_repeated_cursor:
            return
        if cursor is not None:
            self.seen.add(cursor)
        if page.after is not None and page.after in self.seen:
            raise PaginationLoopError(cursor=page.after, page_number=self.pages)

    def finish(self) -> None:
        logger.debug("Pagination finished", extra={"pages": self.pages, "items": self.items})


def iterate_pages(
    fetch_page: FetchPage[T], options: PaginationOptions | None = None
) -> Iterator[Page[T]]:
    """
    Lazily fetches every page of a cursor-paginated listing.

    The first call to ``fetch_page`` receives ``None``; every later call
    receives the ``after`` cursor of the previous page. The next page is only
    fetched once the consumer asks for it, so closing the generator stops all
    further requests. Exceptions raised by ``fetch_page`` propagate unchanged.

    Args:
        fetch_page: Callable performing exactly one page request for a cursor
        options: Optional guards (page cap, repeated-cursor detection)

    Yields:
        Page objects in server order
    """
    state = _RunState(options)
    cursor: str | None = None
    while state.can_fetch():
        page = fetch_page(cursor)
        state.record(page, cursor)
        yield page
        if page.after is None:
            state.finish()
            return
        cursor = page.after


def iterate_items(fetch_page: FetchPage[T], options: PaginationOptions | None = None) -> Iterator[T]:
    """
    Lazily yields every item across every page, page order then item order.

    Each call starts a fresh run; the returned generator cannot be restarted.
    """
    for page in iterate_pages(fetch_page, options):
        yield from page.items


async def iterate_pages_async(
    fetch_page: AsyncFetchPage[T], options: PaginationOptions | None = None
) -> AsyncIterator[list[T]]:
    """
    Async counterpart of :func:`iterate_pages` that yields page contents.

    Every step of the iterator awaits exactly one page fetch. The cursor for
    the following step is kept here and never handed to the consumer, so at
    most one fetch per run is ever in flight.

    Usage:
        async for customers in client.customers.all_async():
            for customer in customers:
                ...
    """
    state = _RunState(options)
    cursor: str | None = None
    while state.can_fetch():
        page = await fetch_page(cursor)
        state.record(page, cursor)
        yield page.items
        if page.after is None:
            state.finish()
            return
        cursor = page.after
