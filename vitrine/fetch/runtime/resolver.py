"""Identifier resolution across paginated search/listing endpoints."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import NamedTuple

from ..config import DEFAULT_PAGE_SIZE
from ..core.cancellation import CancellationToken, check_cancellation
from .streaming.telemetry import log_resolver_complete, log_resolver_page


class IdentifierPage(NamedTuple):
    """One page of identifiers.

    Attributes:
        total: Total matching records reported by the server
        ids: Identifiers on this page
    """

    total: int
    ids: list[int]


PageFetch = Callable[[int, int], Awaitable[tuple[int, list[int]]]]


class IdentifierResolver:
    """Accumulates the full identifier list for a query, page by page.

    The total reported by the first page is authoritative; an empty page ends
    resolution early so a server that over-reports its total cannot cause an
    endless loop. Errors from ``page_fetch`` propagate unchanged: retrying is
    the transport's job.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    async def resolve_all(
        self,
        page_fetch: PageFetch,
        page_size: int | None = None,
        *,
        start_page: int = 1,
        cancellation: CancellationToken | None = None,
    ) -> list[int]:
        """Fetch pages until every identifier has been collected.

        Args:
            page_fetch: Coroutine function ``(page, page_size) -> (total, ids)``
            page_size: Page size override for this call
            start_page: First page to request (values below 1 mean 1)
            cancellation: Optional cancellation token

        Returns:
            Identifiers in page order, duplicates preserved

        Raises:
            ValueError: If page_size is below 1
            CancellationError: If cancellation is observed between pages
        """
        effective_page_size = self._page_size if page_size is None else page_size
        if effective_page_size < 1:
            raise ValueError("page_size must be >= 1")

        check_cancellation(cancellation)

        ids: list[int] = []
        page = max(1, start_page)
        expected: int | None = None
        pages = 0

        while True:
            total, page_ids = await page_fetch(page, effective_page_size)
            pages += 1
            check_cancellation(cancellation)

            if expected is None:
                expected = total
                if expected == 0:
                    break

            ids.extend(page_ids)
            log_resolver_page(
                page=page, page_ids=len(page_ids), accumulated=len(ids), expected=expected
            )

            if len(ids) >= expected or not page_ids:
                break
            page += 1

        log_resolver_complete(pages=pages, total_ids=len(ids), expected=expected or 0)
        return ids
