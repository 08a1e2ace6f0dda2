"""Function-style entry points for callers that do not subclass CollectionClient."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterable
from typing import TypeVar

from .config import DEFAULT_PAGE_SIZE
from .core.cancellation import CancellationToken
from .models.events import ProgressHandler
from .runtime.resolver import IdentifierResolver, PageFetch
from .runtime.streaming import DetailFetch, StreamingFetcher

T = TypeVar("T")


async def resolve_all(
    page_fetch: PageFetch,
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    start_page: int = 1,
    cancellation: CancellationToken | None = None,
) -> list[int]:
    """Resolve every identifier served by ``page_fetch``.

    See ``IdentifierResolver.resolve_all``.
    """
    return await IdentifierResolver(page_size=page_size).resolve_all(
        page_fetch, start_page=start_page, cancellation=cancellation
    )


def stream(
    ids: Iterable[int],
    concurrency: int,
    detail_fetch: DetailFetch[T],
    progress: ProgressHandler | None = None,
    cancellation: CancellationToken | None = None,
) -> AsyncGenerator[T, None]:
    """Stream records for ``ids`` with at most ``concurrency`` fetches in flight.

    See ``StreamingFetcher.stream``.
    """
    return StreamingFetcher(concurrency=concurrency).stream(
        ids, detail_fetch, progress=progress, cancellation=cancellation
    )
