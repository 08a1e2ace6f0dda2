"""Base class for museum collection clients.

Concrete clients (one per collection API) implement the two fetch hooks;
identifier resolution, streaming, retries and caching come from the engine.

Architecture:
    fetch_id_page ──> IdentifierResolver ──┐
                                           ├──> StreamingFetcher ──> records
    fetch_object ──> KeyedLRUCache (opt.) ─┘
    All network calls go through one RetryingTransport owned by the client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Iterable
from typing import Any, Generic, TypeVar

from ..cache import CachePolicy, KeyedLRUCache, ValueCache
from ..config import DEFAULT_CONCURRENCY, DEFAULT_OBJECT_CACHE_CAPACITY, DEFAULT_PAGE_SIZE
from ..core.cancellation import CancellationToken
from ..models.events import ProgressHandler
from ..runtime.resolver import IdentifierPage, IdentifierResolver
from ..runtime.rest import RetryingTransport
from ..runtime.streaming import StreamingFetcher, StreamPolicy

T = TypeVar("T")


class CollectionClient(ABC, Generic[T]):
    """Generic paginated collection client.

    Subclasses implement ``fetch_id_page`` and ``fetch_object`` (and
    optionally ``fetch_departments``) using ``self.transport``.
    """

    def __init__(
        self,
        transport: RetryingTransport,
        *,
        concurrency: int = DEFAULT_CONCURRENCY,
        page_size: int = DEFAULT_PAGE_SIZE,
        object_cache_capacity: int = DEFAULT_OBJECT_CACHE_CAPACITY,
    ) -> None:
        """Initialize collection client.

        Args:
            transport: Retrying transport used for every request
            concurrency: Detail fetches issued together per window
            page_size: Identifiers requested per page
            object_cache_capacity: Records kept by the per-identifier cache
        """
        self.transport = transport
        self._resolver = IdentifierResolver(page_size=page_size)
        self._fetcher = StreamingFetcher(StreamPolicy(concurrency=concurrency))
        self._object_cache: KeyedLRUCache[int, T] = KeyedLRUCache(object_cache_capacity)
        self._departments_cache: ValueCache[Any] = ValueCache()

    @property
    def concurrency(self) -> int:
        return self._fetcher.concurrency

    @abstractmethod
    async def fetch_id_page(
        self,
        page: int,
        page_size: int,
        cancellation: CancellationToken | None = None,
    ) -> IdentifierPage:
        """Fetch one page of identifiers for the client's query."""
        ...

    @abstractmethod
    async def fetch_object(
        self,
        object_id: int,
        cancellation: CancellationToken | None = None,
    ) -> T:
        """Fetch the full record for one identifier."""
        ...

    async def fetch_departments(self, cancellation: CancellationToken | None = None) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not expose departments")

    async def object(
        self,
        object_id: int,
        policy: CachePolicy = CachePolicy.USE_CACHE,
        *,
        cancellation: CancellationToken | None = None,
    ) -> T:
        """Fetch one record through the per-identifier LRU cache."""
        return await self._object_cache.get_or_fetch(
            object_id,
            lambda: self.fetch_object(object_id, cancellation),
            policy,
        )

    async def departments(
        self,
        policy: CachePolicy = CachePolicy.USE_CACHE,
        *,
        cancellation: CancellationToken | None = None,
    ) -> Any:
        """Fetch the department list through the single-slot cache."""
        return await self._departments_cache.get_or_fetch(
            lambda: self.fetch_departments(cancellation),
            policy,
        )

    async def object_ids(
        self,
        *,
        start_page: int = 1,
        cancellation: CancellationToken | None = None,
    ) -> list[int]:
        """Resolve every identifier matched by the client's query."""

        async def page_fetch(page: int, page_size: int) -> IdentifierPage:
            return await self.fetch_id_page(page, page_size, cancellation)

        return await self._resolver.resolve_all(
            page_fetch, start_page=start_page, cancellation=cancellation
        )

    def objects(
        self,
        ids: Iterable[int],
        *,
        progress: ProgressHandler | None = None,
        cancellation: CancellationToken | None = None,
        policy: CachePolicy | None = None,
    ) -> AsyncGenerator[T, None]:
        """Stream records for ``ids``.

        Args:
            ids: Identifiers to fetch
            progress: Called after each completed record
            cancellation: Optional cancellation token
            policy: When given, each fetch goes through the per-identifier cache

        Returns:
            Lazy, single-pass async iterator of records
        """

        async def detail_fetch(object_id: int) -> T:
            if policy is None:
                return await self.fetch_object(object_id, cancellation)
            return await self.object(object_id, policy, cancellation=cancellation)

        return self._fetcher.stream(
            ids, detail_fetch, progress=progress, cancellation=cancellation
        )

    async def all_objects(
        self,
        *,
        progress: ProgressHandler | None = None,
        cancellation: CancellationToken | None = None,
    ) -> AsyncGenerator[T, None]:
        """Resolve every identifier, then stream the matching records."""
        ids = await self.object_ids(cancellation=cancellation)
        stream = self.objects(ids, progress=progress, cancellation=cancellation)
        try:
            async for record in stream:
                yield record
        finally:
            await stream.aclose()

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> CollectionClient[T]:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
