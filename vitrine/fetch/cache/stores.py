"""In-memory caches for collection clients.

Both caches serialize every operation behind one ``asyncio.Lock`` so no
caller observes a half-applied read or write. The lock is never held across
the underlying fetch of ``get_or_fetch``: two concurrent misses may both
fetch, and the later store wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable, Hashable
from enum import Enum
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CachePolicy(str, Enum):
    """Whether a lookup may be served from cache."""

    USE_CACHE = "use_cache"
    RELOAD = "reload"


_MISSING = object()


class ValueCache(Generic[V]):
    """Single-slot cache for low-cardinality resources (e.g. departments)."""

    def __init__(self) -> None:
        self._value: object = _MISSING
        self._lock = asyncio.Lock()

    async def read(self) -> V | None:
        """Return the held value, or None when empty."""
        async with self._lock:
            if self._value is _MISSING:
                return None
            return self._value  # type: ignore[return-value]

    async def store(self, value: V) -> None:
        async with self._lock:
            self._value = value

    async def clear(self) -> None:
        async with self._lock:
            self._value = _MISSING

    async def get_or_fetch(
        self,
        fetch: Callable[[], Awaitable[V]],
        policy: CachePolicy = CachePolicy.USE_CACHE,
    ) -> V:
        """Return the cached value or fetch, store and return a fresh one.

        Args:
            fetch: Coroutine function producing the value
            policy: USE_CACHE serves a held value; RELOAD always fetches

        Returns:
            Cached or freshly fetched value

        Raises:
            Exception: Whatever ``fetch`` raises; the cache is left unchanged
        """
        if policy == CachePolicy.USE_CACHE:
            async with self._lock:
                if self._value is not _MISSING:
                    return self._value  # type: ignore[return-value]

        value = await fetch()
        await self.store(value)
        return value


class KeyedLRUCache(Generic[K, V]):
    """Capacity-bounded least-recently-used cache for per-identifier lookups."""

    def __init__(self, capacity: int) -> None:
        """Initialize LRU cache.

        Args:
            capacity: Maximum number of keys held (must be >= 1)

        Raises:
            ValueError: If capacity is below 1
        """
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._capacity = capacity
        # Least recently used first
        self._storage: OrderedDict[K, V] = OrderedDict()
        self._lock = asyncio.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    async def get(self, key: K) -> V | None:
        """Return the value for ``key`` and mark it most recently used."""
        async with self._lock:
            value = self._get_locked(key)
        return None if value is _MISSING else value  # type: ignore[return-value]

    async def put(self, key: K, value: V) -> None:
        """Insert or overwrite ``key``, evicting the LRU key when over capacity."""
        async with self._lock:
            self._storage[key] = value
            self._storage.move_to_end(key)
            while len(self._storage) > self._capacity:
                evicted, _ = self._storage.popitem(last=False)
                logger.debug(f"Evicted {evicted!r} from LRU cache")

    async def clear(self) -> None:
        async with self._lock:
            self._storage.clear()

    async def size(self) -> int:
        async with self._lock:
            return len(self._storage)

    async def keys(self) -> list[K]:
        """Keys from least to most recently used."""
        async with self._lock:
            return list(self._storage)

    async def get_or_fetch(
        self,
        key: K,
        fetch: Callable[[], Awaitable[V]],
        policy: CachePolicy = CachePolicy.USE_CACHE,
    ) -> V:
        """Return the cached value for ``key`` or fetch, store and return it.

        Args:
            key: Cache key
            fetch: Coroutine function producing the value for ``key``
            policy: USE_CACHE serves a held value; RELOAD always fetches

        Returns:
            Cached or freshly fetched value

        Raises:
            Exception: Whatever ``fetch`` raises; the cache is left unchanged
        """
        if policy == CachePolicy.USE_CACHE:
            async with self._lock:
                cached = self._get_locked(key)
            if cached is not _MISSING:
                return cached  # type: ignore[return-value]

        value = await fetch()
        await self.put(key, value)
        return value

    def _get_locked(self, key: K) -> object:
        if key not in self._storage:
            return _MISSING
        self._storage.move_to_end(key)
        return self._storage[key]
