"""Unit tests for ValueCache and KeyedLRUCache."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from vitrine.fetch.cache import CachePolicy, KeyedLRUCache, ValueCache


class TestValueCache:
    """Test the single-slot cache."""

    @pytest.mark.asyncio
    async def test_empty_read(self):
        assert await ValueCache().read() is None

    @pytest.mark.asyncio
    async def test_store_and_read(self):
        cache: ValueCache[list[str]] = ValueCache()
        await cache.store(["Arms and Armor"])

        assert await cache.read() == ["Arms and Armor"]

    @pytest.mark.asyncio
    async def test_clear(self):
        cache: ValueCache[int] = ValueCache()
        await cache.store(1)
        await cache.clear()

        assert await cache.read() is None

    @pytest.mark.asyncio
    async def test_get_or_fetch_caches(self):
        cache: ValueCache[str] = ValueCache()
        fetch = AsyncMock(return_value="departments")

        first = await cache.get_or_fetch(fetch)
        second = await cache.get_or_fetch(fetch)

        assert first == second == "departments"
        assert fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_reload_always_fetches(self):
        cache: ValueCache[str] = ValueCache()
        fetch = AsyncMock(side_effect=["old", "new"])

        await cache.get_or_fetch(fetch)
        value = await cache.get_or_fetch(fetch, CachePolicy.RELOAD)

        assert value == "new"
        assert await cache.read() == "new"
        assert fetch.call_count == 2

    @pytest.mark.asyncio
    async def test_falsy_value_is_cached(self):
        cache: ValueCache[list] = ValueCache()
        fetch = AsyncMock(return_value=[])

        await cache.get_or_fetch(fetch)
        await cache.get_or_fetch(fetch)

        assert fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_failed_fetch_leaves_cache_unchanged(self):
        cache: ValueCache[str] = ValueCache()
        await cache.store("cached")

        with pytest.raises(RuntimeError):
            await cache.get_or_fetch(AsyncMock(side_effect=RuntimeError("down")), CachePolicy.RELOAD)

        assert await cache.read() == "cached"


class TestKeyedLRUCache:
    """Test the per-identifier LRU cache."""

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            KeyedLRUCache(0)

    @pytest.mark.asyncio
    async def test_get_missing(self):
        assert await KeyedLRUCache(2).get(1) is None

    @pytest.mark.asyncio
    async def test_evicts_least_recently_used(self):
        cache: KeyedLRUCache[int, str] = KeyedLRUCache(2)
        await cache.put(1, "a")
        await cache.put(2, "b")
        await cache.put(3, "c")

        assert await cache.get(1) is None
        assert await cache.keys() == [2, 3]
        assert await cache.size() == 2

    @pytest.mark.asyncio
    async def test_get_refreshes_recency(self):
        cache: KeyedLRUCache[int, str] = KeyedLRUCache(2)
        await cache.put(1, "a")
        await cache.put(2, "b")
        await cache.get(1)
        await cache.put(3, "c")

        assert await cache.get(1) == "a"
        assert await cache.get(2) is None

    @pytest.mark.asyncio
    async def test_put_overwrites_and_refreshes(self):
        cache: KeyedLRUCache[int, str] = KeyedLRUCache(2)
        await cache.put(1, "a")
        await cache.put(2, "b")
        await cache.put(1, "a2")
        await cache.put(3, "c")

        assert await cache.get(1) == "a2"
        assert await cache.keys() == [3, 1]

    @pytest.mark.asyncio
    async def test_capacity_one(self):
        cache: KeyedLRUCache[int, str] = KeyedLRUCache(1)
        await cache.put(1, "a")
        await cache.put(2, "b")

        assert await cache.keys() == [2]

    @pytest.mark.asyncio
    async def test_clear(self):
        cache: KeyedLRUCache[int, str] = KeyedLRUCache(3)
        await cache.put(1, "a")
        await cache.clear()

        assert await cache.size() == 0

    @pytest.mark.asyncio
    async def test_get_or_fetch(self):
        cache: KeyedLRUCache[int, dict] = KeyedLRUCache(4)
        fetch = AsyncMock(return_value={"objectID": 7})

        first = await cache.get_or_fetch(7, fetch)
        second = await cache.get_or_fetch(7, fetch)

        assert first == second == {"objectID": 7}
        assert fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_get_or_fetch_reload(self):
        cache: KeyedLRUCache[int, str] = KeyedLRUCache(4)
        await cache.put(7, "stale")

        value = await cache.get_or_fetch(7, AsyncMock(return_value="fresh"), CachePolicy.RELOAD)

        assert value == "fresh"
        assert await cache.get(7) == "fresh"

    @pytest.mark.asyncio
    async def test_get_or_fetch_none_value_cached(self):
        cache: KeyedLRUCache[int, None] = KeyedLRUCache(4)
        fetch = AsyncMock(return_value=None)

        await cache.get_or_fetch(1, fetch)
        await cache.get_or_fetch(1, fetch)

        assert fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_failed_fetch_leaves_cache_unchanged(self):
        cache: KeyedLRUCache[int, str] = KeyedLRUCache(4)
        await cache.put(1, "a")

        with pytest.raises(LookupError):
            await cache.get_or_fetch(2, AsyncMock(side_effect=LookupError("404")))

        assert await cache.keys() == [1]

    @pytest.mark.asyncio
    async def test_concurrent_puts_respect_capacity(self):
        cache: KeyedLRUCache[int, int] = KeyedLRUCache(5)

        await asyncio.gather(*(cache.put(i, i * i) for i in range(50)))

        assert await cache.size() == 5
        assert await cache.keys() == [45, 46, 47, 48, 49]
