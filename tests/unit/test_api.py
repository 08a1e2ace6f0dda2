"""Unit tests for the function-style entry points."""

from __future__ import annotations

import pytest

from vitrine.fetch import CancellationError, CancellationSource, FetchProgress, resolve_all, stream


class TestResolveAll:
    """Test resolve_all."""

    @pytest.mark.asyncio
    async def test_resolves_pages(self):
        pages = {1: [1, 2], 2: [3]}
        requested: list[tuple[int, int]] = []

        async def page_fetch(page: int, page_size: int):
            requested.append((page, page_size))
            return 3, pages.get(page, [])

        ids = await resolve_all(page_fetch, page_size=2)

        assert ids == [1, 2, 3]
        assert requested == [(1, 2), (2, 2)]

    @pytest.mark.asyncio
    async def test_cancellation(self):
        source = CancellationSource()
        source.cancel()

        async def page_fetch(page: int, page_size: int):
            return 1, [1]

        with pytest.raises(CancellationError):
            await resolve_all(page_fetch, cancellation=source.token)


class TestStream:
    """Test stream."""

    @pytest.mark.asyncio
    async def test_streams_records(self):
        progress: list[FetchProgress] = []

        async def detail_fetch(identifier: int) -> str:
            return f"record-{identifier}"

        records = [
            r async for r in stream([1, 2, 3], 2, detail_fetch, progress=progress.append)
        ]

        assert sorted(records) == ["record-1", "record-2", "record-3"]
        assert [p.completed for p in progress] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_concurrency_zero(self):
        async def detail_fetch(identifier: int) -> int:
            return identifier

        assert [r async for r in stream([3, 1, 2], 0, detail_fetch)] == [3, 1, 2]
