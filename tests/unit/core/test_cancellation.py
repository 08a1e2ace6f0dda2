"""Unit tests for cooperative cancellation primitives."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from vitrine.fetch.core import (
    CancellationError,
    CancellationSource,
    CancellationToken,
    check_cancellation,
    sleep_cancellable,
)


class TestCancellationToken:
    """Test CancellationToken and CancellationSource."""

    def test_token_reads_predicate_on_every_access(self):
        """Token reflects the predicate's current value, not a snapshot."""
        state = {"cancelled": False}
        token = CancellationToken(lambda: state["cancelled"])

        assert token.is_cancelled is False
        state["cancelled"] = True
        assert token.is_cancelled is True

    def test_never(self):
        assert CancellationToken.never().is_cancelled is False

    def test_source_cancel(self):
        source = CancellationSource()
        token = source.token

        assert not source.cancelled
        assert not token.is_cancelled

        source.cancel()

        assert source.cancelled
        assert token.is_cancelled

    def test_from_threading_event(self):
        event = threading.Event()
        token = CancellationToken.from_event(event)

        assert not token.is_cancelled
        event.set()
        assert token.is_cancelled

    @pytest.mark.asyncio
    async def test_from_asyncio_event(self):
        event = asyncio.Event()
        token = CancellationToken.from_event(event)

        assert not token.is_cancelled
        event.set()
        assert token.is_cancelled


class TestCheckCancellation:
    """Test check_cancellation checkpoint helper."""

    def test_none_token_never_raises(self):
        check_cancellation(None)

    def test_raises_when_cancelled(self):
        source = CancellationSource()
        source.cancel()

        with pytest.raises(CancellationError):
            check_cancellation(source.token)

    def test_passes_when_not_cancelled(self):
        check_cancellation(CancellationSource().token)


class TestSleepCancellable:
    """Test interruptible backoff waits."""

    @pytest.mark.asyncio
    async def test_sleeps_full_delay_without_token(self):
        start = time.monotonic()
        await sleep_cancellable(0.05, None)
        assert time.monotonic() - start >= 0.04

    @pytest.mark.asyncio
    async def test_sleeps_full_delay_when_not_cancelled(self):
        source = CancellationSource()
        start = time.monotonic()
        await sleep_cancellable(0.05, source.token, poll_interval=0.01)
        assert time.monotonic() - start >= 0.04

    @pytest.mark.asyncio
    async def test_wakes_early_on_cancellation(self):
        """A cancelled wait ends within one poll interval, not the full delay."""
        source = CancellationSource()
        asyncio.get_running_loop().call_later(0.02, source.cancel)

        start = time.monotonic()
        with pytest.raises(CancellationError):
            await sleep_cancellable(5.0, source.token, poll_interval=0.01)

        assert time.monotonic() - start < 1.0

    @pytest.mark.asyncio
    async def test_already_cancelled_raises_even_with_zero_delay(self):
        source = CancellationSource()
        source.cancel()

        with pytest.raises(CancellationError):
            await sleep_cancellable(0, source.token)

    @pytest.mark.asyncio
    async def test_zero_delay_returns_immediately(self):
        await sleep_cancellable(0, CancellationSource().token)
