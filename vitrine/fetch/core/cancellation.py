"""Cooperative cancellation primitives.

A ``CancellationToken`` is a read-only view of a cancellation request. It
never interrupts work on its own: the engine polls it at fixed checkpoints
(before each window, before each fetch, before each yield, before each
transport attempt and during backoff waits).

Usage:
    source = CancellationSource()
    async for record in fetcher.stream(ids, fetch, cancellation=source.token):
        if enough(record):
            source.cancel()
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Callable

from ..config import DEFAULT_CANCELLATION_POLL_INTERVAL
from .exceptions import CancellationError


class CancellationToken:
    """Polled cancellation predicate shared by every layer of the engine."""

    __slots__ = ("_predicate",)

    def __init__(self, predicate: Callable[[], bool]) -> None:
        self._predicate = predicate

    @property
    def is_cancelled(self) -> bool:
        return bool(self._predicate())

    @classmethod
    def never(cls) -> CancellationToken:
        """Token that is never cancelled."""
        return cls(lambda: False)

    @classmethod
    def from_event(cls, event: asyncio.Event | threading.Event) -> CancellationToken:
        """Token that reports cancelled once ``event`` is set."""
        return cls(event.is_set)

    def __repr__(self) -> str:
        return f"CancellationToken(is_cancelled={self.is_cancelled})"


class CancellationSource:
    """Owner side of a cancellation token.

    The source is held by whoever started the logical operation; only its
    ``token`` is handed to the engine.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self.token = CancellationToken(lambda: self._cancelled)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


def check_cancellation(token: CancellationToken | None) -> None:
    """Raise ``CancellationError`` if ``token`` reports a cancellation request.

    Args:
        token: Optional cancellation token; ``None`` is never cancelled

    Raises:
        CancellationError: If cancellation was requested
    """
    if token is not None and token.is_cancelled:
        raise CancellationError()


async def sleep_cancellable(
    delay: float,
    token: CancellationToken | None,
    *,
    poll_interval: float = DEFAULT_CANCELLATION_POLL_INTERVAL,
) -> None:
    """Sleep for ``delay`` seconds, waking early if ``token`` is cancelled.

    The token is polled every ``poll_interval`` seconds, so a cancelled
    operation blocks for at most one interval instead of the full delay.

    Args:
        delay: Seconds to wait
        token: Optional cancellation token
        poll_interval: Upper bound on the time between two polls

    Raises:
        CancellationError: If cancellation is observed before or during the wait
    """
    check_cancellation(token)
    if delay <= 0:
        return
    if token is None:
        await asyncio.sleep(delay)
        return

    deadline = time.monotonic() + delay
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return
        await asyncio.sleep(min(remaining, poll_interval))
        check_cancellation(token)
