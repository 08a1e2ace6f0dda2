"""Bounded-concurrency streaming fetcher.

This module provides the StreamingFetcher class that turns an identifier
sequence and a detail-fetch coroutine into a lazy async stream of records.

Architecture:
    - Identifiers are planned into windows of ``concurrency`` ids
    - All fetches of one window run as concurrent asyncio tasks; records are
      yielded in completion order
    - The next window starts only after the current one has drained, so at
      most ``concurrency`` fetch tasks exist at any instant
    - The async generator is the single owner of the progress counter; fetch
      tasks only return a record or raise

Cancellation checkpoints:
    Before each window, inside each task before its fetch, and after each
    record completes right before it is yielded.

Failure:
    The first error (cancellation or otherwise) cancels the window's sibling
    tasks and terminates the stream. Records already yielded stay valid.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, Awaitable, Callable, Iterable
from time import perf_counter
from typing import TypeVar

from ...core.cancellation import CancellationToken, check_cancellation
from ...core.exceptions import CancellationError
from ...models.events import FetchProgress, ProgressHandler
from .definitions import StreamPolicy, StreamStats
from .planners import WindowPlanner
from .telemetry import (
    log_stream_cancelled,
    log_stream_complete,
    log_stream_error,
    log_window_completed,
    log_window_started,
)

T = TypeVar("T")

DetailFetch = Callable[[int], Awaitable[T]]


class StreamingFetcher:
    """Fetches records for identifiers window by window.

    A fetcher holds only its policy; every call to ``stream`` creates an
    independent, single-pass stream.
    """

    def __init__(
        self,
        policy: StreamPolicy | None = None,
        *,
        concurrency: int | None = None,
    ) -> None:
        """Initialize streaming fetcher.

        Args:
            policy: Streaming policy (takes precedence over ``concurrency``)
            concurrency: Shorthand for ``StreamPolicy(concurrency=...)``
        """
        if policy is None:
            policy = StreamPolicy() if concurrency is None else StreamPolicy(concurrency)
        self._policy = policy
        self._planner = WindowPlanner(policy)

    @property
    def concurrency(self) -> int:
        return self._policy.window_size

    async def stream(
        self,
        ids: Iterable[int],
        detail_fetch: DetailFetch[T],
        *,
        progress: ProgressHandler | None = None,
        cancellation: CancellationToken | None = None,
    ) -> AsyncGenerator[T, None]:
        """Stream the records for ``ids``.

        Nothing is fetched until the first record is requested. Closing the
        stream early cancels and awaits the in-flight window's tasks.

        Args:
            ids: Identifiers to fetch (duplicates are fetched twice)
            detail_fetch: Coroutine function fetching one record
            progress: Called with a FetchProgress after each completed record
            cancellation: Optional cancellation token

        Yields:
            Records in window order; completion order within a window

        Raises:
            CancellationError: If cancellation is observed at a checkpoint
            Exception: The first error raised by ``detail_fetch``
        """
        windows = self._planner.plan(ids)
        stats = StreamStats(total=sum(len(window) for window in windows))
        stream_start = perf_counter()
        window_index: int | None = None

        try:
            for window in windows:
                window_index = window.index
                check_cancellation(cancellation)

                window_start = perf_counter()
                stats.windows_started += 1
                log_window_started(window=window)

                tasks = [
                    asyncio.create_task(self._fetch_one(identifier, detail_fetch, cancellation))
                    for identifier in window.ids
                ]
                records = 0
                try:
                    for next_done in asyncio.as_completed(tasks):
                        record = await next_done
                        check_cancellation(cancellation)
                        stats.completed += 1
                        records += 1
                        if progress is not None:
                            progress(FetchProgress(completed=stats.completed, total=stats.total))
                        yield record
                finally:
                    await _abandon(tasks)

                latency_ms = (perf_counter() - window_start) * 1000.0
                stats.windows_completed += 1
                log_window_completed(window=window, records=records, latency_ms=latency_ms)

            check_cancellation(cancellation)
        except CancellationError:
            log_stream_cancelled(stats=stats, window_index=window_index)
            raise
        except Exception as e:
            log_stream_error(
                stats=stats,
                window_index=window_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        log_stream_complete(
            stats=stats, total_latency_ms=(perf_counter() - stream_start) * 1000.0
        )

    @staticmethod
    async def _fetch_one(
        identifier: int,
        detail_fetch: DetailFetch[T],
        cancellation: CancellationToken | None,
    ) -> T:
        check_cancellation(cancellation)
        return await detail_fetch(identifier)


async def _abandon(tasks: list[asyncio.Task[T]]) -> None:
    """Cancel unfinished tasks and wait until all of them have settled."""
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
