"""Structured logging for streaming fetches and identifier resolution.

This module provides telemetry hooks for the engine, emitting structured
logs (event name as message, fields in ``extra``) for observability.
"""

from __future__ import annotations

import logging

from .definitions import StreamStats, StreamWindow

logger = logging.getLogger(__name__)


def log_stream_plan(*, total_ids: int, window_size: int, total_windows: int) -> None:
    """Log window plan creation.

    Args:
        total_ids: Identifiers to fetch
        window_size: Maximum identifiers per window
        total_windows: Number of windows planned
    """
    logger.debug(
        "stream_plan_created",
        extra={
            "total_ids": total_ids,
            "window_size": window_size,
            "total_windows": total_windows,
        },
    )


def log_window_started(*, window: StreamWindow) -> None:
    logger.debug(
        "stream_window_started",
        extra={
            "window_index": window.index,
            "window_offset": window.offset,
            "window_ids": len(window),
        },
    )


def log_window_completed(
    *,
    window: StreamWindow,
    records: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single window.

    Args:
        window: Window that completed
        records: Records yielded from this window
        latency_ms: Time from window start to its last record (optional)
    """
    logger.debug(
        "stream_window_completed",
        extra={
            "window_index": window.index,
            "records": records,
            "latency_ms": latency_ms,
        },
    )


def log_stream_complete(*, stats: StreamStats, total_latency_ms: float | None = None) -> None:
    logger.info(
        "stream_complete",
        extra={
            "total": stats.total,
            "completed": stats.completed,
            "windows_completed": stats.windows_completed,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_stream_error(
    *,
    stats: StreamStats,
    window_index: int | None,
    error_type: str,
    error_message: str,
) -> None:
    """Log the error that terminated a stream.

    Args:
        stats: Stream bookkeeping at the time of failure
        window_index: Window in flight when the stream failed
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "stream_error",
        extra={
            "window_index": window_index,
            "completed": stats.completed,
            "total": stats.total,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_stream_cancelled(*, stats: StreamStats, window_index: int | None) -> None:
    logger.info(
        "stream_cancelled",
        extra={
            "window_index": window_index,
            "completed": stats.completed,
            "total": stats.total,
        },
    )


def log_resolver_page(*, page: int, page_ids: int, accumulated: int, expected: int) -> None:
    logger.debug(
        "resolver_page_fetched",
        extra={
            "page": page,
            "page_ids": page_ids,
            "accumulated": accumulated,
            "expected": expected,
        },
    )


def log_resolver_complete(*, pages: int, total_ids: int, expected: int) -> None:
    """Log the end of identifier resolution.

    Args:
        pages: Pages requested
        total_ids: Identifiers accumulated
        expected: Total reported by the first page
    """
    logger.info(
        "resolver_complete",
        extra={
            "pages": pages,
            "total_ids": total_ids,
            "expected": expected,
        },
    )
