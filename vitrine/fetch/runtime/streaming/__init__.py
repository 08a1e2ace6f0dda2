"""Bounded-concurrency streaming layer.

Architecture:
    The streaming layer consists of:
    - definitions.py: Window metadata (StreamPolicy, StreamWindow, StreamStats)
    - planners.py: Window planning (splits identifiers into windows)
    - executors.py: Window execution (concurrent fetches, progress, cancellation)
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import StreamPolicy, StreamStats, StreamWindow
from .executors import DetailFetch, StreamingFetcher
from .planners import WindowPlanner

__all__ = [
    "StreamPolicy",
    "StreamWindow",
    "StreamStats",
    "WindowPlanner",
    "StreamingFetcher",
    "DetailFetch",
]
