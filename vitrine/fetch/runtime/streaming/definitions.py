"""Window metadata for bounded-concurrency streaming.

A stream is split into consecutive windows of at most ``concurrency``
identifiers. Every detail fetch of one window runs concurrently; windows
run one after another.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...config import DEFAULT_CONCURRENCY


@dataclass(frozen=True)
class StreamPolicy:
    """Concurrency policy for a streaming fetcher.

    Attributes:
        concurrency: Detail fetches issued together per window. Values below
            1 are treated as 1.
    """

    concurrency: int = DEFAULT_CONCURRENCY

    @property
    def window_size(self) -> int:
        return max(1, self.concurrency)


@dataclass(frozen=True)
class StreamWindow:
    """One batch of identifiers fetched together.

    Attributes:
        index: Zero-based position of the window in the stream
        ids: Identifiers fetched by this window
        offset: Position of the window's first identifier in the full id list
    """

    index: int
    ids: tuple[int, ...]
    offset: int = 0

    def __len__(self) -> int:
        return len(self.ids)


@dataclass
class StreamStats:
    """Bookkeeping owned by the coordinating generator of one stream.

    Attributes:
        total: Identifiers requested
        completed: Records fetched and yielded so far
        windows_started: Windows whose tasks were created
        windows_completed: Windows fully drained
    """

    total: int
    completed: int = 0
    windows_started: int = 0
    windows_completed: int = 0
