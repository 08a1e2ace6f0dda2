"""Window planning for streaming fetches."""

from __future__ import annotations

from collections.abc import Iterable

from .definitions import StreamPolicy, StreamWindow
from .telemetry import log_stream_plan


class WindowPlanner:
    """Partitions an identifier sequence into consecutive windows."""

    def __init__(self, policy: StreamPolicy | None = None) -> None:
        self._policy = policy or StreamPolicy()

    @property
    def window_size(self) -> int:
        return self._policy.window_size

    def plan(self, ids: Iterable[int]) -> list[StreamWindow]:
        """Split ``ids`` into windows of ``window_size`` identifiers.

        Order is preserved and duplicates are kept; the last window may be
        shorter than the others.

        Args:
            ids: Identifiers to fetch

        Returns:
            List of windows, empty if ``ids`` is empty
        """
        id_list = list(ids)
        size = self.window_size
        windows = [
            StreamWindow(index=i, ids=tuple(id_list[offset : offset + size]), offset=offset)
            for i, offset in enumerate(range(0, len(id_list), size))
        ]
        log_stream_plan(total_ids=len(id_list), window_size=size, total_windows=len(windows))
        return windows
