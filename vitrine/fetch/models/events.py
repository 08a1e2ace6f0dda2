"""Immutable events surfaced to callers: progress and retry notifications."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class RetryReasonKind(str, Enum):
    """What triggered a retry."""

    HTTP_STATUS = "http_status"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class RetryReason:
    """Why a request retry was triggered.

    Attributes:
        kind: HTTP status class or transport error class
        status_code: HTTP status code (HTTP_STATUS only)
        error_type: Name of the transport exception (TRANSPORT_ERROR only)
    """

    kind: RetryReasonKind
    status_code: int | None = None
    error_type: str | None = None

    @classmethod
    def http_status(cls, status_code: int) -> RetryReason:
        return cls(kind=RetryReasonKind.HTTP_STATUS, status_code=status_code)

    @classmethod
    def transport_error(cls, error_type: str) -> RetryReason:
        return cls(kind=RetryReasonKind.TRANSPORT_ERROR, error_type=error_type)

    def __str__(self) -> str:
        if self.kind == RetryReasonKind.HTTP_STATUS:
            return f"http_status({self.status_code})"
        return f"transport_error({self.error_type})"


@dataclass(frozen=True)
class RetryEvent:
    """Metadata emitted immediately before a retry backoff.

    Attributes:
        attempt: Retry number, starting at 1 for the first retry
        delay: Backoff delay in seconds about to be taken
        reason: Status or error that triggered the retry
    """

    attempt: int
    delay: float
    reason: RetryReason


@dataclass(frozen=True)
class FetchProgress:
    """Progress snapshot emitted once per successfully fetched record.

    Attributes:
        completed: Records fetched so far
        total: Records expected for this stream
    """

    completed: int
    total: int

    @property
    def fraction(self) -> float:
        if self.total <= 0:
            return 1.0
        return self.completed / self.total


RetryEventHandler = Callable[[RetryEvent], None]
ProgressHandler = Callable[[FetchProgress], None]
