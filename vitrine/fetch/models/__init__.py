"""Event models."""

from .events import (
    FetchProgress,
    ProgressHandler,
    RetryEvent,
    RetryEventHandler,
    RetryReason,
    RetryReasonKind,
)

__all__ = [
    "FetchProgress",
    "RetryEvent",
    "RetryReason",
    "RetryReasonKind",
    "RetryEventHandler",
    "ProgressHandler",
]
