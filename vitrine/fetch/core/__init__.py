"""Core components."""

from .cancellation import (
    CancellationSource,
    CancellationToken,
    check_cancellation,
    sleep_cancellable,
)
from .exceptions import (
    RETRYABLE_ERRORS,
    CancellationError,
    DecodingError,
    FetchError,
    PermanentServerError,
    RequestConstructionError,
    ServerError,
    TransientServerError,
    TransientTransportError,
    is_retryable,
)

__all__ = [
    "CancellationToken",
    "CancellationSource",
    "check_cancellation",
    "sleep_cancellable",
    "FetchError",
    "TransientTransportError",
    "ServerError",
    "TransientServerError",
    "PermanentServerError",
    "DecodingError",
    "RequestConstructionError",
    "CancellationError",
    "RETRYABLE_ERRORS",
    "is_retryable",
]
