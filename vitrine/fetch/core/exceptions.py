"""Custom exception hierarchy."""

from __future__ import annotations

from ..models.events import RetryReason


class FetchError(Exception):
    """Base exception for all library errors."""

    pass


class TransientTransportError(FetchError):
    """Connection-level failure that may succeed on retry.

    Covers timeouts, connection resets and truncated payloads. The
    underlying aiohttp (or timeout) exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, error_type: str = "unknown") -> None:
        super().__init__(message)
        self.error_type = error_type

    @property
    def reason(self) -> RetryReason:
        return RetryReason.transport_error(self.error_type)


class ServerError(FetchError):
    """Non-2xx HTTP response from the remote collection API."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class TransientServerError(ServerError):
    """HTTP 429 or 5xx response."""

    @property
    def reason(self) -> RetryReason:
        return RetryReason.http_status(self.status_code)


class PermanentServerError(ServerError):
    """Any other non-2xx response. Never retried."""

    pass


class DecodingError(FetchError):
    """Payload does not match the expected shape."""

    pass


class RequestConstructionError(FetchError):
    """A request could not be built (bad URL, failing request builder)."""

    pass


class CancellationError(FetchError):
    """Cooperative cancellation was observed at a checkpoint."""

    def __init__(self, message: str = "Operation cancelled") -> None:
        super().__init__(message)


RETRYABLE_ERRORS: tuple[type[FetchError], ...] = (
    TransientTransportError,
    TransientServerError,
)


def is_retryable(exc: BaseException) -> bool:
    """Return True if ``exc`` is one of the transient error kinds."""
    return isinstance(exc, RETRYABLE_ERRORS)
