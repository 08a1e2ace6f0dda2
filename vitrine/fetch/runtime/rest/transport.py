"""Retrying REST transport.

Executes one logical request on top of ``HTTPClient``: classifies the
outcome into the library's error taxonomy, retries the transient kinds with
exponential backoff and reports each retry to an optional hook.

Architecture:
    Classification:
    - 2xx: body decoded; decoder failures become DecodingError (permanent)
    - 429 / 5xx: TransientServerError (retried)
    - other statuses: PermanentServerError
    - connection resets, timeouts, truncated payloads: TransientTransportError (retried)
    - invalid URLs, failing request builders: RequestConstructionError (permanent)
    - CancellationError / asyncio.CancelledError: propagated untouched

    Backoff:
    Retry k (1-indexed) waits ``initial_backoff * backoff_multiplier ** (k - 1)``.
    Waits poll the cancellation token, so a cancelled operation does not
    block for a whole backoff interval.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import aiohttp

from ...config import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_CANCELLATION_POLL_INTERVAL,
    DEFAULT_INITIAL_BACKOFF,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REQUEST_TIMEOUT,
    RETRYABLE_STATUS_CODES,
)
from ...core.cancellation import CancellationToken, check_cancellation, sleep_cancellable
from ...core.exceptions import (
    RETRYABLE_ERRORS,
    DecodingError,
    FetchError,
    PermanentServerError,
    RequestConstructionError,
    TransientServerError,
    TransientTransportError,
)
from ...models.events import RetryEvent, RetryEventHandler
from .http_client import HTTPClient, HTTPRequest, RawResponse, ResponseHook

logger = logging.getLogger(__name__)

T = TypeVar("T")

Decoder = Callable[[RawResponse], T]
RequestBuilder = Callable[[], HTTPRequest]


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy for a transport.

    Attributes:
        max_retries: Retries after the first attempt (0 disables retrying)
        initial_backoff: Delay in seconds before the first retry
        backoff_multiplier: Factor applied to the delay for each further retry
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF
    backoff_multiplier: float = DEFAULT_BACKOFF_MULTIPLIER

    def __post_init__(self) -> None:
        """Validate retry configuration."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.initial_backoff < 0:
            raise ValueError("initial_backoff must be >= 0")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be >= 1")

    def delay_for(self, attempt: int) -> float:
        """Backoff delay before retry ``attempt`` (1-indexed)."""
        return self.initial_backoff * self.backoff_multiplier ** (attempt - 1)


def decode_json(response: RawResponse) -> Any:
    return response.json()


def is_retryable_status(status: int) -> bool:
    return status in RETRYABLE_STATUS_CODES or 500 <= status < 600


class RetryingTransport:
    """Executes requests with retry, backoff and retry telemetry."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        retry: RetryConfig | None = None,
        on_retry: RetryEventHandler | None = None,
        headers: Mapping[str, str] | None = None,
        http: HTTPClient | None = None,
        cancellation_poll_interval: float = DEFAULT_CANCELLATION_POLL_INTERVAL,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Prefix for relative request URLs
            request_timeout: Timeout in seconds for each individual attempt
            retry: Retry policy (defaults to RetryConfig())
            on_retry: Hook receiving a RetryEvent right before each backoff
            headers: Headers sent with every request
            http: Pre-built HTTP client (overrides base_url/request_timeout/headers)
            cancellation_poll_interval: Token polling interval during backoff
        """
        self._http = http or HTTPClient(
            base_url=base_url, timeout=request_timeout, headers=headers
        )
        self._retry = retry or RetryConfig()
        self._on_retry = on_retry
        self._poll_interval = cancellation_poll_interval

    @property
    def retry_config(self) -> RetryConfig:
        return self._retry

    def add_response_hook(self, hook: ResponseHook) -> None:
        self._http.add_response_hook(hook)

    async def execute(
        self,
        build_request: RequestBuilder,
        decode: Decoder[T] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> T:
        """Execute one logical request, retrying transient failures.

        Args:
            build_request: Called before every attempt to build the request
            decode: Turns a 2xx response into a value (defaults to JSON)
            cancellation: Optional cancellation token checked before each attempt

        Returns:
            Decoded response value

        Raises:
            TransientServerError: 429/5xx after retries were exhausted
            TransientTransportError: Connection failure after retries were exhausted
            PermanentServerError: Any other non-2xx status
            DecodingError: Body could not be decoded
            RequestConstructionError: Request could not be built
            CancellationError: Cancellation observed at a checkpoint
        """
        decoder: Decoder[Any] = decode or decode_json
        attempt = 0

        while True:
            check_cancellation(cancellation)
            request = self._build(build_request)
            try:
                return await self._attempt(request, decoder, cancellation)
            except RETRYABLE_ERRORS as exc:
                if attempt >= self._retry.max_retries:
                    if self._retry.max_retries:
                        logger.error(
                            f"Giving up on {request.method} {request.url} after "
                            f"{attempt} retries: {exc}"
                        )
                    raise

                attempt += 1
                delay = self._retry.delay_for(attempt)
                event = RetryEvent(attempt=attempt, delay=delay, reason=exc.reason)
                logger.warning(
                    f"Retrying {request.method} {request.url} "
                    f"(retry {attempt}/{self._retry.max_retries}, {event.reason}) "
                    f"in {delay:.2f}s"
                )
                self._notify(event)
                await sleep_cancellable(delay, cancellation, poll_interval=self._poll_interval)

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        decode: Decoder[T] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> T:
        """GET ``url`` and decode the response (JSON by default)."""
        request = HTTPRequest(url=url, params=params, headers=headers)
        return await self.execute(lambda: request, decode, cancellation=cancellation)

    def _build(self, build_request: RequestBuilder) -> HTTPRequest:
        try:
            return build_request()
        except FetchError:
            raise
        except Exception as e:
            raise RequestConstructionError(f"Failed to build request: {e}") from e

    async def _attempt(
        self,
        request: HTTPRequest,
        decode: Decoder[Any],
        cancellation: CancellationToken | None,
    ) -> Any:
        try:
            response = await self._http.send(request, cancellation=cancellation)
        except (aiohttp.InvalidURL, ValueError) as e:
            raise RequestConstructionError(f"Invalid request for {request.url}: {e}") from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise TransientTransportError(
                f"{type(e).__name__} while requesting {request.url}: {e}",
                error_type=type(e).__name__,
            ) from e

        if not response.ok:
            message = f"Received HTTP status code {response.status} from {response.url}"
            if is_retryable_status(response.status):
                raise TransientServerError(message, response.status, response.url)
            raise PermanentServerError(message, response.status, response.url)

        try:
            return decode(response)
        except FetchError:
            raise
        except Exception as e:
            raise DecodingError(
                f"Could not decode response from {response.url}: {e}"
            ) from e

    def _notify(self, event: RetryEvent) -> None:
        if self._on_retry is None:
            return
        try:
            self._on_retry(event)
        except Exception as e:
            logger.warning(f"Retry hook failed: {e}")

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RetryingTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
