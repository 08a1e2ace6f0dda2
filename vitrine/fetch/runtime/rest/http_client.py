"""Async HTTP client: the single "send one request, get status + bytes" primitive.

Status codes are returned, never raised: classifying them is the retrying
transport's job. Response hooks observe every response and may request a
throttle window before the next request (e.g. from a ``Retry-After`` header).
"""

from __future__ import annotations

import inspect
import json
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ...config import DEFAULT_REQUEST_TIMEOUT, USER_AGENT
from ...core.cancellation import CancellationToken, sleep_cancellable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPRequest:
    """One logical HTTP request.

    Attributes:
        url: Absolute URL, or a path joined onto the client's base_url
        method: HTTP method
        params: Query parameters
        headers: Extra request headers
        json: JSON body (POST/PUT only)
    """

    url: str
    method: str = "GET"
    params: Mapping[str, Any] | None = None
    headers: Mapping[str, str] | None = None
    json: Any = None


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and undecoded body of one HTTP response."""

    status: int
    body: bytes
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def json(self) -> Any:
        return json.loads(self.body)


ResponseHook = Callable[[RawResponse], float | None | Awaitable[float | None]]


def retry_after_hook(response: RawResponse) -> float | None:
    """Response hook honouring ``Retry-After`` (seconds form) on 429/503.

    Returns:
        Seconds to throttle the next request, or None
    """
    if response.status not in (429, 503):
        return None
    value = response.header("Retry-After")
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        # HTTP-date form is not supported
        return None


class HTTPClient:
    """Async HTTP client wrapper around a lazily created aiohttp session."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._default_headers = {"User-Agent": USER_AGENT, **(headers or {})}
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout, headers=self._default_headers
            )
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response.

        A hook may return a number of seconds; the next request waits that
        long before being sent.
        """
        self._response_hooks.append(hook)

    def set_throttle(self, seconds: float) -> None:
        """Delay the next request by ``seconds``; never shortens an existing window."""
        if seconds <= 0:
            return
        until = time.monotonic() + seconds
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    async def send(
        self,
        request: HTTPRequest,
        cancellation: CancellationToken | None = None,
    ) -> RawResponse:
        """Send one request and return its raw response.

        Args:
            request: Request to send
            cancellation: Optional token polled while waiting out a throttle window

        Returns:
            RawResponse with status, headers and body bytes

        Raises:
            aiohttp.ClientError: On connection-level failures
            TimeoutError: When the per-request timeout elapses
            CancellationError: If cancelled while waiting out a throttle window
        """
        await self._wait_for_throttle(cancellation)

        url = request.url
        if self.base_url and not url.startswith("http"):
            url = f"{self.base_url}{url}"

        async with self.session.request(
            request.method,
            url,
            params=dict(request.params) if request.params else None,
            headers=dict(request.headers) if request.headers else None,
            json=request.json,
        ) as response:
            body = await response.read()
            raw = RawResponse(
                status=response.status,
                body=body,
                url=str(response.url),
                headers=dict(response.headers),
            )

        await self._run_hooks(raw)
        return raw

    async def _wait_for_throttle(self, cancellation: CancellationToken | None) -> None:
        # Every concurrent sender waits for the same deadline; it is cleared
        # only once it has passed.
        while self._throttle_until is not None:
            delay = self._throttle_until - time.monotonic()
            if delay <= 0:
                self._throttle_until = None
                return
            await sleep_cancellable(delay, cancellation)

    async def _run_hooks(self, response: RawResponse) -> None:
        for hook in self._response_hooks:
            try:
                result = hook(response)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                logger.warning(f"Response hook {hook!r} failed: {e}")
                continue
            if result:
                self.set_throttle(float(result))

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
