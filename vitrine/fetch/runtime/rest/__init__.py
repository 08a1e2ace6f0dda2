"""REST runtime abstractions."""

from .http_client import HTTPClient, HTTPRequest, RawResponse, ResponseHook, retry_after_hook
from .transport import (
    Decoder,
    RequestBuilder,
    RetryConfig,
    RetryingTransport,
    decode_json,
    is_retryable_status,
)

__all__ = [
    "HTTPClient",
    "HTTPRequest",
    "RawResponse",
    "ResponseHook",
    "retry_after_hook",
    "RetryingTransport",
    "RetryConfig",
    "RequestBuilder",
    "Decoder",
    "decode_json",
    "is_retryable_status",
]
