"""Runtime orchestration components."""

from .resolver import IdentifierPage, IdentifierResolver, PageFetch
from .rest import HTTPClient, HTTPRequest, RawResponse, RetryConfig, RetryingTransport
from .streaming import StreamingFetcher, StreamPolicy, WindowPlanner

__all__ = [
    "IdentifierResolver",
    "IdentifierPage",
    "PageFetch",
    "HTTPClient",
    "HTTPRequest",
    "RawResponse",
    "RetryConfig",
    "RetryingTransport",
    "StreamingFetcher",
    "StreamPolicy",
    "WindowPlanner",
]
