"""Vitrine Fetch - resilient streaming fetch engine for museum collection APIs."""

from .api import resolve_all, stream
from .cache import CachePolicy, KeyedLRUCache, ValueCache
from .clients import CollectionClient
from .core import (
    CancellationError,
    CancellationSource,
    CancellationToken,
    DecodingError,
    FetchError,
    PermanentServerError,
    RequestConstructionError,
    ServerError,
    TransientServerError,
    TransientTransportError,
    is_retryable,
)
from .models import FetchProgress, RetryEvent, RetryReason, RetryReasonKind
from .runtime import (
    HTTPClient,
    HTTPRequest,
    IdentifierPage,
    IdentifierResolver,
    RawResponse,
    RetryConfig,
    RetryingTransport,
    StreamingFetcher,
    StreamPolicy,
    WindowPlanner,
)
from .runtime.rest import retry_after_hook

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "resolve_all",
    "stream",
    # Engine
    "IdentifierResolver",
    "IdentifierPage",
    "StreamingFetcher",
    "StreamPolicy",
    "WindowPlanner",
    "RetryingTransport",
    "RetryConfig",
    "HTTPClient",
    "HTTPRequest",
    "RawResponse",
    "retry_after_hook",
    # Cache
    "CachePolicy",
    "ValueCache",
    "KeyedLRUCache",
    # Clients
    "CollectionClient",
    # Cancellation
    "CancellationToken",
    "CancellationSource",
    # Events
    "FetchProgress",
    "RetryEvent",
    "RetryReason",
    "RetryReasonKind",
    # Exceptions
    "FetchError",
    "TransientTransportError",
    "ServerError",
    "TransientServerError",
    "PermanentServerError",
    "DecodingError",
    "RequestConstructionError",
    "CancellationError",
    "is_retryable",
]
