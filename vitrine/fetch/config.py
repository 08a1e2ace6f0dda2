"""Shared engine defaults.

Concrete collection clients override these per instance; the values here
match what the museum APIs tolerate without tripping their rate limits.
"""

from __future__ import annotations

# Detail fetches issued together in one window
DEFAULT_CONCURRENCY = 6

# Identifiers requested per page when resolving a query
DEFAULT_PAGE_SIZE = 100

# Per-request timeout (seconds), applied to every attempt
DEFAULT_REQUEST_TIMEOUT = 30.0

# Retry policy
DEFAULT_MAX_RETRIES = 2
DEFAULT_INITIAL_BACKOFF = 0.5
DEFAULT_BACKOFF_MULTIPLIER = 2.0

# How often a backoff wait polls its cancellation token (seconds)
DEFAULT_CANCELLATION_POLL_INTERVAL = 0.05

# Records kept by a client's per-identifier cache
DEFAULT_OBJECT_CACHE_CAPACITY = 256

# HTTP statuses treated as transient server errors besides the 5xx range
RETRYABLE_STATUS_CODES = frozenset({429})

USER_AGENT = "vitrine-fetch/0.1"
