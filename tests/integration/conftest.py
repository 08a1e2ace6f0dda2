"""Shared fixtures for integration tests."""

import pytest_asyncio

from vitrine.fetch import RetryConfig
from vitrine.fetch.connectors.met import MetClient


@pytest_asyncio.fixture
async def met_client():
    """Live Met client with a small concurrency, closed after the test."""
    retry = RetryConfig(max_retries=3, initial_backoff=1.0)
    async with MetClient(retry=retry, concurrency=3) as client:
        yield client
