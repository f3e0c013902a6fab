"""
Shared pytest fixtures for Billtrack tests.

This module provides common fixtures including:
- Redis mocks for session store tests
- Fixed timestamps so billing results are deterministic
"""

import os
import sys
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from billtrack.modules.api.models import Session

T0 = datetime(2026, 1, 5, 9, 0, 0, tzinfo=UTC)


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def t0():
    """Fixed session start time."""
    return T0


@pytest.fixture
def running_session():
    """A running session started at T0 billed at 50 per hour."""
    return Session(
        id="0b7e6a8e-1c4b-4f7e-9d43-5a0f4b2d1c11",
        title="Client onboarding",
        category="consulting",
        rate=50.0,
        created_at=T0,
        updated_at=T0,
    )


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================


@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async operations."""
    redis = AsyncMock()

    redis.set = AsyncMock(return_value=True)
    redis.get = AsyncMock(return_value=None)
    redis.rpush = AsyncMock(return_value=1)
    redis.lrange = AsyncMock(return_value=[])
    redis.lpush = AsyncMock()
    redis.ltrim = AsyncMock()
    redis.publish = AsyncMock()
    redis.ping = AsyncMock(return_value=True)

    return redis


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory data storage for more realistic tests.

    This allows testing code that reads back what it writes, including
    SET NX claims.
    """
    storage = {}
    lists = {}

    redis = AsyncMock()

    async def mock_set(key, value, *args, nx=False, **kwargs):
        if nx and key in storage:
            return None
        storage[key] = value
        return True

    async def mock_get(key):
        return storage.get(key)

    async def mock_rpush(key, *values):
        lists.setdefault(key, []).extend(values)
        return len(lists[key])

    async def mock_lpush(key, *values):
        items = lists.setdefault(key, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    async def mock_lrange(key, start, end):
        items = lists.get(key, [])
        if end == -1:
            return list(items[start:])
        return list(items[start : end + 1])

    async def mock_ltrim(key, start, end):
        items = lists.get(key, [])
        lists[key] = items[start:] if end == -1 else items[start : end + 1]
        return True

    redis.set = mock_set
    redis.get = mock_get
    redis.rpush = mock_rpush
    redis.lpush = mock_lpush
    redis.lrange = mock_lrange
    redis.ltrim = mock_ltrim
    redis.publish = AsyncMock(return_value=0)
    redis.ping = AsyncMock(return_value=True)
    redis._storage = storage  # Expose for test assertions
    redis._lists = lists

    return redis


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
