"""Fixtures for database tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_connection() -> AsyncMock:
    """asyncpg connection with awaitable query methods."""
    return AsyncMock()


@pytest.fixture
def mock_pool(mock_connection: AsyncMock) -> MagicMock:
    """asyncpg pool whose acquire() yields mock_connection."""
    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_connection)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    pool.close = AsyncMock()
    return pool
