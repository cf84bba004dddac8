"""Fixtures for API tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_ingest.api.dependencies import get_import_ledger
from recipe_ingest.core.config import get_settings
from recipe_ingest.factory import create_admin_app, create_app


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_ingest.core.config import Settings


@pytest.fixture
def mock_ledger() -> MagicMock:
    """Ledger where every URL is new."""
    ledger = MagicMock()
    ledger.record_request = AsyncMock(return_value=True)
    ledger.release = AsyncMock()
    ledger.list_failed = AsyncMock(return_value=[])
    return ledger


def _override(app: FastAPI, settings: Settings, ledger: MagicMock) -> FastAPI:
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_import_ledger] = lambda: ledger
    return app


@pytest.fixture
async def api_client(
    settings: Settings, mock_ledger: MagicMock
) -> AsyncIterator[AsyncClient]:
    """Client for the ingest API without running its lifespan."""
    app = _override(create_app(settings), settings, mock_ledger)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
async def admin_client(
    settings: Settings, mock_ledger: MagicMock
) -> AsyncIterator[AsyncClient]:
    """Client for the admin app without running its lifespan."""
    app = _override(create_admin_app(settings), settings, mock_ledger)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://admin"
    ) as client:
        yield client
