"""Shared test fixtures and configuration for the recipe ingest service tests."""

from __future__ import annotations

import os


# Must be set before any recipe_ingest import reads settings
os.environ["APP_ENV"] = "test"
os.environ.setdefault("API_TOKEN", "test-api-token")  # noqa: S105

from typing import TYPE_CHECKING  # noqa: E402

import pytest  # noqa: E402

from recipe_ingest.core.config import Settings, get_settings  # noqa: E402
from tests.fixtures.auth import TEST_API_TOKEN  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Drop cached settings so overrides from one test never leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with every secret filled in and test-friendly upstream URLs."""
    return Settings(
        APP_ENV="test",
        API_TOKEN=TEST_API_TOKEN,
        APIFY_TOKEN="test-apify-token",
        ANYLIST_EMAIL="cook@example.com",
        ANYLIST_PASSWORD="hunter2",
        ANTHROPIC_API_KEY="test-anthropic-key",
        NTFY_TOPIC="recipes-test",
        recipe_list={"url": "https://list.test", "timeout": 5.0},
        notifications={"ntfy": {"enabled": True, "url": "https://ntfy.test"}},
        social={"apify": {"url": "https://apify.test/v2", "actor_id": "actor123"}},
    )
