"""Unit tests for ImportAttemptRepository."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from recipe_ingest.database.repositories.import_attempts import (
    ImportAttempt,
    ImportAttemptRepository,
)


pytestmark = pytest.mark.unit

URL = "https://www.instagram.com/p/abc123/"
REQUESTED_AT = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def repository(mock_pool: MagicMock) -> ImportAttemptRepository:
    """Repository over the mocked pool."""
    return ImportAttemptRepository(mock_pool)


def _row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "url": URL,
        "attempts_count": 1,
        "requested_at": REQUESTED_AT,
        "imported_at": None,
    }
    row.update(overrides)
    return row


class TestRecordRequest:
    """Tests for record_request."""

    async def test_new_url(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should report a first request as new."""
        mock_connection.fetchval.return_value = URL

        assert await repository.record_request(URL) is True

        query, url, requested_at = mock_connection.fetchval.await_args.args
        assert "ON CONFLICT (url) DO NOTHING" in query
        assert url == URL
        assert requested_at.tzinfo is not None

    async def test_duplicate_url(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should report an already recorded URL as not new."""
        mock_connection.fetchval.return_value = None

        assert await repository.record_request(URL) is False


class TestRelease:
    """Tests for release."""

    async def test_only_unprocessed_rows(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should only delete rows that never started processing."""
        await repository.release(URL)

        query, url = mock_connection.execute.await_args.args
        assert "attempts_count = 0" in query
        assert url == URL


class TestIncrementAttempts:
    """Tests for increment_attempts."""

    async def test_returns_new_count(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should return the updated counter."""
        mock_connection.fetchval.return_value = 3

        assert await repository.increment_attempts(URL) == 3

    async def test_unknown_url(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should return None for a URL that was never recorded."""
        mock_connection.fetchval.return_value = None

        assert await repository.increment_attempts(URL) is None


class TestMarkImported:
    """Tests for mark_imported."""

    async def test_stamps_timestamp(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should set imported_at for the URL."""
        await repository.mark_imported(URL)

        query, url, imported_at = mock_connection.execute.await_args.args
        assert "SET imported_at" in query
        assert url == URL
        assert isinstance(imported_at, datetime)


class TestQueries:
    """Tests for get and list_failed."""

    async def test_get(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should map a row to ImportAttempt."""
        mock_connection.fetchrow.return_value = _row(attempts_count=2)

        attempt = await repository.get(URL)

        assert attempt == ImportAttempt(
            url=URL, attempts_count=2, requested_at=REQUESTED_AT
        )
        assert attempt.is_imported is False

    async def test_get_missing(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should return None when the URL is unknown."""
        mock_connection.fetchrow.return_value = None

        assert await repository.get(URL) is None

    async def test_list_failed(
        self, repository: ImportAttemptRepository, mock_connection: AsyncMock
    ) -> None:
        """Should select processed but unimported rows, newest first."""
        mock_connection.fetch.return_value = [
            _row(url="https://a.test/1"),
            _row(url="https://a.test/2", attempts_count=4),
        ]

        failed = await repository.list_failed()

        assert [attempt.url for attempt in failed] == [
            "https://a.test/1",
            "https://a.test/2",
        ]
        query = mock_connection.fetch.await_args.args[0]
        assert "imported_at IS NULL AND attempts_count > 0" in query
        assert "ORDER BY requested_at DESC" in query


class TestPoolResolution:
    """Tests for the global pool fallback."""

    def test_uses_global_pool(self, mock_pool: MagicMock) -> None:
        """Should fall back to the initialized global pool."""
        with patch(
            "recipe_ingest.database.repositories.import_attempts.get_database_pool",
            return_value=mock_pool,
        ):
            assert ImportAttemptRepository().pool is mock_pool

    def test_imported_flag(self) -> None:
        """Should report rows with an import timestamp as imported."""
        attempt = ImportAttempt(
            url=URL,
            attempts_count=1,
            requested_at=REQUESTED_AT,
            imported_at=REQUESTED_AT,
        )

        assert attempt.is_imported is True
