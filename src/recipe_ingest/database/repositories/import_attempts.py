"""Import-attempt ledger repository.

One row per ingested URL. The row is created when a URL is accepted, its
attempt counter is bumped at the start of every processing run and
``imported_at`` is stamped once the recipe is stored. Rows with attempts
but no import timestamp are the failures shown on the admin page.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

from recipe_ingest.database.connection import get_database_pool
from recipe_ingest.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool, Record

logger = get_logger(__name__)


class ImportAttempt(BaseModel):
    """Data transfer object for one ledger row."""

    url: str
    attempts_count: int
    requested_at: datetime
    imported_at: datetime | None = None

    @property
    def is_imported(self) -> bool:
        return self.imported_at is not None


class ImportAttemptRepository:
    """Repository for the import-attempt ledger."""

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    async def record_request(self, url: str) -> bool:
        """Record a newly ingested URL.

        Args:
            url: The ingested URL, used verbatim as the key.

        Returns:
            True if the URL was new, False if it was already recorded.
        """
        query = """
            INSERT INTO import_attempts (url, requested_at)
            VALUES ($1, $2)
            ON CONFLICT (url) DO NOTHING
            RETURNING url
        """
        async with self.pool.acquire() as conn:
            inserted = await conn.fetchval(query, url, datetime.now(UTC))
        return inserted is not None

    async def release(self, url: str) -> None:
        """Forget a URL that was recorded but never processed."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                "DELETE FROM import_attempts WHERE url = $1 AND attempts_count = 0",
                url,
            )
        logger.debug("Released ledger entry", url=url)

    async def increment_attempts(self, url: str) -> int | None:
        """Count one more processing run.

        Returns:
            The new attempt count, or None if the URL is not recorded.
        """
        query = """
            UPDATE import_attempts
            SET attempts_count = attempts_count + 1
            WHERE url = $1
            RETURNING attempts_count
        """
        async with self.pool.acquire() as conn:
            count: int | None = await conn.fetchval(query, url)
        return count

    async def mark_imported(self, url: str) -> None:
        """Stamp the URL as successfully imported."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                "UPDATE import_attempts SET imported_at = $2 WHERE url = $1",
                url,
                datetime.now(UTC),
            )

    async def get(self, url: str) -> ImportAttempt | None:
        """Get the ledger row for a URL."""
        query = """
            SELECT url, attempts_count, requested_at, imported_at
            FROM import_attempts
            WHERE url = $1
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, url)

        if row is None:
            return None
        return self._row_to_attempt(row)

    async def list_failed(self) -> list[ImportAttempt]:
        """List URLs that were processed at least once but never imported.

        Returns:
            Failed attempts, most recently requested first.
        """
        query = """
            SELECT url, attempts_count, requested_at, imported_at
            FROM import_attempts
            WHERE imported_at IS NULL AND attempts_count > 0
            ORDER BY requested_at DESC
        """
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query)

        return [self._row_to_attempt(row) for row in rows]

    def _row_to_attempt(self, row: Record) -> ImportAttempt:
        return ImportAttempt(
            url=row["url"],
            attempts_count=row["attempts_count"],
            requested_at=row["requested_at"],
            imported_at=row["imported_at"],
        )
