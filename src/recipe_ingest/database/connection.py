"""PostgreSQL connection pool management.

This module provides:
- Async connection pool management via asyncpg
- Idempotent creation of the import-attempt ledger table
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

_pool: Pool | None = None

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS import_attempts (
        url TEXT PRIMARY KEY,
        attempts_count INTEGER NOT NULL DEFAULT 0,
        requested_at TIMESTAMPTZ NOT NULL,
        imported_at TIMESTAMPTZ
    )
"""


async def init_database_pool() -> Pool:
    """Initialize the PostgreSQL connection pool and ledger schema.

    Should be called during application and worker startup.

    Returns:
        The initialized pool.
    """
    global _pool  # noqa: PLW0603

    settings = get_settings()

    logger.info(
        "Initializing database connection pool",
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
    )

    pool = await asyncpg.create_pool(
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        user=settings.database.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl=settings.database.ssl if settings.database.ssl else None,
    )

    try:
        await ensure_schema(pool)
    except asyncpg.PostgresError:
        logger.exception("Failed to prepare database schema")
        await pool.close()
        raise

    _pool = pool
    logger.info("Database connection established successfully")
    return pool


async def ensure_schema(pool: Pool) -> None:
    """Create the ledger table if it does not exist."""
    async with pool.acquire() as conn:
        await conn.execute(SCHEMA_SQL)


async def close_database_pool() -> None:
    """Close the PostgreSQL connection pool."""
    global _pool  # noqa: PLW0603

    if _pool:
        logger.info("Closing database connection pool")
        await _pool.close()
        _pool = None
        logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Get the database connection pool.

    Returns:
        PostgreSQL connection pool.

    Raises:
        RuntimeError: If pool is not initialized.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool
