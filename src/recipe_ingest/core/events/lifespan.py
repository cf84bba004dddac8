"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Startup: logging, secret check, database pool, job queue pool
- Shutdown: closing the pools

The API app and the admin app share one set of resources. Whichever
lifespan starts first while nothing is running owns them, and ``run()`` in
``main`` starts them up front so neither app owns them.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_ingest.core.config import Settings, get_settings
from recipe_ingest.database.connection import close_database_pool, init_database_pool
from recipe_ingest.database.repositories import ImportAttemptRepository
from recipe_ingest.observability.logging import get_logger, setup_logging
from recipe_ingest.workers.jobs import close_arq_pool, get_arq_pool


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


# Container for shared resource state (avoids global statement)
class _ResourceHolder:
    started: bool = False


async def start_resources(settings: Settings) -> None:
    """Initialize everything the API and admin apps need.

    Raises:
        RuntimeError: If a required secret is missing outside tests.
        asyncpg.PostgresError: If the database is unreachable.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
    )

    settings.ensure_secrets()

    await init_database_pool()
    _ResourceHolder.started = True

    try:
        await get_arq_pool()
    except Exception:
        logger.exception("Failed to initialize ARQ pool - ingestion unavailable")

    logger.info("Application startup complete")


async def stop_resources() -> None:
    """Close shared resources."""
    logger.info("Shutting down application")
    await close_arq_pool()
    await close_database_pool()
    _ResourceHolder.started = False
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    owns_resources = not _ResourceHolder.started
    if owns_resources:
        await start_resources(get_settings())

    app.state.ledger = ImportAttemptRepository()
    try:
        yield
    finally:
        if owns_resources:
            await stop_resources()
