"""Job enqueue utilities.

This module provides functions for enqueuing background jobs
from the API and admin apps.
"""

from __future__ import annotations

import hashlib
from typing import Any

from arq.connections import ArqRedis, create_pool
from arq.jobs import Job

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger
from recipe_ingest.workers.arq import get_redis_settings


logger = get_logger(__name__)

PROCESS_RECIPE = "process_recipe"

# Global connection pool for enqueuing jobs
_arq_pool: ArqRedis | None = None


async def get_arq_pool() -> ArqRedis:
    """Get or create the ARQ connection pool.

    Returns:
        ARQ Redis connection pool for enqueuing jobs.
    """
    global _arq_pool  # noqa: PLW0603

    if _arq_pool is None:
        _arq_pool = await create_pool(
            get_redis_settings(),
            default_queue_name=get_settings().arq.queue_name,
        )
        logger.debug("Created ARQ connection pool")

    return _arq_pool


async def close_arq_pool() -> None:
    """Close the ARQ connection pool.

    Should be called during application shutdown.
    """
    global _arq_pool  # noqa: PLW0603

    if _arq_pool is not None:
        await _arq_pool.close()
        _arq_pool = None
        logger.debug("Closed ARQ connection pool")


async def enqueue_job(
    function_name: str,
    *args: Any,
    _job_id: str | None = None,
    **kwargs: Any,
) -> Job | None:
    """Enqueue a background job.

    Args:
        function_name: Name of the task function to execute.
        *args: Positional arguments for the task.
        _job_id: Optional unique job ID. arq refuses a second job with an
            id that is still queued or running.
        **kwargs: Keyword arguments for the task.

    Returns:
        Job instance if enqueued, None if the job id is taken or Redis
        could not be reached.
    """
    try:
        pool = await get_arq_pool()
        job = await pool.enqueue_job(
            function_name,
            *args,
            _job_id=_job_id,
            _queue_name=get_settings().arq.queue_name,
            **kwargs,
        )
    except Exception:
        logger.exception("Failed to enqueue job", function=function_name)
        return None

    if job is None:
        logger.info("Job already queued", function=function_name, job_id=_job_id)
    else:
        logger.info("Enqueued job", function=function_name, job_id=job.job_id)
    return job


def ingestion_job_id(url: str) -> str:
    """Stable job id for a URL, so one URL is never processed twice at once."""
    digest = hashlib.sha256(url.encode()).hexdigest()[:16]
    return f"ingest:{digest}"


async def enqueue_recipe_ingestion(url: str) -> Job | None:
    """Enqueue the ingestion job for a URL.

    Args:
        url: The ingested URL.

    Returns:
        Job instance if enqueued, None otherwise.
    """
    return await enqueue_job(PROCESS_RECIPE, url, _job_id=ingestion_job_id(url))
