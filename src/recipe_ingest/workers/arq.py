"""ARQ worker configuration.

This module provides:
- Worker settings and configuration
- Redis connection settings for the job queue
- Startup/shutdown handlers that build the ingestion pipeline
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any, ClassVar

from arq.connections import RedisSettings

from recipe_ingest.core.config import get_settings
from recipe_ingest.database.connection import close_database_pool, init_database_pool
from recipe_ingest.database.repositories import ImportAttemptRepository
from recipe_ingest.llm.client.anthropic import AnthropicClient
from recipe_ingest.observability.logging import get_logger, setup_logging
from recipe_ingest.services.extraction.orchestrator import RecipeExtractor
from recipe_ingest.services.extraction.synthesizer import RecipeSynthesizer
from recipe_ingest.services.media import ImageDownloader
from recipe_ingest.services.notifications import NtfyNotifier
from recipe_ingest.services.recipe_list import RecipeListClient
from recipe_ingest.services.scraping import PageFetcher
from recipe_ingest.services.social import ApifyClient
from recipe_ingest.workers.tasks.ingestion import process_recipe


logger = get_logger(__name__)

# Type alias for ARQ worker functions
WorkerFunction = Callable[..., Coroutine[Any, Any, Any]]

# Context keys holding services with initialize()/shutdown()
_LIFECYCLE_KEYS = (
    "llm_client",
    "page_fetcher",
    "post_fetcher",
    "image_downloader",
    "recipe_list",
    "notifier",
)


async def startup(ctx: dict[str, Any]) -> None:
    """Worker startup handler.

    Builds every collaborator of the ingestion job once and stores it in
    the worker context, so concurrent jobs share clients and the list
    service session.

    Args:
        ctx: Worker context dictionary for storing shared state.
    """
    settings = get_settings()

    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )
    settings.ensure_secrets()

    logger.info("ARQ worker starting", environment=settings.APP_ENV)

    ctx["settings"] = settings
    ctx["ledger"] = ImportAttemptRepository(await init_database_pool())

    anthropic = settings.llm.anthropic
    ctx["llm_client"] = AnthropicClient(
        api_key=settings.ANTHROPIC_API_KEY,
        model=anthropic.model,
        base_url=anthropic.url,
        api_version=anthropic.api_version,
        max_tokens=anthropic.max_tokens,
        timeout=anthropic.timeout,
        max_retries=anthropic.max_retries,
        requests_per_minute=anthropic.requests_per_minute,
    )
    ctx["page_fetcher"] = PageFetcher(settings)
    ctx["post_fetcher"] = ApifyClient(settings)
    ctx["image_downloader"] = ImageDownloader(settings)
    ctx["recipe_list"] = RecipeListClient(settings)
    ctx["notifier"] = NtfyNotifier(settings)

    for key in _LIFECYCLE_KEYS:
        await ctx[key].initialize()

    ctx["extractor"] = RecipeExtractor(
        post_fetcher=ctx["post_fetcher"],
        page_fetcher=ctx["page_fetcher"],
        image_downloader=ctx["image_downloader"],
        synthesizer=RecipeSynthesizer(ctx["llm_client"]),
        platform_domain=settings.social.platform_domain,
    )

    logger.info("Ingestion pipeline ready", model=anthropic.model)


async def shutdown(ctx: dict[str, Any]) -> None:
    """Worker shutdown handler.

    Args:
        ctx: Worker context dictionary containing initialized resources.
    """
    logger.info("ARQ worker shutting down")

    for key in _LIFECYCLE_KEYS:
        if ctx.get(key):
            await ctx[key].shutdown()

    await close_database_pool()


def get_redis_settings() -> RedisSettings:
    """Get Redis settings for ARQ.

    Returns:
        RedisSettings configured for the job queue.
    """
    settings = get_settings()

    return RedisSettings(
        host=settings.redis.host,
        port=settings.redis.port,
        username=settings.redis.user,
        password=settings.REDIS_PASSWORD or None,
        database=settings.redis.queue_db,
    )


class WorkerSettings:
    """ARQ worker settings class.

    This class is used by the arq CLI to configure the worker.
    Run with: arq recipe_ingest.workers.arq.WorkerSettings
    """

    redis_settings = get_redis_settings()

    queue_name = get_settings().arq.queue_name
    health_check_key = get_settings().arq.health_check_key

    on_startup = startup
    on_shutdown = shutdown

    job_timeout = get_settings().arq.job_timeout
    max_jobs = get_settings().arq.max_jobs

    # Results are not kept, so a finished job's id can be enqueued again
    keep_result = 0

    # Failures are reported, never retried automatically
    max_tries = 1

    functions: ClassVar[list[WorkerFunction]] = [process_recipe]
