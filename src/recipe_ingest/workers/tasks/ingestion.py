"""Recipe ingestion task.

One job per accepted URL. Every run counts as an attempt in the ledger and
ends in exactly one notification: success, not-a-recipe or error. The job
never raises, so arq never retries it on its own; retries are explicit and
come from the admin page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_ingest.observability.logging import bind_context, clear_context, get_logger
from recipe_ingest.services.extraction.models import NotRecipe


if TYPE_CHECKING:
    from recipe_ingest.database.repositories import ImportAttemptRepository
    from recipe_ingest.services.extraction.orchestrator import RecipeExtractor
    from recipe_ingest.services.notifications import NtfyNotifier
    from recipe_ingest.services.recipe_list import RecipeListClient

logger = get_logger(__name__)


async def process_recipe(ctx: dict[str, Any], url: str) -> dict[str, Any]:
    """Extract, store and report one ingested URL.

    Args:
        ctx: ARQ worker context containing shared dependencies:
            - extractor: RecipeExtractor
            - recipe_list: RecipeListClient
            - notifier: NtfyNotifier
            - ledger: ImportAttemptRepository
        url: The ingested URL.

    Returns:
        Result dict with the terminal status of the run.
    """
    extractor: RecipeExtractor = ctx["extractor"]
    recipe_list: RecipeListClient = ctx["recipe_list"]
    notifier: NtfyNotifier = ctx["notifier"]
    ledger: ImportAttemptRepository = ctx["ledger"]

    bind_context(url=url, job_id=ctx.get("job_id"))
    try:
        attempts = await ledger.increment_attempts(url)
        logger.info("Processing recipe", attempt=attempts)

        outcome = await extractor.extract(url)

        if isinstance(outcome, NotRecipe):
            logger.info("Not a recipe", reason=outcome.reason)
            await notifier.notify_not_recipe(outcome.reason, url)
            return {"status": "not_recipe", "reason": outcome.reason}

        created = await recipe_list.create_recipe(outcome)
        logger.info("Recipe imported", recipe_id=created.id, name=created.name)

        await ledger.mark_imported(url)
        await notifier.notify_success(created.name, url)

        return {
            "status": "imported",
            "recipe_id": created.id,
            "name": created.name,
            "source_url": outcome.source_url,
        }

    except Exception as e:
        message = str(e) or type(e).__name__
        logger.exception("Recipe ingestion failed", error=message)
        await notifier.notify_error(message, url)
        return {"status": "failed", "error": message}

    finally:
        clear_context()
