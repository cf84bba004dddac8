"""Background tasks."""

from recipe_ingest.workers.tasks.ingestion import process_recipe


__all__ = ["process_recipe"]
