"""Application lifecycle events."""

from recipe_ingest.core.events.lifespan import lifespan, start_resources, stop_resources


__all__ = ["lifespan", "start_resources", "stop_resources"]
