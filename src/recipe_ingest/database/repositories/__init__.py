"""Database repositories."""

from recipe_ingest.database.repositories.import_attempts import (
    ImportAttempt,
    ImportAttemptRepository,
)


__all__ = ["ImportAttempt", "ImportAttemptRepository"]
