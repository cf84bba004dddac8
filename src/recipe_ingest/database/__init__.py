"""Database layer."""

from recipe_ingest.database.connection import (
    close_database_pool,
    get_database_pool,
    init_database_pool,
)


__all__ = ["close_database_pool", "get_database_pool", "init_database_pool"]
