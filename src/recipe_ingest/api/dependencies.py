"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in
app.state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from recipe_ingest.core.exceptions import ServiceUnavailableException


if TYPE_CHECKING:
    from recipe_ingest.database.repositories import ImportAttemptRepository


async def get_import_ledger(request: Request) -> ImportAttemptRepository:
    """Get the import-attempt ledger from app state.

    Raises:
        ServiceUnavailableException: If the database is not initialized.
    """
    ledger: ImportAttemptRepository | None = getattr(
        request.app.state, "ledger", None
    )
    if ledger is None:
        msg = "Import ledger not available"
        raise ServiceUnavailableException(msg)
    return ledger
