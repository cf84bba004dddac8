"""List-service client exceptions.

Raised by RecipeListClient and handled by the ingestion job, which turns
them into an error notification.
"""

from __future__ import annotations


class RecipeListError(Exception):
    """Base exception for list-service client errors."""


class RecipeListUnavailableError(RecipeListError):
    """Raised when the list service cannot be reached."""


class RecipeListTimeoutError(RecipeListUnavailableError):
    """Raised when a request to the list service times out."""


class RecipeListResponseError(RecipeListError):
    """Raised when the list service returns an error response."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)


class RecipeListAuthError(RecipeListResponseError):
    """Raised when login fails or a write is still rejected after re-login."""

    def __init__(self, message: str) -> None:
        super().__init__(status_code=401, message=message)
