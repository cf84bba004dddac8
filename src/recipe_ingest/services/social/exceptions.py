"""Social post fetching exceptions.

Any of these is fatal to an ingestion job on the social route.
"""

from __future__ import annotations


class UpstreamError(Exception):
    """Base exception for social post scraping errors."""


class SocialUnavailableError(UpstreamError):
    """Raised when the scraping API cannot be reached."""


class SocialTimeoutError(SocialUnavailableError):
    """Raised when the scraping run does not finish in time."""


class SocialResponseError(UpstreamError):
    """Raised when the scraping API returns an error response."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)


class SocialNoResultsError(UpstreamError):
    """Raised when the scraping run returns no posts."""
