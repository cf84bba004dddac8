"""Recipe page fetching exceptions."""

from __future__ import annotations


class ScrapingError(Exception):
    """Base exception for page scraping errors."""


class NetworkError(ScrapingError):
    """Raised when a page cannot be fetched.

    Covers connection failures, timeouts and non-2xx responses.
    """


class ScrapingTimeoutError(NetworkError):
    """Raised when fetching a page exceeds the fetch timeout."""


class PageStatusError(NetworkError):
    """Raised when a page responds with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(message)
