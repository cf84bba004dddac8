"""Text-generation client exceptions.

Raised by LLM clients and translated by the synthesis layer: validation
failures become SynthesisError, everything else fails the job as-is.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for LLM client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the model API cannot be reached."""


class LLMTimeoutError(LLMUnavailableError):
    """Raised when a model request times out."""


class LLMResponseError(LLMError):
    """Raised when the model API returns an HTTP error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class LLMRateLimitError(LLMResponseError):
    """Raised when the model API rate limits the request."""


class LLMValidationError(LLMError):
    """Raised when model output does not match the requested schema.

    The model answered, but its text is not valid JSON for the expected
    structure.
    """


class LLMConfigurationError(LLMError):
    """Raised when the client is misconfigured (e.g. missing API key)."""
