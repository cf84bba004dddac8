"""Text-generation integration.

Provides the Anthropic Messages client and the prompt templates used to
turn captions and schema.org data into validated recipes.
"""

from recipe_ingest.llm.client.anthropic import AnthropicClient
from recipe_ingest.llm.exceptions import (
    LLMConfigurationError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
    LLMValidationError,
)
from recipe_ingest.llm.models import LLMCompletionResult


__all__ = [
    "AnthropicClient",
    "LLMCompletionResult",
    "LLMConfigurationError",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "LLMValidationError",
]
