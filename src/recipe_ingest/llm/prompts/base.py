"""Base class for LLM prompts.

Provides a standardized interface for defining prompts with:
- Typed input variables
- Structured output schemas
- Model-specific configuration
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel


class BasePrompt[T: BaseModel](ABC):
    """Base class for all LLM prompts.

    Example:
        ```python
        class CaptionPrompt(BasePrompt[ParseResult]):
            output_schema = ParseResult
            system_prompt = "You are a recipe extraction assistant."

            def format(self, caption: str) -> str:
                return f"Extract the recipe from:\\n\\n{caption}"
        ```
    """

    output_schema: ClassVar[type[BaseModel]]
    """Pydantic model for structured output validation."""

    system_prompt: ClassVar[str | None] = None
    """Optional system prompt to set context for the LLM."""

    temperature: ClassVar[float | None] = None
    """Sampling temperature (None = provider default)."""

    max_tokens: ClassVar[int | None] = None
    """Maximum tokens to generate (None = client default)."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with input variables.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def get_options(self) -> dict[str, Any]:
        """Get generation options for this prompt."""
        options: dict[str, Any] = {}
        if self.temperature is not None:
            options["temperature"] = self.temperature
        if self.max_tokens is not None:
            options["max_tokens"] = self.max_tokens
        return options
