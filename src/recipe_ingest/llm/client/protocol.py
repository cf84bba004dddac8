"""LLM Client Protocol definition.

Defines the interface the synthesizer depends on, so the Anthropic client
can be swapped for a fake in tests or another provider later.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel


if TYPE_CHECKING:
    from recipe_ingest.llm.models import LLMCompletionResult


T = TypeVar("T", bound=BaseModel)


@runtime_checkable
class LLMClientProtocol(Protocol):
    """Protocol for LLM client implementations."""

    async def initialize(self) -> None:
        """Initialize client resources (HTTP connections, etc.)."""
        ...

    async def shutdown(self) -> None:
        """Release client resources."""
        ...

    async def generate(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system: str | None = None,
        schema: type[T] | None = None,
        options: dict[str, Any] | None = None,
    ) -> LLMCompletionResult:
        """Generate a completion.

        Args:
            prompt: User message text.
            model: Model override (uses client default if None).
            system: Optional system prompt.
            schema: Optional Pydantic model the output must validate against.
            options: Generation options (temperature, max_tokens).

        Returns:
            LLMCompletionResult with raw_response and optionally parsed output.

        Raises:
            LLMUnavailableError: Service unreachable.
            LLMTimeoutError: Request timed out.
            LLMResponseError: HTTP error from service.
            LLMValidationError: Response doesn't match schema.
        """
        ...

    async def generate_structured(
        self,
        prompt: str,
        schema: type[T],
        *,
        model: str | None = None,
        system: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> T:
        """Generate output and return it parsed as ``schema``.

        Raises:
            LLMValidationError: If response doesn't match schema.
        """
        ...
