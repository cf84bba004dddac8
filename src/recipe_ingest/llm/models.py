"""LLM client data models.

Request/response shapes for the Anthropic Messages API plus the
provider-neutral completion result.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class LLMCompletionResult(BaseModel):
    """Internal result from LLM completion.

    Wraps raw response with parsed structured output.
    """

    raw_response: str = Field(..., description="Raw text response from LLM")
    parsed: Any | None = Field(
        default=None,
        description="Parsed structured output if schema was provided",
    )
    model: str = Field(..., description="Model that generated response")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )
    stop_reason: str | None = Field(default=None, description="Why generation ended")

    model_config = {"frozen": True}


# =============================================================================
# Anthropic Messages API Models
# =============================================================================


class AnthropicMessage(BaseModel):
    """Single conversation turn."""

    role: str = Field(..., description="Message role: user or assistant")
    content: str = Field(..., description="Message text")


class AnthropicMessagesRequest(BaseModel):
    """Request body for POST /v1/messages."""

    model: str = Field(..., description="Model name (e.g. 'claude-3-5-haiku-latest')")
    max_tokens: int = Field(..., description="Maximum tokens to generate")
    messages: list[AnthropicMessage] = Field(..., description="Conversation turns")
    system: str | None = Field(default=None, description="System prompt")
    temperature: float | None = Field(default=None, description="Sampling temperature")


class AnthropicContentBlock(BaseModel):
    """One block of response content."""

    type: str = Field(..., description="Block type, 'text' for text output")
    text: str | None = Field(default=None, description="Text of a text block")


class AnthropicUsage(BaseModel):
    """Token usage from a Messages response."""

    input_tokens: int = Field(..., description="Input token count")
    output_tokens: int = Field(..., description="Output token count")


class AnthropicMessagesResponse(BaseModel):
    """Response from POST /v1/messages."""

    id: str = Field(..., description="Unique message ID")
    model: str = Field(..., description="Model that generated the response")
    content: list[AnthropicContentBlock] = Field(..., description="Content blocks")
    stop_reason: str | None = Field(default=None, description="Why generation ended")
    usage: AnthropicUsage | None = Field(default=None, description="Token usage")
