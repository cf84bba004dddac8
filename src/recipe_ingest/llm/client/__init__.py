"""LLM client implementations."""

from recipe_ingest.llm.client.anthropic import AnthropicClient
from recipe_ingest.llm.client.protocol import LLMClientProtocol


__all__ = [
    "AnthropicClient",
    "LLMClientProtocol",
]
