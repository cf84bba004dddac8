"""LLM prompt templates."""

from recipe_ingest.llm.prompts.base import BasePrompt
from recipe_ingest.llm.prompts.recipe_synthesis import (
    PROMPTS,
    CaptionRecipePrompt,
    PromptVariant,
    StructuredDataCaptionRecipePrompt,
    StructuredDataRecipePrompt,
)


__all__ = [
    "PROMPTS",
    "BasePrompt",
    "CaptionRecipePrompt",
    "PromptVariant",
    "StructuredDataCaptionRecipePrompt",
    "StructuredDataRecipePrompt",
]
