"""Recipe synthesis prompts.

Three prompt variants share the ParseResult output schema and differ only in
their system instructions and input shape:
- CaptionRecipePrompt: a free-form social caption is the only input
- StructuredDataRecipePrompt: schema.org Recipe JSON-LD is the only input
- StructuredDataCaptionRecipePrompt: JSON-LD is authoritative, the caption
  may only contribute notes
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

import orjson
from pydantic import BaseModel

from recipe_ingest.services.extraction.models import ParseResult

from .base import BasePrompt


class PromptVariant(StrEnum):
    """Which input the synthesizer is given."""

    CAPTION = "caption"
    STRUCTURED_DATA = "structured_data"
    STRUCTURED_DATA_WITH_CAPTION = "structured_data_with_caption"


_RECIPE_SHAPE = """{
  "is_recipe": true,
  "confidence": <confidence>,
  "recipe": {
    "name": "Recipe Title",
    "servings": "4 servings",
    "prepTime": 10,
    "cookTime": 20,
    "ingredients": [
      {"name": "ingredient", "quantity": "1 cup", "note": "optional note"}
    ],
    "steps": [
      "Step 1...",
      "Step 2..."
    ],
    "notes": "<notes>"
  }
}"""

_NOT_RECIPE_SHAPE = '{"is_recipe": false, "reason": "..."}'


def _require(kwargs: dict[str, Any], key: str) -> Any:
    value = kwargs.get(key)
    if value is None:
        msg = f"Missing required '{key}' argument"
        raise ValueError(msg)
    return value


def _dump_structured_data(data: dict[str, Any]) -> str:
    return orjson.dumps(data, option=orjson.OPT_INDENT_2, default=str).decode()


class CaptionRecipePrompt(BasePrompt[ParseResult]):
    """Extract a recipe from a social post caption alone.

    The model has to infer structure the caption leaves implicit, so it
    reports a confidence below 0.7 when it had to guess heavily.
    """

    output_schema: ClassVar[type[BaseModel]] = ParseResult

    system_prompt: ClassVar[str | None] = f"""You are a recipe extraction assistant. Given an Instagram post caption, extract the recipe into structured JSON.

If the caption does not contain a recipe (no ingredients or no instructions), return:
{_NOT_RECIPE_SHAPE}

If it contains a recipe, return:
{_RECIPE_SHAPE.replace("<confidence>", "0.0-1.0").replace("<notes>", "Any additional notes from the caption")}

Rules:
- Infer recipe name from context if not explicit
- Parse quantities like "2 tbsp", "1/2 cup", "3 cloves" into the quantity field, keeping the ingredient name separate
- Separate ingredient notes (e.g., "minced", "room temperature") into the note field
- Number steps if not already numbered
- prepTime/cookTime in minutes (0 if not specified)
- confidence < 0.7 means the extraction may need human review; use it whenever you had to infer quantities or steps
- Return ONLY valid JSON, no other text"""

    def format(self, **kwargs: Any) -> str:
        """Format the prompt with the caption.

        Args:
            **kwargs: Must contain 'caption'.

        Raises:
            ValueError: If 'caption' is missing.
        """
        caption = _require(kwargs, "caption")
        return f"Extract the recipe from this Instagram caption:\n\n{caption}"


class StructuredDataRecipePrompt(BasePrompt[ParseResult]):
    """Convert schema.org Recipe JSON-LD into the recipe shape."""

    output_schema: ClassVar[type[BaseModel]] = ParseResult

    system_prompt: ClassVar[str | None] = f"""You are a recipe extraction assistant. Given Schema.org Recipe structured data (JSON-LD), convert it into the following JSON structure.

Return:
{_RECIPE_SHAPE.replace("<confidence>", "1.0").replace("<notes>", "Any additional notes")}

If the data cannot be mapped to a valid recipe, return:
{_NOT_RECIPE_SHAPE}

Rules:
- confidence is always 1.0
- prepTime/cookTime in minutes (parse ISO 8601 durations, e.g. PT1H30M = 90)
- recipeInstructions may be strings or HowToStep/HowToSection objects; extract the text of every step in order
- Separate ingredient quantities from names where possible
- Return ONLY valid JSON, no other text"""

    temperature: ClassVar[float | None] = 0.0

    def format(self, **kwargs: Any) -> str:
        """Format the prompt with the structured data.

        Args:
            **kwargs: Must contain 'structured_data' (a JSON-LD dict).

        Raises:
            ValueError: If 'structured_data' is missing.
        """
        data = _require(kwargs, "structured_data")
        return f"Convert this Schema.org Recipe data:\n\n{_dump_structured_data(data)}"


class StructuredDataCaptionRecipePrompt(BasePrompt[ParseResult]):
    """Merge schema.org data with a caption that may only add notes."""

    output_schema: ClassVar[type[BaseModel]] = ParseResult

    system_prompt: ClassVar[str | None] = f"""You are a recipe extraction assistant. You are given two inputs:
1. Schema.org Recipe structured data (JSON-LD) from the recipe's web page. This is the AUTHORITATIVE source.
2. The Instagram caption of the post that linked to that page.

Return:
{_RECIPE_SHAPE.replace("<confidence>", "1.0").replace("<notes>", "Creator tips and variations from the caption")}

If the structured data cannot be mapped to a valid recipe, return:
{_NOT_RECIPE_SHAPE}

Rules:
- Take name, servings, prepTime, cookTime, ingredients and steps ONLY from the structured data
- Copy quantities, timings and steps VERBATIM. Never adjust, round, scale or invent a value
- Keep the ingredient quantity text exactly as written (e.g. "1.5 lbs" stays "1.5 lbs")
- servings comes from recipeYield as written
- prepTime/cookTime in minutes (parse ISO 8601 durations, e.g. PT1H30M = 90)
- recipeInstructions may be strings or HowToStep/HowToSection objects; extract the text of every step in order
- Use the caption ONLY for the notes field: creator tips, substitutions, variations, serving suggestions
- The caption must never change any ingredient, quantity, timing or step, even if it disagrees with the structured data
- confidence is always 1.0
- Return ONLY valid JSON, no other text"""

    temperature: ClassVar[float | None] = 0.0

    def format(self, **kwargs: Any) -> str:
        """Format the prompt with the structured data and caption.

        Args:
            **kwargs: Must contain 'structured_data' and 'caption'.

        Raises:
            ValueError: If either argument is missing.
        """
        data = _require(kwargs, "structured_data")
        caption = _require(kwargs, "caption")
        return (
            "Structured data (authoritative):\n\n"
            f"{_dump_structured_data(data)}\n\n"
            "Instagram caption (notes only):\n\n"
            f"{caption}"
        )


PROMPTS: dict[PromptVariant, BasePrompt[ParseResult]] = {
    PromptVariant.CAPTION: CaptionRecipePrompt(),
    PromptVariant.STRUCTURED_DATA: StructuredDataRecipePrompt(),
    PromptVariant.STRUCTURED_DATA_WITH_CAPTION: StructuredDataCaptionRecipePrompt(),
}
