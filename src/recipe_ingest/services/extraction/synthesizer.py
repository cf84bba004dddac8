"""Recipe synthesis through a text-generation model.

One parameterized operation, ``synthesize(variant, ...)``, selects a prompt
and validates the model's answer against ParseResult. The three named entry
points are thin wrappers that fix the variant and its inputs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_ingest.llm.exceptions import LLMValidationError
from recipe_ingest.llm.prompts import PROMPTS, PromptVariant
from recipe_ingest.observability.logging import get_logger
from recipe_ingest.services.extraction.exceptions import SynthesisError
from recipe_ingest.services.extraction.models import (
    NotRecipeParse,
    ParseResult,
    RecipeParse,
)


if TYPE_CHECKING:
    from recipe_ingest.llm.client.protocol import LLMClientProtocol


logger = get_logger(__name__)

CAPTION_REVIEW_THRESHOLD = 0.7


class RecipeSynthesizer:
    """Turns captions and schema.org data into validated recipes."""

    def __init__(self, llm_client: LLMClientProtocol) -> None:
        self._llm_client = llm_client

    async def synthesize(
        self,
        variant: PromptVariant,
        *,
        caption: str | None = None,
        structured_data: dict[str, Any] | None = None,
    ) -> RecipeParse | NotRecipeParse:
        """Run one prompt variant and return the validated result.

        Args:
            variant: Which prompt to use.
            caption: Caption text (caption and merge variants).
            structured_data: JSON-LD Recipe document (structured variants).

        Returns:
            RecipeParse when the model found a recipe, NotRecipeParse otherwise.

        Raises:
            SynthesisError: If the model output fails validation.
            ValueError: If an input the variant needs is missing.
            LLMError: If the model call itself fails.
        """
        prompt = PROMPTS[variant]
        user_message = prompt.format(caption=caption, structured_data=structured_data)

        logger.debug(
            "Synthesizing recipe",
            variant=variant.value,
            prompt=prompt.name,
            input_chars=len(user_message),
        )

        try:
            parsed = await self._llm_client.generate_structured(
                user_message,
                ParseResult,
                system=prompt.system_prompt,
                options=prompt.get_options(),
            )
        except LLMValidationError as e:
            msg = f"Invalid recipe structure from {prompt.name}: {e}"
            raise SynthesisError(msg) from e

        result = parsed.root
        if isinstance(result, RecipeParse):
            if variant is not PromptVariant.CAPTION:
                # Structured-data variants always report full confidence
                result = result.model_copy(update={"confidence": 1.0})
            logger.info(
                "Recipe synthesized",
                variant=variant.value,
                name=result.recipe.name,
                confidence=result.confidence,
                needs_review=result.confidence < CAPTION_REVIEW_THRESHOLD,
            )
        else:
            logger.info("Model found no recipe", variant=variant.value, reason=result.reason)
        return result

    async def from_caption(self, caption: str) -> RecipeParse | NotRecipeParse:
        """Synthesize from a caption alone."""
        return await self.synthesize(PromptVariant.CAPTION, caption=caption)

    async def from_structured_data(
        self, structured_data: dict[str, Any]
    ) -> RecipeParse | NotRecipeParse:
        """Synthesize from schema.org Recipe data alone."""
        return await self.synthesize(
            PromptVariant.STRUCTURED_DATA, structured_data=structured_data
        )

    async def from_structured_data_and_caption(
        self,
        structured_data: dict[str, Any],
        caption: str,
    ) -> RecipeParse | NotRecipeParse:
        """Synthesize from schema.org data, taking only notes from the caption."""
        return await self.synthesize(
            PromptVariant.STRUCTURED_DATA_WITH_CAPTION,
            caption=caption,
            structured_data=structured_data,
        )
