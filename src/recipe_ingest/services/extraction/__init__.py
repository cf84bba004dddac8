"""Recipe extraction pipeline."""

from recipe_ingest.services.extraction.exceptions import ExtractionError, SynthesisError
from recipe_ingest.services.extraction.links import (
    classify_source,
    extract_caption_link,
)
from recipe_ingest.services.extraction.models import (
    Extracted,
    ExtractionOutcome,
    Ingredient,
    NotRecipe,
    Recipe,
    SourceRoute,
)


__all__ = [
    "Extracted",
    "ExtractionError",
    "ExtractionOutcome",
    "Ingredient",
    "NotRecipe",
    "Recipe",
    "SourceRoute",
    "SynthesisError",
    "classify_source",
    "extract_caption_link",
]
