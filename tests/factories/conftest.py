"""Factory exports.

This module exports all factories for convenient importing in tests.
"""

from tests.factories.recipe import (
    ExtractedFactory,
    IngredientFactory,
    RecipeFactory,
    RecipeParseFactory,
    SourcePostFactory,
)


__all__ = [
    "ExtractedFactory",
    "IngredientFactory",
    "RecipeFactory",
    "RecipeParseFactory",
    "SourcePostFactory",
]
