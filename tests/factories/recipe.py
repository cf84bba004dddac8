"""Recipe factories for generating test data.

Uses polyfactory for consistent test data generation.
"""

from __future__ import annotations

from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_ingest.services.extraction.models import (
    Extracted,
    Ingredient,
    Recipe,
    RecipeParse,
)
from recipe_ingest.services.social.schemas import PostType, SourcePost


class IngredientFactory(ModelFactory[Ingredient]):
    """Factory for Ingredient lines."""

    __model__ = Ingredient

    name = "chicken thighs"
    quantity = "1.5 lbs"
    note = "boneless"


class RecipeFactory(ModelFactory[Recipe]):
    """Factory for validated recipes."""

    __model__ = Recipe

    name = "Garlic Butter Chicken"
    servings = "4"
    prep_time = 20
    cook_time = 25
    notes = None

    @classmethod
    def ingredients(cls) -> list[Ingredient]:
        return [
            IngredientFactory.build(),
            IngredientFactory.build(name="garlic", quantity="4 cloves", note="minced"),
        ]

    @classmethod
    def steps(cls) -> list[str]:
        return ["Season the chicken.", "Sear until golden, then baste with butter."]


class RecipeParseFactory(ModelFactory[RecipeParse]):
    """Factory for model output that holds a recipe."""

    __model__ = RecipeParse

    is_recipe = True
    confidence = 0.9

    @classmethod
    def recipe(cls) -> Recipe:
        return RecipeFactory.build()


class ExtractedFactory(ModelFactory[Extracted]):
    """Factory for successful extraction outcomes."""

    __model__ = Extracted

    kind = "extracted"
    source_url = "https://example.com/garlic-butter-chicken"
    source_name = "example.com"
    photo = None
    confidence = 1.0

    @classmethod
    def recipe(cls) -> Recipe:
        return RecipeFactory.build()


class SourcePostFactory(ModelFactory[SourcePost]):
    """Factory for fetched social posts."""

    __model__ = SourcePost

    caption = "Garlic butter chicken 🍗 full recipe below"
    owner_username = "chefjane"
    owner_display_name = "Chef Jane"
    post_type = PostType.PHOTO
    display_url = "https://cdn.example.com/display.jpg"
    thumbnail_url = None
    image_urls = []  # noqa: RUF012
    permalink = "https://www.instagram.com/p/abc123/"
