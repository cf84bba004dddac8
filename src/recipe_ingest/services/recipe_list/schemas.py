"""Schemas for the list-service (AnyList) API."""

from __future__ import annotations

import base64

from pydantic import BaseModel, ConfigDict, Field

from recipe_ingest.services.extraction.models import Extracted


class LoginResponse(BaseModel):
    """Token issued by the list service's login endpoint."""

    access_token: str = Field(..., min_length=1)


class ListServiceSession(BaseModel):
    """An authenticated session.

    Sessions are immutable. A rejected session is replaced by a new one,
    never refreshed in place, so a caller holding a stale reference can
    tell whether someone else already replaced it.
    """

    model_config = ConfigDict(frozen=True)

    token: str


class CreateRecipeIngredient(BaseModel):
    """Ingredient line in a recipe write."""

    name: str
    quantity: str | None = None
    note: str | None = None


class CreateRecipeRequest(BaseModel):
    """Recipe write payload.

    ``prepTime`` and ``cookTime`` are sent in minutes, 0 when unknown. The
    list service currently stores both as 0 whatever value is sent. The
    correct values are still sent so stored recipes pick them up once the
    service is fixed.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    ingredients: list[CreateRecipeIngredient] = Field(default_factory=list)
    preparation_steps: list[str] = Field(
        default_factory=list, alias="preparationSteps"
    )
    note: str | None = None
    servings: str | None = None
    prep_time: int = Field(default=0, alias="prepTime")
    cook_time: int = Field(default=0, alias="cookTime")
    source_name: str = Field(..., alias="sourceName")
    source_url: str = Field(..., alias="sourceUrl")
    photo: str | None = Field(default=None, description="Base64-encoded image")

    @classmethod
    def from_extracted(cls, extracted: Extracted) -> CreateRecipeRequest:
        """Build the write payload for an extraction outcome."""
        recipe = extracted.recipe
        return cls(
            name=recipe.name,
            ingredients=[
                CreateRecipeIngredient(
                    name=ingredient.name,
                    quantity=ingredient.quantity,
                    note=ingredient.note,
                )
                for ingredient in recipe.ingredients
            ],
            preparation_steps=list(recipe.steps),
            note=recipe.notes,
            servings=recipe.servings,
            prep_time=recipe.prep_time or 0,
            cook_time=recipe.cook_time or 0,
            source_name=extracted.source_name,
            source_url=extracted.source_url,
            photo=(
                base64.b64encode(extracted.photo).decode("ascii")
                if extracted.photo
                else None
            ),
        )


class CreatedRecipe(BaseModel):
    """Identifier and name of a stored recipe."""

    id: str
    name: str
