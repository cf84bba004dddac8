"""Recipe data model and extraction outcomes.

Recipe and Ingredient are the canonical output shape. They are only ever
built by validating a model response, so an invalid or partial recipe can
never reach the list service.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel


class SourceRoute(StrEnum):
    """Extraction strategy chosen for an ingested URL."""

    SOCIAL = "social"
    DIRECT_PAGE = "direct_page"


class Ingredient(BaseModel):
    """One ingredient line, in recipe order."""

    name: str = Field(..., min_length=1, description="Ingredient name")
    quantity: str | None = Field(default=None, description="Amount with unit")
    note: str | None = Field(
        default=None,
        description="Preparation note such as 'minced' or 'room temperature'",
    )


class Recipe(BaseModel):
    """A validated recipe ready for storage."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    servings: str | None = None
    prep_time: int | None = Field(default=None, ge=0, alias="prepTime")
    cook_time: int | None = Field(default=None, ge=0, alias="cookTime")
    ingredients: list[Ingredient] = Field(default_factory=list)
    steps: list[Annotated[str, Field(min_length=1)]] = Field(default_factory=list)
    notes: str | None = None


class RecipeParse(BaseModel):
    """Model output when the input holds a recipe."""

    is_recipe: Literal[True]
    confidence: float = Field(..., ge=0.0, le=1.0)
    recipe: Recipe


class NotRecipeParse(BaseModel):
    """Model output when the input holds no recipe."""

    is_recipe: Literal[False]
    reason: str


class ParseResult(RootModel[RecipeParse | NotRecipeParse]):
    """Synthesis result shared by every prompt variant, tagged by ``is_recipe``."""

    @property
    def is_recipe(self) -> bool:
        return self.root.is_recipe


class NotRecipe(BaseModel):
    """Terminal outcome: the source holds no usable recipe."""

    kind: Literal["not_recipe"] = "not_recipe"
    reason: str


class Extracted(BaseModel):
    """Terminal outcome: a validated recipe plus attribution and cover art."""

    kind: Literal["extracted"] = "extracted"
    recipe: Recipe
    source_url: str
    source_name: str
    photo: bytes | None = None
    confidence: float = 1.0


ExtractionOutcome = Annotated[NotRecipe | Extracted, Field(discriminator="kind")]
