"""List-service (AnyList) sink."""

from recipe_ingest.services.recipe_list.client import RecipeListClient
from recipe_ingest.services.recipe_list.exceptions import (
    RecipeListAuthError,
    RecipeListError,
    RecipeListResponseError,
    RecipeListTimeoutError,
    RecipeListUnavailableError,
)
from recipe_ingest.services.recipe_list.schemas import (
    CreatedRecipe,
    CreateRecipeRequest,
    ListServiceSession,
)


__all__ = [
    "CreateRecipeRequest",
    "CreatedRecipe",
    "ListServiceSession",
    "RecipeListAuthError",
    "RecipeListClient",
    "RecipeListError",
    "RecipeListResponseError",
    "RecipeListTimeoutError",
    "RecipeListUnavailableError",
]
