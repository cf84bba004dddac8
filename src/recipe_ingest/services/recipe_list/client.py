"""List-service HTTP client.

Stores extracted recipes in the user's AnyList recipe list through an
AnyList-compatible REST bridge (POST /auth/token, POST /recipes) deployed
alongside this service; it does not talk to www.anylist.com directly.

One authenticated session is shared by every concurrent ingestion job; it
is created lazily on first use and replaced after the bridge rejects it.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import orjson
from pydantic import ValidationError

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger
from recipe_ingest.services.recipe_list.exceptions import (
    RecipeListAuthError,
    RecipeListResponseError,
    RecipeListTimeoutError,
    RecipeListUnavailableError,
)
from recipe_ingest.services.recipe_list.schemas import (
    CreatedRecipe,
    CreateRecipeRequest,
    ListServiceSession,
    LoginResponse,
)


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings
    from recipe_ingest.services.extraction.models import Extracted


logger = get_logger(__name__)


class RecipeListClient:
    """HTTP client for the AnyList-compatible bridge at ``recipe_list.url``.

    Example:
        ```python
        client = RecipeListClient()
        await client.initialize()

        created = await client.create_recipe(extracted)

        await client.shutdown()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._http_client: httpx.AsyncClient | None = None
        self._session: ListServiceSession | None = None
        self._session_lock = asyncio.Lock()

    @property
    def base_url(self) -> str:
        """Get the base URL for the list service."""
        return self._settings.recipe_list.url.rstrip("/")

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.recipe_list.timeout),
            headers={"Accept": "application/json"},
        )
        logger.info("RecipeListClient initialized", base_url=self.base_url)

    async def shutdown(self) -> None:
        """Release resources and forget the session."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        self._session = None
        logger.debug("RecipeListClient shutdown")

    async def create_recipe(self, extracted: Extracted) -> CreatedRecipe:
        """Store an extracted recipe.

        A write rejected with 401 replaces the session and is retried once.

        Args:
            extracted: The extraction outcome to store.

        Returns:
            The stored recipe's id and name.

        Raises:
            RecipeListAuthError: If login fails or the retried write is
                rejected again.
            RecipeListUnavailableError: If the service cannot be reached.
            RecipeListTimeoutError: If a request times out.
            RecipeListResponseError: For other HTTP errors.
        """
        payload = orjson.dumps(
            CreateRecipeRequest.from_extracted(extracted).model_dump(
                by_alias=True, exclude_none=True
            )
        )

        logger.info(
            "Creating recipe in list service",
            name=extracted.recipe.name,
            has_photo=extracted.photo is not None,
        )

        session = await self._get_session()
        response = await self._post_recipe(payload, session)

        if response.status_code == 401:
            logger.warning("List service rejected session, logging in again")
            await self._invalidate_session(session)
            session = await self._get_session()
            response = await self._post_recipe(payload, session)
            if response.status_code == 401:
                msg = "List service rejected the recipe write after re-login"
                raise RecipeListAuthError(msg)

        if not response.is_success:
            logger.warning(
                "List service returned error",
                status_code=response.status_code,
                body=response.text[:500],
            )
            msg = f"List service error: {response.status_code} - {response.text}"
            raise RecipeListResponseError(response.status_code, msg)

        try:
            created = CreatedRecipe.model_validate(orjson.loads(response.content))
        except (orjson.JSONDecodeError, ValidationError) as e:
            msg = f"Malformed list service response: {e}"
            raise RecipeListResponseError(response.status_code, msg) from e

        logger.info("Recipe created", recipe_id=created.id, name=created.name)
        return created

    async def _get_session(self) -> ListServiceSession:
        """Return the shared session, logging in once if there is none."""
        session = self._session
        if session is not None:
            return session

        async with self._session_lock:
            if self._session is None:
                self._session = await self._login()
            return self._session

    async def _invalidate_session(self, stale: ListServiceSession) -> None:
        """Drop the shared session only if it is still the rejected one."""
        async with self._session_lock:
            if self._session is stale:
                self._session = None

    async def _login(self) -> ListServiceSession:
        client = self._require_client()
        logger.info("Logging in to list service", email=self._settings.ANYLIST_EMAIL)

        try:
            response = await client.post(
                f"{self.base_url}/auth/token",
                data={
                    "email": self._settings.ANYLIST_EMAIL,
                    "password": self._settings.ANYLIST_PASSWORD,
                },
            )
        except httpx.TimeoutException as e:
            logger.warning("List service login timed out")
            raise RecipeListTimeoutError(str(e)) from e
        except httpx.RequestError as e:
            msg = f"Failed to connect to list service: {e}"
            raise RecipeListUnavailableError(msg) from e

        if not response.is_success:
            msg = f"List service login failed: {response.status_code}"
            raise RecipeListAuthError(msg)

        try:
            token = LoginResponse.model_validate(orjson.loads(response.content))
        except (orjson.JSONDecodeError, ValidationError) as e:
            msg = f"Malformed list service login response: {e}"
            raise RecipeListAuthError(msg) from e

        logger.info("List service login successful")
        return ListServiceSession(token=token.access_token)

    async def _post_recipe(
        self, payload: bytes, session: ListServiceSession
    ) -> httpx.Response:
        client = self._require_client()
        try:
            return await client.post(
                f"{self.base_url}/recipes",
                content=payload,
                headers={
                    "Authorization": f"Bearer {session.token}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.TimeoutException as e:
            logger.warning("Request to list service timed out")
            raise RecipeListTimeoutError(str(e)) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to list service", error=str(e))
            msg = f"Failed to connect to list service: {e}"
            raise RecipeListUnavailableError(msg) from e

    def _require_client(self) -> httpx.AsyncClient:
        if not self._http_client:
            msg = "RecipeListClient not initialized. Call initialize() first."
            raise RuntimeError(msg)
        return self._http_client
