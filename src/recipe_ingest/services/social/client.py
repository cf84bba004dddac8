"""Apify client for fetching Instagram posts.

Runs the Instagram post scraper actor synchronously and returns the first
dataset item as a SourcePost.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import orjson
from pydantic import ValidationError

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger
from recipe_ingest.services.social.exceptions import (
    SocialNoResultsError,
    SocialResponseError,
    SocialTimeoutError,
    SocialUnavailableError,
)
from recipe_ingest.services.social.schemas import ApifyPost, ApifyRunInput, SourcePost


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings


logger = get_logger(__name__)


class ApifyClient:
    """HTTP client for the Apify Instagram post scraper.

    Example:
        ```python
        client = ApifyClient()
        await client.initialize()

        post = await client.fetch_post("https://www.instagram.com/p/abc/")

        await client.shutdown()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._http_client: httpx.AsyncClient | None = None

    @property
    def run_url(self) -> str:
        """Synchronous run endpoint of the configured actor."""
        apify = self._settings.social.apify
        return (
            f"{apify.url.rstrip('/')}/acts/{apify.actor_id}"
            "/run-sync-get-dataset-items"
        )

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.social.apify.timeout),
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )
        logger.info("ApifyClient initialized", actor_id=self._settings.social.apify.actor_id)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("ApifyClient shutdown")

    async def fetch_post(self, url: str) -> SourcePost:
        """Fetch a single post by its URL.

        Args:
            url: Instagram post URL.

        Returns:
            The post's caption, author and candidate images.

        Raises:
            SocialTimeoutError: If the actor run times out.
            SocialUnavailableError: If Apify cannot be reached.
            SocialResponseError: If Apify returns an error or malformed data.
            SocialNoResultsError: If the run returns no posts.
        """
        if not self._http_client:
            msg = "ApifyClient not initialized. Call initialize() first."
            raise RuntimeError(msg)

        payload = ApifyRunInput(
            username=[url],
            results_limit=self._settings.social.apify.results_limit,
        )

        logger.info("Fetching post via Apify", url=url)

        try:
            response = await self._http_client.post(
                self.run_url,
                params={"token": self._settings.APIFY_TOKEN},
                content=orjson.dumps(payload.model_dump(by_alias=True)),
            )
        except httpx.TimeoutException as e:
            logger.warning("Apify run timed out", url=url)
            msg = f"Apify run timed out for {url}"
            raise SocialTimeoutError(msg) from e
        except httpx.RequestError as e:
            logger.warning("Failed to connect to Apify", url=url, error=str(e))
            msg = f"Failed to connect to Apify: {e}"
            raise SocialUnavailableError(msg) from e

        if not response.is_success:
            logger.warning(
                "Apify returned error",
                status_code=response.status_code,
                body=response.text[:500],
            )
            msg = f"Apify sync run failed: {response.status_code} - {response.text}"
            raise SocialResponseError(response.status_code, msg)

        try:
            items = orjson.loads(response.content)
            if not isinstance(items, list):
                msg = "Apify response is not a list of dataset items"
                raise SocialResponseError(response.status_code, msg)
            if not items:
                msg = "No results returned from Apify"
                raise SocialNoResultsError(msg)
            post = ApifyPost.model_validate(items[0]).to_source_post()
        except (orjson.JSONDecodeError, ValidationError) as e:
            msg = f"Malformed Apify response: {e}"
            raise SocialResponseError(response.status_code, msg) from e

        logger.info(
            "Fetched post",
            url=url,
            owner=post.owner_username,
            post_type=post.post_type.value,
            caption_chars=len(post.caption),
        )
        return post
