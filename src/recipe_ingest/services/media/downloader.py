"""Best-effort cover image download.

Cover art never blocks recipe creation: every failure is logged and
reported as "no image".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings


logger = get_logger(__name__)


class ImageDownloader:
    """Downloads images, returning None instead of raising."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._http_client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.media.download_timeout),
            follow_redirects=True,
            headers={"User-Agent": self._settings.scraping.user_agent},
        )
        logger.info("ImageDownloader initialized")

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("ImageDownloader shutdown")

    async def download_image(self, url: str) -> bytes | None:
        """Download an image.

        Args:
            url: Image URL.

        Returns:
            Image bytes, or None on network failure, non-2xx status or a
            non-image content type.
        """
        if not self._http_client:
            logger.warning("ImageDownloader not initialized, skipping image", url=url)
            return None

        logger.debug("Downloading image", url=url[:80])

        try:
            response = await self._http_client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Image download error", url=url[:80], error=str(e))
            return None

        if not response.is_success:
            logger.warning(
                "Image download failed", url=url[:80], status_code=response.status_code
            )
            return None

        content_type = response.headers.get("content-type", "")
        if not content_type.lower().startswith("image/"):
            logger.warning("Unexpected content type", url=url[:80], content_type=content_type)
            return None

        content = response.content
        logger.info("Downloaded image", size_bytes=len(content))
        return content
