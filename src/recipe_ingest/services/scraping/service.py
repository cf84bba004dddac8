"""Recipe page fetching.

Retrieves web pages with browser-like headers under a hard timeout and
exposes the structured-data helpers from ``jsonld`` on fetched HTML.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger
from recipe_ingest.services.scraping.exceptions import (
    NetworkError,
    PageStatusError,
    ScrapingTimeoutError,
)
from recipe_ingest.services.scraping.jsonld import (
    extract_cover_image,
    extract_structured_recipe,
)


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings


logger = get_logger(__name__)


class PageFetcher:
    """Fetches recipe pages and extracts their structured data.

    Example:
        ```python
        fetcher = PageFetcher()
        await fetcher.initialize()

        html = await fetcher.fetch_page("https://example.com/recipe")
        data = fetcher.extract_structured_recipe(html)

        await fetcher.shutdown()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._http_client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Initialize HTTP client with browser-like headers."""
        scraping = self._settings.scraping
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(scraping.fetch_timeout),
            follow_redirects=True,
            headers={
                "User-Agent": scraping.user_agent,
                "Accept": scraping.accept,
                "Accept-Language": scraping.accept_language,
            },
        )
        logger.info("PageFetcher initialized", timeout=scraping.fetch_timeout)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("PageFetcher shutdown")

    async def fetch_page(self, url: str) -> str:
        """Fetch HTML content from a URL.

        Args:
            url: The URL to fetch.

        Returns:
            HTML content as string.

        Raises:
            ScrapingTimeoutError: If the request exceeds the fetch timeout.
            PageStatusError: If the response status is not 2xx.
            NetworkError: If the request fails for any other reason.
        """
        if not self._http_client:
            msg = "PageFetcher not initialized. Call initialize() first."
            raise RuntimeError(msg)

        try:
            async with asyncio.timeout(self._settings.scraping.fetch_timeout):
                response = await self._http_client.get(url)
            response.raise_for_status()

        except (httpx.TimeoutException, TimeoutError) as e:
            logger.warning("Request timed out", url=url, error=str(e))
            error_msg = f"Request timed out: {url}"
            raise ScrapingTimeoutError(error_msg) from e

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning("HTTP error fetching URL", url=url, status_code=status_code)
            error_msg = f"HTTP {status_code} fetching {url}"
            raise PageStatusError(status_code, error_msg) from e

        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning("Request error fetching URL", url=url, error=str(e))
            error_msg = f"Failed to fetch {url}: {e}"
            raise NetworkError(error_msg) from e

        html: str = response.text
        logger.debug("Fetched page", url=url, length=len(html))
        return html

    def extract_structured_recipe(self, html: str) -> dict[str, Any] | None:
        """Return the page's schema.org Recipe JSON-LD object, if any."""
        return extract_structured_recipe(html)

    def extract_cover_image(self, html: str) -> str | None:
        """Return the page's og:image URL, if any."""
        return extract_cover_image(html)
