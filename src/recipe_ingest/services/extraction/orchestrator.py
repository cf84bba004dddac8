"""Extraction orchestrator.

Turns one ingested URL into an ExtractionOutcome by ranking sources:
schema.org data from a recipe page always wins over a free-form caption,
and the caption is only used on its own when no page data is reachable.

Social route:
    fetch post -> find link in caption -> (best effort) fetch linked page
    data -> merge or caption-only synthesis -> (best effort) cover image

Direct-page route:
    fetch page -> structured data or NotRecipe -> synthesis ->
    (best effort) og:image

Mandatory steps (post fetch, direct page fetch, synthesis) propagate their
errors. Best-effort steps log and continue without the enrichment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin

from recipe_ingest.observability.logging import get_logger
from recipe_ingest.services.extraction.links import (
    INSTAGRAM_DOMAIN,
    classify_source,
    extract_caption_link,
    source_name_for_page,
)
from recipe_ingest.services.extraction.models import (
    Extracted,
    ExtractionOutcome,
    NotRecipe,
    NotRecipeParse,
    SourceRoute,
)
from recipe_ingest.services.scraping.exceptions import ScrapingError
from recipe_ingest.services.social.schemas import select_cover_image


if TYPE_CHECKING:
    from recipe_ingest.services.extraction.synthesizer import RecipeSynthesizer
    from recipe_ingest.services.media.downloader import ImageDownloader
    from recipe_ingest.services.scraping.service import PageFetcher
    from recipe_ingest.services.social.client import ApifyClient


logger = get_logger(__name__)

NO_STRUCTURED_DATA_REASON = "no structured recipe data found"


class RecipeExtractor:
    """Composes fetchers and the synthesizer into one extraction per URL.

    Example:
        ```python
        extractor = RecipeExtractor(
            post_fetcher=apify_client,
            page_fetcher=page_fetcher,
            image_downloader=image_downloader,
            synthesizer=RecipeSynthesizer(llm_client),
        )
        outcome = await extractor.extract("https://www.instagram.com/p/abc/")
        ```
    """

    def __init__(
        self,
        *,
        post_fetcher: ApifyClient,
        page_fetcher: PageFetcher,
        image_downloader: ImageDownloader,
        synthesizer: RecipeSynthesizer,
        platform_domain: str = INSTAGRAM_DOMAIN,
    ) -> None:
        self._post_fetcher = post_fetcher
        self._page_fetcher = page_fetcher
        self._image_downloader = image_downloader
        self._synthesizer = synthesizer
        self._platform_domain = platform_domain

    async def extract(self, url: str) -> ExtractionOutcome:
        """Extract a recipe from an ingested URL.

        Args:
            url: The ingested social post or recipe page URL.

        Returns:
            Extracted with a validated recipe, or NotRecipe with a reason.

        Raises:
            UpstreamError: If the social post cannot be fetched.
            NetworkError: If a directly ingested page cannot be fetched.
            SynthesisError: If the model output is invalid.
            LLMError: If the model call fails.
        """
        route = classify_source(url, self._platform_domain)
        logger.info("Extracting recipe", url=url, route=route.value)

        if route is SourceRoute.SOCIAL:
            return await self._extract_social(url)
        return await self._extract_direct_page(url)

    async def _extract_social(self, url: str) -> ExtractionOutcome:
        post = await self._post_fetcher.fetch_post(url)

        linked_url = extract_caption_link(post.caption, self._platform_domain)
        structured_data = (
            await self._try_fetch_structured_data(linked_url) if linked_url else None
        )

        if structured_data and linked_url:
            result = await self._synthesizer.from_structured_data_and_caption(
                structured_data, post.caption
            )
            source_url = linked_url
        else:
            if linked_url:
                logger.warning(
                    "No structured data at caption link, falling back to caption",
                    linked_url=linked_url,
                )
            result = await self._synthesizer.from_caption(post.caption)
            source_url = url

        if isinstance(result, NotRecipeParse):
            return NotRecipe(reason=result.reason)

        photo = await self._download_cover(select_cover_image(post))

        return Extracted(
            recipe=result.recipe,
            source_url=source_url,
            source_name=post.author_name,
            photo=photo,
            confidence=result.confidence,
        )

    async def _extract_direct_page(self, url: str) -> ExtractionOutcome:
        html = await self._page_fetcher.fetch_page(url)

        structured_data = self._page_fetcher.extract_structured_recipe(html)
        if not structured_data:
            logger.info("Page has no Recipe JSON-LD", url=url)
            return NotRecipe(reason=NO_STRUCTURED_DATA_REASON)

        result = await self._synthesizer.from_structured_data(structured_data)
        if isinstance(result, NotRecipeParse):
            return NotRecipe(reason=result.reason)

        image_url = self._page_fetcher.extract_cover_image(html)
        photo = await self._download_cover(urljoin(url, image_url) if image_url else None)

        return Extracted(
            recipe=result.recipe,
            source_url=url,
            source_name=source_name_for_page(url),
            photo=photo,
            confidence=result.confidence,
        )

    async def _try_fetch_structured_data(self, url: str) -> dict[str, Any] | None:
        """Fetch a linked page's Recipe JSON-LD, or None on any fetch failure."""
        try:
            html = await self._page_fetcher.fetch_page(url)
        except ScrapingError as e:
            logger.warning(
                "Failed to fetch linked recipe page",
                linked_url=url,
                error=str(e),
            )
            return None
        return self._page_fetcher.extract_structured_recipe(html)

    async def _download_cover(self, image_url: str | None) -> bytes | None:
        if not image_url:
            logger.debug("No cover image available")
            return None
        return await self._image_downloader.download_image(image_url)
