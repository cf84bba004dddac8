"""Recipe page fetching and structured data extraction."""

from recipe_ingest.services.scraping.exceptions import (
    NetworkError,
    PageStatusError,
    ScrapingError,
    ScrapingTimeoutError,
)
from recipe_ingest.services.scraping.jsonld import (
    extract_cover_image,
    extract_structured_recipe,
)
from recipe_ingest.services.scraping.service import PageFetcher


__all__ = [
    "NetworkError",
    "PageFetcher",
    "PageStatusError",
    "ScrapingError",
    "ScrapingTimeoutError",
    "extract_cover_image",
    "extract_structured_recipe",
]
