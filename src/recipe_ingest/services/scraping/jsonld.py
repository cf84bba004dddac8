"""Structured recipe data extraction from HTML.

Finds schema.org Recipe objects in JSON-LD script blocks and the
Open Graph cover image of a page. Both work on raw HTML with regular
expressions and never raise on malformed markup.
"""

from __future__ import annotations

import html as html_lib
import json
import re
from typing import Any

from recipe_ingest.observability.logging import get_logger


logger = get_logger(__name__)

RECIPE_TYPE = "Recipe"

_JSONLD_PATTERN = re.compile(
    r"<script[^>]*type=[\"']application/ld\+json[\"'][^>]*>(.*?)</script>",
    re.DOTALL | re.IGNORECASE,
)

# Attribute order inside <meta> varies between sites
_OG_IMAGE_PATTERNS = (
    re.compile(
        r"<meta[^>]+property=[\"']og:image[\"'][^>]+content=[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    ),
    re.compile(
        r"<meta[^>]+content=[\"']([^\"']+)[\"'][^>]+property=[\"']og:image[\"']",
        re.IGNORECASE,
    ),
)


def extract_structured_recipe(html: str) -> dict[str, Any] | None:
    """Return the first schema.org Recipe object embedded as JSON-LD.

    Script blocks are scanned in document order. Blocks that are not valid
    JSON are skipped.

    Args:
        html: HTML content to parse.

    Returns:
        The Recipe object as a dict, or None if the page has none.
    """
    for index, block in enumerate(_JSONLD_PATTERN.findall(html)):
        try:
            data = json.loads(block.strip())
        except json.JSONDecodeError:
            logger.debug("Skipping malformed JSON-LD block", block_index=index)
            continue

        for candidate in _candidates(data):
            if _is_recipe(candidate):
                return candidate

    return None


def _candidates(data: Any) -> list[Any]:
    """Normalize a parsed JSON-LD value into a list of candidate objects.

    A top-level array is used as-is, a ``@graph`` array is unwrapped and any
    other value becomes a one-element list.
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("@graph"), list):
        return data["@graph"]
    return [data]


def _is_recipe(candidate: Any) -> bool:
    if not isinstance(candidate, dict):
        return False
    schema_type = candidate.get("@type")
    if isinstance(schema_type, list):
        return RECIPE_TYPE in schema_type
    return schema_type == RECIPE_TYPE


def extract_cover_image(html: str) -> str | None:
    """Read the ``og:image`` meta tag.

    Args:
        html: HTML content to parse.

    Returns:
        The image URL with HTML entities decoded, or None.
    """
    for pattern in _OG_IMAGE_PATTERNS:
        match = pattern.search(html)
        if match:
            return html_lib.unescape(match.group(1))
    return None
