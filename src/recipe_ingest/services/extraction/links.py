"""URL routing and caption link extraction.

Pure functions with no I/O:
- classify_source decides which extraction route a URL takes
- extract_caption_link finds the first off-platform URL in a caption
- source_name_for_page derives the attribution for a recipe page
"""

from __future__ import annotations

import re
from functools import lru_cache
from urllib.parse import urlsplit

from recipe_ingest.services.extraction.models import SourceRoute


INSTAGRAM_DOMAIN = "instagram.com"

# A newline directly followed by a non-space character is a wrap inside a URL
_WRAPPED_LINE = re.compile(r"\n(?=\S)")
_TRAILING_PUNCTUATION = re.compile(r"[.,)>\]]+$")


@lru_cache(maxsize=8)
def _link_pattern(platform_domain: str) -> re.Pattern[str]:
    domain = re.escape(platform_domain)
    return re.compile(
        rf"(?:https?://|www\.)(?!(?:www\.)?{domain})[^\s]+",
        re.IGNORECASE,
    )


def _hostname(url: str) -> str | None:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def is_platform_url(url: str, platform_domain: str = INSTAGRAM_DOMAIN) -> bool:
    """Check whether a URL points at the social platform itself.

    Args:
        url: Absolute URL to check.
        platform_domain: The platform's registrable domain.

    Returns:
        True for the bare domain and any of its subdomains.
    """
    host = _hostname(url)
    if not host:
        return False
    domain = platform_domain.lower()
    return host == domain or host.endswith(f".{domain}")


def classify_source(url: str, platform_domain: str = INSTAGRAM_DOMAIN) -> SourceRoute:
    """Pick the extraction route for an ingested URL.

    Args:
        url: The ingested URL.
        platform_domain: The social platform's domain.

    Returns:
        SourceRoute.SOCIAL for platform posts, SourceRoute.DIRECT_PAGE otherwise.
    """
    if is_platform_url(url, platform_domain):
        return SourceRoute.SOCIAL
    return SourceRoute.DIRECT_PAGE


def extract_caption_link(
    caption: str,
    platform_domain: str = INSTAGRAM_DOMAIN,
) -> str | None:
    """Find the first URL in a caption that leaves the social platform.

    Line breaks that split a URL are removed first, then the caption is
    scanned for tokens starting with ``http://``, ``https://`` or ``www.``.
    Platform links are skipped, trailing sentence punctuation is stripped,
    and bare ``www.`` links get an ``https://`` scheme.

    Args:
        caption: Raw caption text.
        platform_domain: Domain whose links are ignored.

    Returns:
        The normalized URL, or None if the caption has no usable link.
    """
    if not caption:
        return None

    joined = _WRAPPED_LINE.sub("", caption)
    match = _link_pattern(platform_domain.lower()).search(joined)
    if match is None:
        return None

    url = _TRAILING_PUNCTUATION.sub("", match.group(0))
    if not url:
        return None
    if not url.lower().startswith("http"):
        url = f"https://{url}"
    return url


def source_name_for_page(url: str) -> str:
    """Human-readable attribution for a recipe page: its host without ``www.``."""
    host = _hostname(url) or url
    return host.removeprefix("www.")
