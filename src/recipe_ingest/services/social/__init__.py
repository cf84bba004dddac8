"""Social post fetching via Apify."""

from recipe_ingest.services.social.client import ApifyClient
from recipe_ingest.services.social.exceptions import (
    SocialNoResultsError,
    SocialResponseError,
    SocialTimeoutError,
    SocialUnavailableError,
    UpstreamError,
)
from recipe_ingest.services.social.schemas import PostType, SourcePost, select_cover_image


__all__ = [
    "ApifyClient",
    "PostType",
    "SocialNoResultsError",
    "SocialResponseError",
    "SocialTimeoutError",
    "SocialUnavailableError",
    "SourcePost",
    "UpstreamError",
    "select_cover_image",
]
