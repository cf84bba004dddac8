"""Social post models.

ApifyPost mirrors one dataset item of the Instagram post scraper actor;
SourcePost is the transient shape the extraction pipeline works with.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class PostType(StrEnum):
    """Kind of social post, which decides the cover image."""

    PHOTO = "photo"
    CAROUSEL = "carousel"
    VIDEO = "video"


_APIFY_TYPES = {
    "Photo": PostType.PHOTO,
    "Image": PostType.PHOTO,
    "Sidecar": PostType.CAROUSEL,
    "Video": PostType.VIDEO,
}


class ApifyImage(BaseModel):
    """One image of a carousel post."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    display_url: str | None = Field(default=None, alias="displayUrl")


class ApifyRunInput(BaseModel):
    """Input for the Instagram post scraper actor."""

    model_config = ConfigDict(populate_by_name=True)

    username: list[str]
    results_limit: int = Field(default=1, alias="resultsLimit")


class ApifyPost(BaseModel):
    """Dataset item returned by the Instagram post scraper actor."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    caption: str | None = None
    owner_username: str | None = Field(default=None, alias="ownerUsername")
    owner_full_name: str | None = Field(default=None, alias="ownerFullName")
    url: str | None = None
    short_code: str | None = Field(default=None, alias="shortCode")
    timestamp: str | None = None
    type: str | None = None
    hashtags: list[str] = Field(default_factory=list)
    display_url: str | None = Field(default=None, alias="displayUrl")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    images: list[ApifyImage] | None = None

    def to_source_post(self) -> SourcePost:
        """Convert to the pipeline's SourcePost."""
        image_urls = [image.display_url for image in self.images or [] if image.display_url]
        return SourcePost(
            caption=self.caption or "",
            owner_username=self.owner_username or "",
            owner_display_name=self.owner_full_name or None,
            post_type=_APIFY_TYPES.get(self.type or "", PostType.PHOTO),
            display_url=self.display_url,
            thumbnail_url=self.thumbnail_url,
            image_urls=image_urls,
            permalink=self.url,
        )


class SourcePost(BaseModel):
    """A fetched social post. Lives only for one extraction."""

    caption: str
    owner_username: str
    owner_display_name: str | None = None
    post_type: PostType = PostType.PHOTO
    display_url: str | None = None
    thumbnail_url: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    permalink: str | None = None

    @property
    def author_name(self) -> str:
        """Display name when set, otherwise the handle."""
        return self.owner_display_name or self.owner_username


def select_cover_image(post: SourcePost) -> str | None:
    """Pick the cover image URL for a post.

    Carousels use their first image, videos their thumbnail, and everything
    else (or a carousel/video missing that image) the primary display image.
    """
    if post.post_type is PostType.CAROUSEL and post.image_urls:
        return post.image_urls[0]
    if post.post_type is PostType.VIDEO and post.thumbnail_url:
        return post.thumbnail_url
    return post.display_url
