"""Cover image download."""

from recipe_ingest.services.media.downloader import ImageDownloader


__all__ = ["ImageDownloader"]
