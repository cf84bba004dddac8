"""Unit tests for ImageDownloader."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from recipe_ingest.services.media.downloader import ImageDownloader


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings


pytestmark = pytest.mark.unit

IMAGE_URL = "https://cdn.test/cover.jpg"


@pytest.fixture
async def downloader(settings: Settings) -> AsyncIterator[ImageDownloader]:
    """Initialized image downloader."""
    image_downloader = ImageDownloader(settings)
    await image_downloader.initialize()
    yield image_downloader
    await image_downloader.shutdown()


class TestDownloadImage:
    """Tests for download_image."""

    @respx.mock
    async def test_returns_bytes(self, downloader: ImageDownloader) -> None:
        """Should return the image body."""
        respx.get(IMAGE_URL).mock(
            return_value=httpx.Response(
                200, content=b"jpeg-bytes", headers={"Content-Type": "image/jpeg"}
            )
        )

        assert await downloader.download_image(IMAGE_URL) == b"jpeg-bytes"

    @respx.mock
    async def test_non_image_content_type(self, downloader: ImageDownloader) -> None:
        """Should reject an HTML error page served with 200."""
        respx.get(IMAGE_URL).mock(
            return_value=httpx.Response(
                200, text="<html>login</html>", headers={"Content-Type": "text/html"}
            )
        )

        assert await downloader.download_image(IMAGE_URL) is None

    @respx.mock
    async def test_error_status(self, downloader: ImageDownloader) -> None:
        """Should return None for a non-2xx response."""
        respx.get(IMAGE_URL).mock(return_value=httpx.Response(403))

        assert await downloader.download_image(IMAGE_URL) is None

    @respx.mock
    async def test_network_failure(self, downloader: ImageDownloader) -> None:
        """Should return None instead of raising on network errors."""
        respx.get(IMAGE_URL).mock(side_effect=httpx.ConnectError("refused"))

        assert await downloader.download_image(IMAGE_URL) is None

    @respx.mock
    async def test_timeout(self, downloader: ImageDownloader) -> None:
        """Should return None on timeout."""
        respx.get(IMAGE_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        assert await downloader.download_image(IMAGE_URL) is None

    async def test_not_initialized(self, settings: Settings) -> None:
        """Should return None rather than raise before initialize."""
        assert await ImageDownloader(settings).download_image(IMAGE_URL) is None
