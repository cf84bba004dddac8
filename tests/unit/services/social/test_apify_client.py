"""Unit tests for ApifyClient."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

import httpx
import orjson
import pytest
import respx

from recipe_ingest.services.social.client import ApifyClient
from recipe_ingest.services.social.exceptions import (
    SocialNoResultsError,
    SocialResponseError,
    SocialTimeoutError,
    SocialUnavailableError,
    UpstreamError,
)


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings


pytestmark = pytest.mark.unit

RUN_URL = "https://apify.test/v2/acts/actor123/run-sync-get-dataset-items"
POST_URL = "https://www.instagram.com/p/abc123/"

DATASET_ITEM = {
    "caption": "Crispy tofu. Recipe: https://tofu.example/crispy",
    "ownerUsername": "tofulover",
    "ownerFullName": "Tofu Lover",
    "type": "Image",
    "displayUrl": "https://cdn.test/tofu.jpg",
    "url": POST_URL,
}


@pytest.fixture
async def client(settings: Settings) -> AsyncIterator[ApifyClient]:
    """Initialized Apify client."""
    apify = ApifyClient(settings)
    await apify.initialize()
    yield apify
    await apify.shutdown()


class TestFetchPost:
    """Tests for fetch_post."""

    def test_run_url(self, settings: Settings) -> None:
        """Should point at the actor's synchronous dataset endpoint."""
        assert ApifyClient(settings).run_url == RUN_URL

    @respx.mock
    async def test_returns_first_item(self, client: ApifyClient) -> None:
        """Should convert the first dataset item and send the run input."""
        route = respx.post(RUN_URL).mock(
            return_value=httpx.Response(200, json=[DATASET_ITEM, {"caption": "other"}])
        )

        post = await client.fetch_post(POST_URL)

        assert post.caption.startswith("Crispy tofu")
        assert post.author_name == "Tofu Lover"
        assert post.display_url == "https://cdn.test/tofu.jpg"

        request = route.calls.last.request
        assert request.url.params["token"] == "test-apify-token"
        assert orjson.loads(request.content) == {
            "username": [POST_URL],
            "resultsLimit": 1,
        }

    @respx.mock
    async def test_empty_dataset(self, client: ApifyClient) -> None:
        """Should raise SocialNoResultsError for an empty run."""
        respx.post(RUN_URL).mock(return_value=httpx.Response(200, json=[]))

        with pytest.raises(SocialNoResultsError):
            await client.fetch_post(POST_URL)

    @respx.mock
    async def test_error_status(self, client: ApifyClient) -> None:
        """Should raise SocialResponseError with the status code."""
        respx.post(RUN_URL).mock(return_value=httpx.Response(402, text="payment"))

        with pytest.raises(SocialResponseError) as exc_info:
            await client.fetch_post(POST_URL)

        assert exc_info.value.status_code == 402

    @pytest.mark.parametrize("body", [b"not json", b'{"items": []}'])
    @respx.mock
    async def test_malformed_body(self, client: ApifyClient, body: bytes) -> None:
        """Should raise SocialResponseError for a body that is not an item list."""
        respx.post(RUN_URL).mock(return_value=httpx.Response(200, content=body))

        with pytest.raises(SocialResponseError):
            await client.fetch_post(POST_URL)

    @respx.mock
    async def test_timeout(self, client: ApifyClient) -> None:
        """Should raise SocialTimeoutError when the run times out."""
        respx.post(RUN_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(SocialTimeoutError):
            await client.fetch_post(POST_URL)

    @respx.mock
    async def test_unreachable(self, client: ApifyClient) -> None:
        """Should raise SocialUnavailableError on connection failure."""
        respx.post(RUN_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(SocialUnavailableError) as exc_info:
            await client.fetch_post(POST_URL)

        assert isinstance(exc_info.value, UpstreamError)

    async def test_requires_initialize(self, settings: Settings) -> None:
        """Should raise RuntimeError before initialize."""
        with pytest.raises(RuntimeError, match="not initialized"):
            await ApifyClient(settings).fetch_post(POST_URL)
