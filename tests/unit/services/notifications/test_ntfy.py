"""Unit tests for NtfyNotifier."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from recipe_ingest.services.notifications.ntfy import NtfyNotifier, Priority


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings


pytestmark = pytest.mark.unit

TOPIC_URL = "https://ntfy.test/recipes-test"


@pytest.fixture
async def notifier(settings: Settings) -> AsyncIterator[NtfyNotifier]:
    """Initialized notifier pointed at the test topic."""
    ntfy = NtfyNotifier(settings)
    await ntfy.initialize()
    yield ntfy
    await ntfy.shutdown()


class TestMessages:
    """Tests for the three outcome notifications."""

    @respx.mock
    async def test_success(self, notifier: NtfyNotifier) -> None:
        """Should announce the stored recipe and link its source."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        await notifier.notify_success("Pad Thai", "https://example.com/pad-thai")

        request = route.calls.last.request
        assert request.content == b'"Pad Thai" has been added to AnyList'
        assert request.headers["Title"] == "Recipe Added"
        assert request.headers["Tags"] == "white_check_mark,cook"
        assert request.headers["Click"] == "https://example.com/pad-thai"
        assert "Priority" not in request.headers

    @respx.mock
    async def test_not_recipe(self, notifier: NtfyNotifier) -> None:
        """Should send the reason at low priority."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        await notifier.notify_not_recipe("a sunset", "https://example.com/p")

        request = route.calls.last.request
        assert request.content == b"a sunset"
        assert request.headers["Title"] == "Not a Recipe"
        assert request.headers["Priority"] == "low"

    @respx.mock
    async def test_error_includes_url(self, notifier: NtfyNotifier) -> None:
        """Should append the source URL to the error body."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        await notifier.notify_error("Apify timed out", "https://example.com/p")

        request = route.calls.last.request
        assert request.content == b"Apify timed out\n\nhttps://example.com/p"
        assert request.headers["Priority"] == "high"
        assert request.headers["Tags"] == "x,warning"

    @respx.mock
    async def test_error_without_url(self, notifier: NtfyNotifier) -> None:
        """Should send only the message when no URL is known."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        await notifier.notify_error("boom")

        request = route.calls.last.request
        assert request.content == b"boom"
        assert "Click" not in request.headers

    @respx.mock
    async def test_unicode_body(self, notifier: NtfyNotifier) -> None:
        """Should send the body as UTF-8."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        await notifier.notify_success("Crème brûlée", "https://example.com/cb")

        assert "Crème brûlée".encode() in route.calls.last.request.content

    @respx.mock
    async def test_non_ascii_source_url(self, notifier: NtfyNotifier) -> None:
        """Should percent-encode a non-ASCII link in the Click header."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        sent = await notifier.send(
            title="Recipe Added",
            message="ok",
            click="https://example.fr/recettes/crème-brûlée/",
        )

        assert sent is True
        click = route.calls.last.request.headers["Click"]
        assert click.isascii()
        assert click.startswith("https://example.fr/recettes/cr%C3%A8me-br%C3%BBl")

    @respx.mock
    async def test_notify_success_with_non_ascii_url(
        self, notifier: NtfyNotifier
    ) -> None:
        """Should deliver the success message for an accented page URL."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        await notifier.notify_success(
            "Crème brûlée", "https://example.fr/recettes/crème-brûlée/"
        )

        assert route.called

    @respx.mock
    async def test_unparseable_click_is_dropped(self, notifier: NtfyNotifier) -> None:
        """Should still send the message without a Click header."""
        route = respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        sent = await notifier.send(title="t", message="m", click="https://chefjane.blog✨")

        assert sent is True
        assert "Click" not in route.calls.last.request.headers


class TestSend:
    """Tests for delivery failures."""

    @respx.mock
    async def test_returns_true_on_success(self, notifier: NtfyNotifier) -> None:
        """Should report an accepted message."""
        respx.post(TOPIC_URL).mock(return_value=httpx.Response(200))

        assert await notifier.send(title="t", message="m", priority=Priority.MIN)

    @respx.mock
    async def test_rejected(self, notifier: NtfyNotifier) -> None:
        """Should return False when ntfy rejects the message."""
        respx.post(TOPIC_URL).mock(return_value=httpx.Response(429))

        assert await notifier.send(title="t", message="m") is False

    @respx.mock
    async def test_network_error_is_swallowed(self, notifier: NtfyNotifier) -> None:
        """Should never raise on delivery failure."""
        respx.post(TOPIC_URL).mock(side_effect=httpx.ConnectError("refused"))

        assert await notifier.send(title="t", message="m") is False

    @respx.mock
    async def test_disabled_without_topic(self, settings: Settings) -> None:
        """Should not send anything when no topic is configured."""
        route = respx.post(url__startswith="https://ntfy.test").mock(
            return_value=httpx.Response(200)
        )
        ntfy = NtfyNotifier(settings.model_copy(update={"NTFY_TOPIC": ""}))
        await ntfy.initialize()

        sent = await ntfy.send(title="t", message="m")
        await ntfy.shutdown()

        assert sent is False
        assert ntfy.enabled is False
        assert not route.called

    async def test_not_initialized(self, settings: Settings) -> None:
        """Should drop the message before initialize."""
        assert await NtfyNotifier(settings).send(title="t", message="m") is False
