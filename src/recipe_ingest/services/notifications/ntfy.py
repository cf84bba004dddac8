"""ntfy push notifications.

Ingestion outcomes are only ever reported here, never through the request
that triggered them. Delivery is best effort: failures are logged and
swallowed so a notification problem can never fail a job.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

import httpx

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_ingest.core.config import Settings


logger = get_logger(__name__)


class Priority(StrEnum):
    """ntfy message priorities."""

    MIN = "min"
    LOW = "low"
    DEFAULT = "default"
    HIGH = "high"
    URGENT = "urgent"


def _ascii_url(url: str) -> str | None:
    """Percent-encode a URL for use as a header value, or None if unparseable."""
    try:
        return str(httpx.URL(url))
    except httpx.InvalidURL:
        logger.warning("Dropping unparseable click URL", url=url)
        return None


class NtfyNotifier:
    """Sends ingestion outcomes to an ntfy topic.

    Example:
        ```python
        notifier = NtfyNotifier()
        await notifier.initialize()

        await notifier.notify_success("Pad Thai", "https://example.com/pad-thai")

        await notifier.shutdown()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._http_client: httpx.AsyncClient | None = None

    @property
    def topic_url(self) -> str:
        """Publish URL of the configured topic."""
        ntfy = self._settings.notifications.ntfy
        return f"{ntfy.url.rstrip('/')}/{self._settings.NTFY_TOPIC}"

    @property
    def enabled(self) -> bool:
        """Whether messages are actually delivered."""
        return (
            self._settings.notifications.ntfy.enabled
            and bool(self._settings.NTFY_TOPIC)
        )

    async def initialize(self) -> None:
        """Initialize HTTP client."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.notifications.ntfy.timeout),
        )
        logger.info("NtfyNotifier initialized", enabled=self.enabled)

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("NtfyNotifier shutdown")

    async def notify_success(self, recipe_name: str, source_url: str) -> None:
        """Report a stored recipe."""
        await self.send(
            title="Recipe Added",
            message=f'"{recipe_name}" has been added to AnyList',
            tags=["white_check_mark", "cook"],
            click=source_url,
        )

    async def notify_not_recipe(self, reason: str, source_url: str) -> None:
        """Report a source that held no recipe."""
        await self.send(
            title="Not a Recipe",
            message=reason,
            tags=["shrug"],
            priority=Priority.LOW,
            click=source_url,
        )

    async def notify_error(self, error_message: str, source_url: str | None = None) -> None:
        """Report a failed ingestion."""
        message = f"{error_message}\n\n{source_url}" if source_url else error_message
        await self.send(
            title="Recipe Error",
            message=message,
            tags=["x", "warning"],
            priority=Priority.HIGH,
            click=source_url,
        )

    async def send(
        self,
        *,
        title: str,
        message: str,
        tags: list[str] | None = None,
        priority: Priority | None = None,
        click: str | None = None,
    ) -> bool:
        """Publish one message.

        Args:
            title: Notification title.
            message: Notification body.
            tags: ntfy tags, rendered as emoji by clients.
            priority: Message priority, server default when omitted.
            click: URL opened when the notification is tapped.

        Returns:
            True if the message was accepted, False otherwise.
        """
        if not self.enabled:
            logger.info("Notifications disabled, not sending", title=title, body=message)
            return False

        if not self._http_client:
            logger.warning("NtfyNotifier not initialized, dropping notification", title=title)
            return False

        try:
            headers = {"Title": title}
            if tags:
                headers["Tags"] = ",".join(tags)
            if priority:
                headers["Priority"] = priority.value
            click_url = _ascii_url(click) if click else None
            if click_url:
                headers["Click"] = click_url

            response = await self._http_client.post(
                self.topic_url,
                content=message.encode(),
                headers=headers,
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
            logger.warning("Failed to send notification", title=title, error=str(e))
            return False

        if not response.is_success:
            logger.warning(
                "ntfy rejected notification",
                title=title,
                status_code=response.status_code,
                body=response.text[:200],
            )
            return False

        logger.debug("Notification sent", title=title)
        return True
