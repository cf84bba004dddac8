"""Outcome notifications."""

from recipe_ingest.services.notifications.ntfy import NtfyNotifier, Priority


__all__ = ["NtfyNotifier", "Priority"]
