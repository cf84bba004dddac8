"""Request authentication."""

from recipe_ingest.auth.token import parse_bearer_token, require_api_token


__all__ = ["parse_bearer_token", "require_api_token"]
