"""Static bearer-token authentication.

The ingest endpoint is called by personal automations (share sheets,
shortcuts) holding one shared secret, API_TOKEN.
"""

from __future__ import annotations

import secrets
from typing import Annotated, Final

from fastapi import Depends, Header

from recipe_ingest.core.config import Settings, get_settings
from recipe_ingest.core.exceptions import UnauthorizedException
from recipe_ingest.observability.logging import get_logger


logger = get_logger(__name__)

BEARER_PREFIX: Final[str] = "Bearer "


def parse_bearer_token(authorization: str | None) -> str | None:
    """Return the token of a ``Bearer`` Authorization header, if any."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :]


async def require_api_token(
    settings: Annotated[Settings, Depends(get_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Reject requests without the configured API token.

    Raises:
        UnauthorizedException: If the header is missing, not a bearer
            token or does not match API_TOKEN.
    """
    token = parse_bearer_token(authorization)
    if token is None:
        raise UnauthorizedException("Missing Authorization header")

    expected = settings.API_TOKEN
    if not expected or not secrets.compare_digest(token.encode(), expected.encode()):
        logger.warning("Rejected request with invalid API token")
        raise UnauthorizedException("Invalid API token")
