"""Rate limiting using SlowAPI.

Limits are per client IP. Storage is in-process by default and can point
at Redis through ``rate_limiting.storage_uri`` when several API processes
share one limit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from recipe_ingest.core.config import get_settings
from recipe_ingest.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

logger = get_logger(__name__)


def create_limiter() -> Limiter:
    """Create and configure the rate limiter.

    Returns:
        Configured Limiter instance.
    """
    settings = get_settings()

    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
        enabled=not settings.is_testing,
    )


# Global limiter instance
limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle rate limit exceeded exceptions.

    Args:
        request: The incoming request.
        exc: The rate limit exception.

    Returns:
        JSON response with rate limit error details.
    """
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMIT_EXCEEDED",
            "message": "Too many requests. Please try again later.",
        },
        headers={"Retry-After": "60"},
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Configure rate limiting for the FastAPI application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
