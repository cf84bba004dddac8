"""Application factories for the API and admin apps.

This module provides:
- create_app: the public ingest API
- create_admin_app: the failed-imports page, served on its own port
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from recipe_ingest.api.admin.endpoints import router as admin_router
from recipe_ingest.api.rate_limit import setup_rate_limiting
from recipe_ingest.api.v1.endpoints.health import router as health_router
from recipe_ingest.api.v1.router import router as v1_router
from recipe_ingest.core.config import Settings, get_settings
from recipe_ingest.core.events import lifespan
from recipe_ingest.core.exceptions import setup_exception_handlers


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the ingest API application.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Turns social posts and recipe pages into recipe list entries",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
        debug=settings.app.debug,
    )

    app.state.settings = settings

    setup_rate_limiting(app)
    setup_exception_handlers(app)

    app.include_router(v1_router, prefix=settings.api.prefix)

    return app


def create_admin_app(settings: Settings | None = None) -> FastAPI:
    """Create the admin application.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance without API docs.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app.name} admin",
        version=settings.app.version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        debug=settings.app.debug,
    )

    app.state.settings = settings

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(admin_router)

    return app
