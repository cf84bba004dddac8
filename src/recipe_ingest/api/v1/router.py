"""API v1 router aggregating all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from recipe_ingest.api.v1.endpoints import health, ingest


router = APIRouter()

router.include_router(health.router)
router.include_router(ingest.router)
