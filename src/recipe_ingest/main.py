"""Application entry point.

Usage:
    # Both servers in one process
    python -m recipe_ingest.main

    # Servers separately
    uvicorn recipe_ingest.main:app --port 3000
    uvicorn recipe_ingest.main:admin_app --port 3001

    # Worker
    arq recipe_ingest.workers.arq.WorkerSettings
"""

from __future__ import annotations

import asyncio

import uvicorn

from recipe_ingest.core.config import get_settings
from recipe_ingest.core.events import start_resources, stop_resources
from recipe_ingest.factory import create_admin_app, create_app


app = create_app()
admin_app = create_admin_app()


async def serve() -> None:
    """Run the API and admin servers until either stops."""
    settings = get_settings()

    await start_resources(settings)
    try:
        servers = [
            uvicorn.Server(
                uvicorn.Config(
                    app,
                    host=settings.server.host,
                    port=settings.server.port,
                    log_config=None,
                )
            ),
            uvicorn.Server(
                uvicorn.Config(
                    admin_app,
                    host=settings.server.admin_host,
                    port=settings.server.admin_port,
                    log_config=None,
                )
            ),
        ]
        await asyncio.gather(*(server.serve() for server in servers))
    finally:
        await stop_resources()


def run() -> None:
    """Console entry point."""
    asyncio.run(serve())


if __name__ == "__main__":
    run()
