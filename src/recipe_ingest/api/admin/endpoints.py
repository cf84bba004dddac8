"""Admin pages for failed imports.

Served by a separate app on the admin port, which is expected to be
reachable only from a private network. There is no authentication.
"""

from __future__ import annotations

import html
from typing import Annotated

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from recipe_ingest.api.dependencies import get_import_ledger
from recipe_ingest.database.repositories import (
    ImportAttempt,
    ImportAttemptRepository,  # noqa: TC001
)
from recipe_ingest.observability.logging import get_logger
from recipe_ingest.workers.jobs import enqueue_recipe_ingestion


logger = get_logger(__name__)

router = APIRouter(tags=["admin"])

_PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>recipe ingest admin</title>
  <style>
    body {{ font-family: monospace; padding: 2rem; }}
    table {{ border-collapse: collapse; width: 100%; }}
    th, td {{ text-align: left; padding: 0.5rem 1rem; border-bottom: 1px solid #ddd; }}
    th {{ background: #f5f5f5; }}
    a {{ color: inherit; }}
    button {{ cursor: pointer; }}
  </style>
</head>
<body>
  <h1>Failed imports ({count})</h1>
  {content}
</body>
</html>"""

_TABLE = """<table>
    <thead><tr><th>URL</th><th>Attempts</th><th>Requested</th><th></th></tr></thead>
    <tbody>{rows}</tbody>
  </table>
  <br />
  <form method="POST" action="/retry">
    <input type="hidden" name="all" value="true" />
    <button type="submit">Retry all ({count})</button>
  </form>"""

_ROW = """
      <tr>
        <td><a href="{url}" target="_blank">{url}</a></td>
        <td>{attempts}</td>
        <td>{requested}</td>
        <td>
          <form method="POST" action="/retry">
            <input type="hidden" name="url" value="{url}" />
            <button type="submit">Retry</button>
          </form>
        </td>
      </tr>"""


def render_failed_imports(failed: list[ImportAttempt]) -> str:
    """Render the failed-imports page. Every interpolated value is escaped."""
    if not failed:
        content = "<p>No failures.</p>"
    else:
        rows = "".join(
            _ROW.format(
                url=html.escape(attempt.url, quote=True),
                attempts=attempt.attempts_count,
                requested=html.escape(
                    attempt.requested_at.strftime("%Y-%m-%d %H:%M:%S %Z")
                ),
            )
            for attempt in failed
        )
        content = _TABLE.format(rows=rows, count=len(failed))
    return _PAGE.format(count=len(failed), content=content)


@router.get("/", response_class=HTMLResponse)
async def failed_imports(
    ledger: Annotated[ImportAttemptRepository, Depends(get_import_ledger)],
) -> HTMLResponse:
    """List URLs that were processed but never imported."""
    failed = await ledger.list_failed()
    return HTMLResponse(render_failed_imports(failed))


@router.post("/retry")
async def retry(
    ledger: Annotated[ImportAttemptRepository, Depends(get_import_ledger)],
    url: Annotated[str | None, Form()] = None,
    all: Annotated[str | None, Form()] = None,  # noqa: A002
) -> Response:
    """Re-queue one failed URL, or every failed URL with ``all=true``."""
    if all == "true":
        failed = await ledger.list_failed()
        for attempt in failed:
            await enqueue_recipe_ingestion(attempt.url)
        logger.info("Retrying all failed URLs", count=len(failed))
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    if not url:
        return PlainTextResponse("Missing url", status_code=status.HTTP_400_BAD_REQUEST)

    await enqueue_recipe_ingestion(url)
    logger.info("Retrying failed URL", url=url)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
