"""Ingest endpoint.

Accepts a URL, records it in the import ledger and queues the ingestion
job. The outcome is never returned here; it arrives later as a push
notification.
"""

# No postponed annotations: FastAPI resolves them against slowapi's wrapper.

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import (
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from recipe_ingest.api.dependencies import get_import_ledger
from recipe_ingest.api.rate_limit import limiter
from recipe_ingest.auth import require_api_token
from recipe_ingest.core.config import get_settings
from recipe_ingest.core.exceptions import ServiceUnavailableException
from recipe_ingest.database.repositories import ImportAttemptRepository
from recipe_ingest.observability.logging import get_logger
from recipe_ingest.workers.jobs import enqueue_recipe_ingestion


logger = get_logger(__name__)

router = APIRouter(tags=["ingest"])

_HTTP_URL = TypeAdapter(HttpUrl)


class IngestRequest(BaseModel):
    """Ingest request body."""

    url: str = Field(
        ...,
        description="Social post or recipe page URL",
        examples=["https://www.instagram.com/p/C0abc123/"],
    )

    @field_validator("url")
    @classmethod
    def _must_be_http_url(cls, value: str) -> str:
        # Validate without normalizing: the ledger keys on the exact string
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as e:
            msg = "url must be a valid http or https URL"
            raise ValueError(msg) from e
        return value


class IngestResponse(BaseModel):
    """Ingest acknowledgment."""

    status: str = Field(..., examples=["processing"])
    message: str | None = Field(default=None, examples=["Recipe ingestion started"])


@router.post(
    "/ingest",
    response_model=IngestResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Ingest a recipe URL",
    dependencies=[Depends(require_api_token)],
    responses={
        200: {"description": "URL was already ingested, nothing queued"},
        401: {"description": "Missing or invalid API token"},
        422: {"description": "Request validation error"},
        429: {"description": "Rate limit exceeded"},
        503: {"description": "Job queue unavailable"},
    },
)
@limiter.limit(get_settings().rate_limiting.ingest)
async def ingest(
    request: Request,
    response: Response,
    body: IngestRequest,
    ledger: Annotated[ImportAttemptRepository, Depends(get_import_ledger)],
) -> IngestResponse:
    """Queue a URL for ingestion.

    A URL is processed at most once through this endpoint. Repeats are
    acknowledged with 200 and ignored; retries go through the admin page.
    """
    url = body.url

    if not await ledger.record_request(url):
        logger.info("URL already ingested", url=url)
        response.status_code = status.HTTP_200_OK
        return IngestResponse(status="ok")

    job = await enqueue_recipe_ingestion(url)
    if job is None:
        await ledger.release(url)
        msg = "Recipe ingestion could not be queued"
        raise ServiceUnavailableException(msg)

    logger.info("Recipe ingestion queued", url=url, job_id=job.job_id)
    return IngestResponse(status="processing", message="Recipe ingestion started")
