"""HTTP-facing exceptions and exception handlers.

Every error leaving the API or admin app has the same JSON shape,
``ErrorResponse``. Domain errors raised inside ingestion jobs never reach
these handlers; they end in a notification instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_ingest.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class ErrorDetail(BaseModel):
    """One field-level problem in a rejected request."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Error with a status code and machine-readable code, shown to the caller."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)


class UnauthorizedException(AppException):
    """Missing or invalid bearer token."""

    def __init__(self, message: str = "Invalid API token") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="UNAUTHORIZED",
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ServiceUnavailableException(AppException):
    """A backing service (database, job queue) cannot take the request."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    *,
    details: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    """Build an ErrorResponse, echoing the caller's request id if it sent one."""
    body = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=request.headers.get(REQUEST_ID_HEADER),
    )
    return ORJSONResponse(
        status_code=status_code,
        content=body.model_dump(),
        headers=headers,
    )


async def _handle_app_exception(request: Request, exc: Exception) -> ORJSONResponse:
    assert isinstance(exc, AppException)
    return error_response(
        request,
        exc.status_code,
        exc.error,
        exc.message,
        details=exc.details,
        headers=exc.headers,
    )


async def _handle_http_exception(request: Request, exc: Exception) -> ORJSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    return error_response(
        request,
        exc.status_code,
        "HTTP_ERROR",
        str(exc.detail),
        headers=exc.headers,
    )


async def _handle_validation_error(request: Request, exc: Exception) -> ORJSONResponse:
    assert isinstance(exc, RequestValidationError)
    details = [
        ErrorDetail(
            code="VALIDATION_ERROR",
            message=error["msg"],
            field=".".join(str(part) for part in error["loc"]),
        )
        for error in exc.errors()
    ]
    return error_response(
        request,
        422,
        "VALIDATION_ERROR",
        "Request validation failed",
        details=details,
    )


async def _handle_unexpected(request: Request, exc: Exception) -> ORJSONResponse:
    logger.opt(exception=exc).error("Unhandled exception", path=request.url.path)
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the ErrorResponse handlers on an app."""
    app.add_exception_handler(AppException, _handle_app_exception)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected)
