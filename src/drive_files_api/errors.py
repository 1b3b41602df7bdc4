"""Error types and the handlers that turn them into JSON responses."""
import logging
import traceback
from typing import Optional

import pydantic
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from drive_files_api.schemas import ErrorResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that are reported to the caller as JSON."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, error: Optional[str] = None, details: Optional[str] = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error if details is None else f"{self.error}: {details}")

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, details=self.details)


class Unauthorized(ApiError):
    """The request did not carry a usable bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Access token is required"


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class NotFound(ApiError):
    """The query succeeded but matched nothing."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "No PDF files found"


class UpstreamFailure(ApiError):
    """Google Drive could not be queried, rejected the token, or answered with garbage."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Failed to fetch file"


class OAuthExchangeFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Failed to exchange authorization code"


def _error_json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


async def handle_api_errors(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ``ApiError`` as ``{"error": ..., "details": ...}``."""
    return _error_json(exc.status_code, exc.to_response())


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Reshape Starlette's own errors (unknown route, wrong method) like every other error."""
    response = _error_json(exc.status_code, ErrorResponse(error=str(exc.detail)))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_pydantic_validation_errors(
    request: Request, exc: pydantic.ValidationError | RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in errors
    )
    return _error_json(
        422,
        ErrorResponse(error="Invalid request", details=details),
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as e:  # pylint: disable=broad-except
        logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
        settings = getattr(request.app.state, "settings", None)
        stack = None
        if settings is not None and settings.is_development:
            stack = traceback.format_exc()
        return _error_json(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="Internal Server Error", details=str(e), stack=stack),
        )
