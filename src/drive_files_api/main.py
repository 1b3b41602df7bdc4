from textwrap import dedent
import logging
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from drive_files_api.config.settings import Settings, load_settings
from drive_files_api.drive.client import DriveServiceFactory, build_drive_service
from drive_files_api.drive.latest_file import LatestFileResolver
from drive_files_api.errors import (
    ApiError,
    handle_api_errors,
    handle_broad_exceptions,
    handle_http_exceptions,
    handle_pydantic_validation_errors,
)
from drive_files_api.routers.auth import router as auth_router
from drive_files_api.routers.files import router as files_router
from drive_files_api.routers.health import router as health_router

# Set up logging
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Send log records to stderr; call before ``create_app`` so startup lines are kept."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_app(
    settings: Optional[Settings] = None,
    drive_service_factory: Optional[DriveServiceFactory] = None,
) -> FastAPI:
    """
    Create a FastAPI application.

    Raises:
        ConfigurationError: if no settings are given and the environment lacks
            the Google OAuth client identifiers.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Drive GPT Backend API",
        summary="Fetch the latest PDF file from Google Drive",
        version="v1",
        description=dedent(
            """\
        Returns the most recently modified PDF in the caller's Google Drive.

        | Step | Endpoint |
        | --- | --- |
        | 1. Consent | `GET /auth/init` redirects to Google |
        | 2. Token | `GET /auth/callback?code=...` returns an access token |
        | 3. Query | `GET /v1/files/latest` with `Authorization: Bearer <token>` |
        """
        ),
        servers=[{"url": settings.base_url, "description": "Production server"}],
        docs_url="/docs",
        openapi_url="/docs-json",
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["Authorization"],
    )
    app.state.settings = settings
    app.state.latest_file_resolver = LatestFileResolver(
        service_factory=drive_service_factory or build_drive_service,
        timeout_seconds=settings.drive_request_timeout_seconds,
    )
    logger.info(
        "OAuth client configured: client_id=%s client_secret=%s redirect_uri=%s base_url=%s",
        settings.google_client_id,
        "set",
        settings.google_redirect_uri,
        settings.base_url,
    )

    app.include_router(files_router, prefix="/v1", tags=["files"])
    app.include_router(auth_router, tags=["auth"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(ApiError, handle_api_errors)
    app.add_exception_handler(StarletteHTTPException, handle_http_exceptions)
    app.add_exception_handler(RequestValidationError, handle_pydantic_validation_errors)
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)
