from typing import Optional

from fastapi import (
    APIRouter,
    Query,
    Request,
    status,
)
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from drive_files_api.config.settings import Settings
from drive_files_api.errors import BadRequest
from drive_files_api.google_oauth import build_authorization_url, exchange_code_for_token
from drive_files_api.schemas import AuthResponse, ErrorResponse

router = APIRouter()


@router.get("/auth/init", status_code=status.HTTP_302_FOUND, response_class=RedirectResponse)
async def init_oauth(request: Request):
    """
    Initialize the Google OAuth2 flow.

    Redirects to Google's consent screen to authorize read-only Drive access.
    """
    settings: Settings = request.app.state.settings
    return RedirectResponse(
        build_authorization_url(settings),
        status_code=status.HTTP_302_FOUND,
    )


@router.get(
    "/auth/callback",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing authorization code"},
        500: {"model": ErrorResponse, "description": "Error exchanging code for token"},
    },
)
async def oauth_callback(
    request: Request,
    code: Optional[str] = Query(None, description="Authorization code returned by Google"),
) -> AuthResponse:
    """
    OAuth2 callback endpoint.

    Exchanges the authorization code for an access token and returns it. The
    token is not kept by the server.
    """
    if not code:
        raise BadRequest("Authorization code is required")

    settings: Settings = request.app.state.settings
    access_token = await run_in_threadpool(exchange_code_for_token, settings, code)
    return AuthResponse(access_token=access_token)
