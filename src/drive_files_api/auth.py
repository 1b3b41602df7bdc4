"""Bearer token dependency guarding the Drive routes.

The token is read from the ``Authorization`` header only and must use the
``Bearer <token>`` form. Requests without one are answered with a 401 before
any Google API call is made.
"""
import logging

from fastapi import Request
from fastapi.security import OAuth2AuthorizationCodeBearer

from drive_files_api.errors import Unauthorized
from drive_files_api.schemas import Credential

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

GOOGLE_AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
DRIVE_READONLY_SCOPE = "https://www.googleapis.com/auth/drive.readonly"


def parse_bearer_token(authorization: str | None) -> Credential:
    """
    Extract the token from an ``Authorization`` header value.

    Only the scheme prefix is removed; the token itself is passed on untouched.

    Raises:
        Unauthorized: if the header is absent, uses another scheme, or has an empty token.
    """
    if not authorization:
        raise Unauthorized()
    if not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized(details="Authorization header must use the Bearer scheme")
    token = authorization[len(BEARER_PREFIX):]
    if not token:
        raise Unauthorized(details="Bearer token is empty")
    return Credential(token=token)


class DriveAccessTokenBearer(OAuth2AuthorizationCodeBearer):
    """
    Auth gate for routes that call Google Drive on the caller's behalf.

    Subclasses the OAuth2 authorization-code scheme so the OpenAPI document
    advertises Google's consent flow, but parses the header strictly and
    reports failures through ``Unauthorized``.
    """

    def __init__(self):
        super().__init__(
            authorizationUrl=GOOGLE_AUTHORIZATION_URL,
            tokenUrl=GOOGLE_TOKEN_URL,
            scopes={DRIVE_READONLY_SCOPE: "Read-only access to Google Drive files"},
            scheme_name="OAuth2",
            auto_error=False,
        )

    async def __call__(self, request: Request) -> Credential:
        try:
            credential = parse_bearer_token(request.headers.get("Authorization"))
        except Unauthorized as e:
            logger.info("Rejected %s %s: %s", request.method, request.url.path, e.details or e.error)
            raise
        request.state.credential = credential
        return credential


require_access_token = DriveAccessTokenBearer()
