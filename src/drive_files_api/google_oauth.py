"""Google OAuth2 authorization-code helpers.

Only the two halves of the standard flow live here: building the consent URL
and trading the returned code for an access token. Each call builds its own
``Flow``; tokens are handed back to the caller and never stored.
"""
import logging

import requests
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from drive_files_api.auth import DRIVE_READONLY_SCOPE, GOOGLE_AUTHORIZATION_URL, GOOGLE_TOKEN_URL
from drive_files_api.config.settings import Settings
from drive_files_api.errors import OAuthExchangeFailure

logger = logging.getLogger(__name__)


def build_flow(settings: Settings) -> Flow:
    """
    Build a web-application flow for the configured OAuth client.

    PKCE is off: the consent redirect and the callback are served by
    different requests and no verifier is kept between them.
    """
    client_config = {
        "web": {
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret.get_secret_value(),
            "auth_uri": GOOGLE_AUTHORIZATION_URL,
            "token_uri": GOOGLE_TOKEN_URL,
            "redirect_uris": [settings.google_redirect_uri],
        }
    }
    return Flow.from_client_config(
        client_config,
        scopes=[DRIVE_READONLY_SCOPE],
        redirect_uri=settings.google_redirect_uri,
        autogenerate_code_verifier=False,
    )


def build_authorization_url(settings: Settings) -> str:
    """Return the Google consent screen URL for read-only Drive access."""
    authorization_url, _state = build_flow(settings).authorization_url(
        prompt="consent",
        access_type="offline",
        include_granted_scopes="true",
    )
    return authorization_url


def exchange_code_for_token(settings: Settings, code: str) -> str:
    """
    Exchange an authorization code for an access token.

    Args:
        settings: Application settings holding the OAuth client
        code: The code Google appended to the redirect URI

    Returns:
        str: The access token

    Raises:
        OAuthExchangeFailure: on transport errors, a rejected code, or a reply
            without an access token.
    """
    flow = build_flow(settings)
    try:
        flow.fetch_token(code=code, timeout=settings.oauth_request_timeout_seconds)
        access_token = flow.credentials.token
    except OAuth2Error as e:
        logger.error("Token endpoint rejected the code: %s", e.error)
        raise OAuthExchangeFailure(details=e.description or e.error) from e
    except requests.exceptions.RequestException as e:
        logger.error("Token endpoint unreachable: %s", e)
        raise OAuthExchangeFailure(details=str(e)) from e
    except Warning as w:
        # oauthlib raises when Google grants a different scope set
        # (include_granted_scopes); the token is attached to the warning
        token = getattr(w, "token", None) or {}
        access_token = token.get("access_token")
        logger.info("Token granted with scopes %s", token.get("scope"))

    if not access_token:
        raise OAuthExchangeFailure(details="Token response did not contain an access_token")
    logger.info("Authorization code exchanged for an access token")
    return access_token
