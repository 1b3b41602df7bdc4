"""Construction of per-request Google Drive service handles."""
import logging
from typing import Any, Callable

import httplib2
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

# (access_token, timeout_seconds) -> Drive v3 resource
DriveServiceFactory = Callable[[str, float], Any]


def build_drive_service(access_token: str, timeout_seconds: float) -> Any:
    """
    Build a Drive v3 service authorised with a caller-supplied access token.

    A new handle is built for every request so one caller's token can never be
    used for another. The discovery document ships with the client library, so
    building the service does not touch the network.
    """
    credentials = Credentials(token=access_token)
    http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout_seconds))
    return build("drive", "v3", http=http, cache_discovery=False)
