"""Resolve the most recently modified PDF in the caller's Google Drive."""
import logging
import time
from typing import Any, Dict

import pydantic
from starlette.concurrency import run_in_threadpool

from drive_files_api.drive.client import DriveServiceFactory, build_drive_service
from drive_files_api.errors import NotFound, UpstreamFailure
from drive_files_api.schemas import PDF_MIME_TYPE, Credential, DriveFileRecord, FileSummary

logger = logging.getLogger(__name__)

LATEST_PDF_QUERY: Dict[str, Any] = {
    "q": f"mimeType='{PDF_MIME_TYPE}'",
    "orderBy": "modifiedTime desc",
    "pageSize": 1,
    "fields": "files(id, name, modifiedTime, webViewLink)",
}


class LatestFileResolver:
    """
    Look up the newest PDF with a single ``files.list`` call.

    Google Drive does the filtering and sorting; the resolver only asks for one
    record and reshapes it. Nothing is cached between calls.
    """

    def __init__(
        self,
        service_factory: DriveServiceFactory = build_drive_service,
        timeout_seconds: float = 30.0,
    ):
        self._service_factory = service_factory
        self._timeout_seconds = timeout_seconds

    async def resolve(self, credential: Credential) -> FileSummary:
        """
        Return the summary of the most recently modified PDF.

        Raises:
            NotFound: Drive answered but holds no PDF files.
            UpstreamFailure: the call failed or the record was incomplete.
        """
        start_time = time.time()
        response = await run_in_threadpool(self._list_latest_pdf, credential)
        logger.info("files.list completed in %.2fs", time.time() - start_time)

        files = response.get("files") or []
        if not isinstance(files, list):
            raise UpstreamFailure(details="Malformed response from Google Drive")
        if not files:
            raise NotFound()

        try:
            record = DriveFileRecord.model_validate(files[0])
        except pydantic.ValidationError as e:
            missing = ", ".join(
                str(error["loc"][0]) if error["loc"] else "record" for error in e.errors()
            )
            logger.warning("Google Drive returned an incomplete file record (%s)", missing)
            raise UpstreamFailure(
                details=f"Malformed response from Google Drive: missing or invalid {missing}"
            ) from e
        return FileSummary.from_record(record)

    def _list_latest_pdf(self, credential: Credential) -> Dict[str, Any]:
        try:
            service = self._service_factory(
                credential.token.get_secret_value(), self._timeout_seconds
            )
            response = service.files().list(**LATEST_PDF_QUERY).execute()
        except Exception as e:
            logger.warning("Google Drive files.list failed: %s", e)
            raise UpstreamFailure(details=str(e)) from e
        if not isinstance(response, dict):
            raise UpstreamFailure(details="Malformed response from Google Drive")
        return response
