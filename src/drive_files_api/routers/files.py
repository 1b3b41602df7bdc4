from fastapi import (
    APIRouter,
    Depends,
    Request,
)

from drive_files_api.auth import require_access_token
from drive_files_api.drive.latest_file import LatestFileResolver
from drive_files_api.schemas import Credential, ErrorResponse, FileSummary

router = APIRouter()


def get_latest_file_resolver(request: Request) -> LatestFileResolver:
    return request.app.state.latest_file_resolver


@router.get(
    "/files/latest",
    response_model=FileSummary,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - Invalid or missing token"},
        404: {"model": ErrorResponse, "description": "No PDF files found"},
        500: {"model": ErrorResponse, "description": "Server error while fetching the file"},
    },
)
async def get_latest_drive_file(
    credential: Credential = Depends(require_access_token),
    resolver: LatestFileResolver = Depends(get_latest_file_resolver),
) -> FileSummary:
    """
    Get the most recently modified PDF file from Google Drive.

    The caller's OAuth2 access token is forwarded to Google Drive, which
    filters on the PDF MIME type and sorts by modification time.

    Returns:
        FileSummary: Name, modification time and web view link of the file
    """
    return await resolver.resolve(credential)
