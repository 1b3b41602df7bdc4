"""Google Drive access for the Drive Files API."""
from drive_files_api.drive.client import DriveServiceFactory, build_drive_service
from drive_files_api.drive.latest_file import LatestFileResolver

__all__ = ["DriveServiceFactory", "LatestFileResolver", "build_drive_service"]
