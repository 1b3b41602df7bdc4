"""
Configuration management for the Drive Files API.

Contains the Pydantic settings and the startup loader that refuses to build
an application when the Google OAuth client is not configured.
"""
from drive_files_api.config.settings import (
    ConfigurationError,
    Settings,
    load_settings,
)

__all__ = ["ConfigurationError", "Settings", "load_settings"]
