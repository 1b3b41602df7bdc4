# src/drive_files_api/config/settings.py
from typing import Any, Dict, List

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when required startup configuration is missing or invalid."""


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Keyword arguments passed to the constructor (highest priority)
    2. Environment variables
    3. .env file (if exists)
    4. Default values in this class (lowest priority)

    Instances are frozen: build one at startup and hand it to the app.

    Usage:
        from drive_files_api.config.settings import load_settings
        settings = load_settings()
        client_id = settings.google_client_id
    """

    # Application Settings
    app_name: str = Field(
        default="drive-files-api",
        description="Application name"
    )

    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("environment", "ENVIRONMENT", "NODE_ENV"),
        description="Runtime environment: development or production"
    )

    # Google OAuth client
    google_client_id: str = Field(
        alias="CLIENT_ID",
        min_length=1,
        description="OAuth client ID issued by the Google Cloud console"
    )

    google_client_secret: SecretStr = Field(
        alias="CLIENT_SECRET",
        description="OAuth client secret issued by the Google Cloud console"
    )

    google_redirect_uri: str = Field(
        default="https://chat.openai.com/auth/callback",
        alias="REDIRECT_URI",
        description="Redirect URI registered for the OAuth client"
    )

    # Server
    base_url: str = Field(
        default="https://gdrive-gpt-backend.vercel.app",
        alias="BASE_URL",
        description="Public URL advertised in the OpenAPI document"
    )

    host: str = Field(default="0.0.0.0", alias="HOST")

    port: int = Field(default=3000, alias="PORT", ge=1, le=65535)

    cors_allow_origins: List[str] = Field(
        default=["https://chat.openai.com"],
        alias="CORS_ALLOW_ORIGINS",
        description="Origins allowed to call the API from a browser"
    )

    # Upstream timeouts
    drive_request_timeout_seconds: float = Field(
        default=30.0,
        alias="DRIVE_REQUEST_TIMEOUT_SECONDS",
        gt=0,
        description="Socket timeout for the Google Drive files.list call"
    )

    oauth_request_timeout_seconds: float = Field(
        default=30.0,
        alias="OAUTH_REQUEST_TIMEOUT_SECONDS",
        gt=0,
        description="Timeout for the authorization-code exchange"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v):
        """Accept the short names used by most hosting platforms."""
        if v:
            mode_mapping = {
                "dev": "development",
                "local": "development",
                "prod": "production",
            }
            v = str(v).strip().lower()
            return mode_mapping.get(v, v)
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        valid_modes = ["development", "production"]
        if v not in valid_modes:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_modes}")
        return v

    @field_validator("google_client_secret")
    @classmethod
    def require_client_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("CLIENT_SECRET must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def describe(self) -> Dict[str, Any]:
        """Return a printable summary of the settings with secrets masked."""
        return {
            "App Name": self.app_name,
            "Environment": self.environment,
            "Client ID": self.google_client_id,
            "Client Secret": "set" if self.google_client_secret.get_secret_value() else "not set",
            "Redirect URI": self.google_redirect_uri,
            "Base URL": self.base_url,
            "Listen Address": f"{self.host}:{self.port}",
            "Drive Timeout (s)": self.drive_request_timeout_seconds,
            "Log Level": self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )


def load_settings(**overrides: Any) -> Settings:
    """
    Build the settings, turning validation failures into ``ConfigurationError``.

    Missing Google client identifiers are fatal: the caller is expected to stop
    the process rather than serve requests that can never succeed.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = []
        problems = []
        for error in e.errors():
            name = ".".join(str(part) for part in error["loc"])
            if error["type"] == "missing":
                missing.append(name)
            else:
                problems.append(f"{name}: {error['msg']}")
        message_parts = []
        if missing:
            message_parts.append(
                "Missing required environment variables: " + ", ".join(missing)
            )
        if problems:
            message_parts.append("Invalid settings: " + "; ".join(problems))
        raise ConfigurationError(". ".join(message_parts)) from e

