####################################
# --- Request/response schemas --- #
####################################

from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
)

PDF_MIME_TYPE = "application/pdf"


class Credential(BaseModel):
    """Bearer token taken from the ``Authorization`` header of one request."""

    token: SecretStr

    model_config = ConfigDict(frozen=True)


class DriveFileRecord(BaseModel):
    """One entry of the ``files`` array returned by Drive's ``files.list``."""

    id: Optional[str] = None
    name: str
    modified_time: str = Field(alias="modifiedTime")
    web_view_link: str = Field(alias="webViewLink")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FileSummary(BaseModel):
    """Response model for `GET /v1/files/latest`."""

    file_name: str = Field(
        alias="fileName",
        description="Name of the PDF file",
    )
    modified_time: str = Field(
        alias="modifiedTime",
        description="Last modification time of the file",
        json_schema_extra={"format": "date-time"},
    )
    link: str = Field(
        description="Web view link to the file",
        json_schema_extra={"format": "uri"},
    )

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "fileName": "report.pdf",
                "modifiedTime": "2024-03-14T12:00:00.000Z",
                "link": "https://drive.google.com/file/d/1a2b3c/view",
            }
        },
    )

    @classmethod
    def from_record(cls, record: DriveFileRecord) -> "FileSummary":
        return cls(
            file_name=record.name,
            modified_time=record.modified_time,
            link=record.web_view_link,
        )


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str = Field(description="Error message")
    details: Optional[str] = Field(None, description="Detailed error information")
    stack: Optional[str] = Field(None, description="Stack trace, development mode only")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Failed to fetch file",
                "details": "<HttpError 401 when requesting ... returned \"Invalid Credentials\">",
            }
        }
    )


class AuthResponse(BaseModel):
    """Response model for `GET /auth/callback`."""

    access_token: str = Field(description="OAuth2 access token")
