from fastapi import APIRouter, Request

from drive_files_api.config.settings import Settings

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and component readiness.

    Google Drive is not contacted: without a caller's token there is nothing
    meaningful to check.
    """
    settings: Settings = request.app.state.settings

    health_status = {
        "status": "ok",
        "environment": settings.environment,
        "components": {
            "api": "ready",
            "oauth_client": "configured" if settings.google_client_id else "missing",
            "drive_resolver": "initializing",
        },
        "ready": False,
    }

    if getattr(request.app.state, "latest_file_resolver", None) is not None:
        health_status["components"]["drive_resolver"] = "ready"

    if any(value not in ("ready", "configured") for value in health_status["components"].values()):
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        value in ("ready", "configured") for value in health_status["components"].values()
    )

    return health_status
