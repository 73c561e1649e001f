"""Service metadata endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from signature_studio import __version__
from signature_studio.core.config import Settings
from signature_studio.interfaces.http.deps import get_app_settings
from signature_studio.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health(settings: Settings = Depends(get_app_settings)):
    return HealthResponse(
        version=__version__,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/", summary="API information")
async def api_info(settings: Settings = Depends(get_app_settings)):
    prefix = settings.api_prefix.rstrip("/")
    return {
        "name": settings.project_name,
        "version": __version__,
        "endpoints": {
            "auth": f"{prefix}/auth",
            "users": f"{prefix}/users",
            "templates": f"{prefix}/templates",
            "assignments": f"{prefix}/assignments",
            "upload": f"{prefix}/upload",
            "activity": f"{prefix}/activity",
            "health": f"{prefix}/health",
        },
    }
