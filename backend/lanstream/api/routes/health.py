"""Health check."""

from fastapi import APIRouter, Depends

from lanstream import __version__
from lanstream.config import Settings, get_settings
from lanstream.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Lightweight connectivity check."""
    return HealthResponse(version=__version__, device_name=settings.device_name)


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
