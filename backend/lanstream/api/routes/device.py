"""Device identity: configured display name plus host OS."""

import platform

from fastapi import APIRouter, Depends

from lanstream.config import Settings, get_settings
from lanstream.schemas.system import DeviceInfo

router = APIRouter()


def host_platform() -> str:
    """Lower-case OS identifier, e.g. ``linux``, ``darwin``, ``windows``."""
    return platform.system().lower() or "unknown"


@router.get("/device-info", response_model=DeviceInfo)
async def device_info(settings: Settings = Depends(get_settings)):
    """Name and platform of this server."""
    return DeviceInfo(name=settings.device_name, platform=host_platform())
