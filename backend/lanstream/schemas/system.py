"""Device and health schemas."""

from pydantic import BaseModel


class DeviceInfo(BaseModel):
    """Device identity advertised to clients."""
    name: str
    platform: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    service: str = "lanstream"
    device_name: str
