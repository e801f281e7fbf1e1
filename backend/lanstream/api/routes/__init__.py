"""API route registration."""

from fastapi import APIRouter

from lanstream.api.routes import device, health, media

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(device.router, tags=["device"])
api_router.include_router(media.router, prefix="/media", tags=["media"])
