"""FastAPI dependency injection: settings and media services."""

from __future__ import annotations

from fastapi import Depends

from lanstream.config import Settings, get_settings
from lanstream.services.media_scanner import MediaScanner
from lanstream.services.media_streamer import MediaStreamer


def get_media_scanner(settings: Settings = Depends(get_settings)) -> MediaScanner:
    """Scanner bound to the configured media folder."""
    return MediaScanner(settings.folder, skip_unreadable=settings.scan_skip_unreadable)


def get_media_streamer(settings: Settings = Depends(get_settings)) -> MediaStreamer:
    """Streamer bound to the configured media folder."""
    return MediaStreamer(settings.folder, chunk_size=settings.stream_chunk_size)
