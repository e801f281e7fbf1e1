"""Media routes: folder listing and file streaming."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from lanstream.api.deps import get_media_scanner, get_media_streamer
from lanstream.exceptions import (
    MediaNotFoundError,
    MediaOpenError,
    PathTraversalError,
    ScanIOError,
)
from lanstream.schemas.media import MediaFileItem
from lanstream.services.media_scanner import MediaScanner
from lanstream.services.media_streamer import MediaStream, MediaStreamer

logger = logging.getLogger(__name__)
router = APIRouter()


class MediaStreamResponse(StreamingResponse):
    """Chunked response that always closes its `MediaStream`, even on disconnect."""

    def __init__(self, stream: MediaStream):
        # content-type set verbatim, no charset suffix
        super().__init__(stream, headers={"content-type": stream.content_type})
        self.stream = stream

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            self.stream.close()


@router.get("", response_model=list[MediaFileItem])
async def list_media(scanner: MediaScanner = Depends(get_media_scanner)):
    """Recursively scan the media folder.

    The listing is all-or-nothing: a file whose metadata cannot be read
    fails the request with 500.
    """
    try:
        files = await asyncio.to_thread(scanner.scan)
    except ScanIOError:
        logger.exception("Scan of %s failed", scanner.root)
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to scan media directory",
        )

    return [MediaFileItem.model_validate(f) for f in files]


@router.get("/{filename:path}")
async def stream_media(
    filename: str,
    streamer: MediaStreamer = Depends(get_media_streamer),
):
    """Stream a single file in chunks, Content-Type inferred from its extension."""
    try:
        stream = streamer.open_for_streaming(filename)
    except PathTraversalError:
        logger.warning("Rejected path outside media folder: %r", filename)
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Access denied")
    except MediaNotFoundError:
        logger.info("Media not found: %r", filename)
        raise HTTPException(status.HTTP_404_NOT_FOUND, "File not found")
    except MediaOpenError:
        logger.exception("Cannot open media %r", filename)
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Could not read media file",
        )

    logger.debug("Streaming %s as %s", stream.path, stream.content_type)
    return MediaStreamResponse(stream)
