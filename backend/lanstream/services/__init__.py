"""Media pipeline services: scanner and streamer."""

from lanstream.services.media_scanner import MediaFile, MediaScanner, scan_media_files
from lanstream.services.media_streamer import MediaStream, MediaStreamer, guess_content_type

__all__ = [
    "MediaFile",
    "MediaScanner",
    "scan_media_files",
    "MediaStream",
    "MediaStreamer",
    "guess_content_type",
]
