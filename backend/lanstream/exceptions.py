"""Media pipeline errors: translated to HTTP outcomes by the API layer."""

from __future__ import annotations

from pathlib import Path


class MediaError(Exception):
    """Base class for scanner and streamer failures."""


class ScanIOError(MediaError):
    """File metadata could not be read during a scan."""

    def __init__(self, path: str | Path, cause: OSError):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to read metadata for {self.path}: {cause}")


class MediaNotFoundError(MediaError):
    """Requested file does not exist under the media folder."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Media file not found: {name!r}")


class MediaOpenError(MediaError):
    """Requested file exists but could not be opened."""

    def __init__(self, path: str | Path, cause: OSError):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Could not open {self.path}: {cause}")


class PathTraversalError(MediaError):
    """Requested name resolves to a location outside the media folder."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Path escapes media folder: {name!r}")
