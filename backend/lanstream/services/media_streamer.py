"""Media file streaming with safe path resolution."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import BinaryIO, Iterator

from lanstream.exceptions import MediaNotFoundError, MediaOpenError, PathTraversalError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024  # 64 KB
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Media types missing from some platform registries
_EXTRA_TYPES = {
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
    ".m4v": "video/x-m4v",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    ".opus": "audio/ogg",
    ".webp": "image/webp",
}

mimetypes.init()
for _ext, _type in _EXTRA_TYPES.items():
    if mimetypes.guess_type(f"file{_ext}")[0] is None:
        mimetypes.add_type(_type, _ext)


def guess_content_type(name: str) -> str:
    """Content type from the file extension only, octet-stream when unknown."""
    content_type, _ = mimetypes.guess_type(name, strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


class MediaStream:
    """An opened media file, consumed once as a sequence of byte chunks.

    The file handle is closed when iteration finishes, when :meth:`close`
    is called, or on leaving a ``with`` block, whichever comes first.
    """

    def __init__(
        self,
        path: Path,
        handle: BinaryIO,
        content_type: str,
        chunk_size: int = CHUNK_SIZE,
    ):
        self.path = path
        self.content_type = content_type
        self._handle = handle
        self._chunk_size = chunk_size
        self._started = False

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __iter__(self) -> Iterator[bytes]:
        if self._started or self.closed:
            raise RuntimeError(f"Stream for {self.path} was already consumed")
        self._started = True
        return self._read_chunks()

    def _read_chunks(self) -> Iterator[bytes]:
        try:
            while chunk := self._handle.read(self._chunk_size):
                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()
            logger.debug("Closed %s", self.path)

    def __enter__(self) -> MediaStream:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class MediaStreamer:
    """Opens files under the media folder for streaming."""

    def __init__(self, root: str | Path, chunk_size: int = CHUNK_SIZE):
        self._root = Path(root).resolve()
        self._chunk_size = chunk_size

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, requested_name: str) -> Path:
        """Map a client-supplied name to a path inside the media folder."""
        try:
            candidate = (self._root / requested_name).resolve()
        except (OSError, RuntimeError, ValueError) as exc:
            logger.debug("Cannot resolve %r: %s", requested_name, exc)
            raise MediaNotFoundError(requested_name) from exc

        if candidate != self._root and self._root not in candidate.parents:
            raise PathTraversalError(requested_name)
        return candidate

    def open_for_streaming(self, requested_name: str) -> MediaStream:
        """Resolve, check and open ``requested_name``.

        Raises:
            PathTraversalError: name resolves outside the media folder.
            MediaNotFoundError: no regular file at the resolved path.
            MediaOpenError: the file exists but could not be opened.
        """
        path = self.resolve(requested_name)

        if not path.is_file():
            raise MediaNotFoundError(requested_name)

        # Existence check and open are separate syscalls; a file removed in
        # between surfaces as an open error.
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise MediaOpenError(path, exc) from exc

        return MediaStream(
            path=path,
            handle=handle,
            content_type=guess_content_type(path.name),
            chunk_size=self._chunk_size,
        )
