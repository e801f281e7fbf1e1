"""Recursive media folder scanner."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from lanstream.exceptions import ScanIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaFile:
    name: str  # base name incl. extension
    size: int  # bytes, at scan time
    extension: str  # without dot, "" if none
    path: str  # resolved path on disk


def file_extension(name: str) -> str:
    """Suffix after the last dot, as found. Dotfiles have no extension."""
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext


def scan_media_files(root: str | Path, *, skip_unreadable: bool = False) -> list[MediaFile]:
    """Walk ``root`` recursively and collect metadata for every regular file.

    Directories that cannot be listed are skipped. A failed ``stat`` on a
    regular file aborts the whole scan with :class:`ScanIOError`, unless
    ``skip_unreadable`` is set, in which case the file is left out.

    Results are in traversal order, not sorted.
    """
    files: list[MediaFile] = []

    for path in _walk_files(Path(root).resolve()):
        try:
            st = os.stat(path)
        except OSError as exc:
            if skip_unreadable:
                logger.warning("Skipping unreadable file %s: %s", path, exc)
                continue
            raise ScanIOError(path, exc) from exc

        files.append(
            MediaFile(
                name=path.name,
                size=st.st_size,
                extension=file_extension(path.name),
                path=str(path),
            )
        )

    logger.debug("Scanned %s: %d files", root, len(files))
    return files


def _list_dir(directory: Path) -> list[os.DirEntry]:
    """Directory entries, or an empty list when the directory cannot be read."""
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as exc:
        logger.warning("Skipping unreadable directory %s: %s", directory, exc)
        return []


def _walk_files(root: Path) -> Iterator[Path]:
    """Depth-first walk yielding regular files; symlinks are not followed.

    Uses an explicit stack of pending entries so tree depth is not bounded
    by the interpreter recursion limit.
    """
    stack = [iter(_list_dir(root))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file(follow_symlinks=False)
        except OSError as exc:
            logger.warning("Skipping entry %s: %s", entry.path, exc)
            continue

        if is_dir:
            stack.append(iter(_list_dir(Path(entry.path))))
        elif is_file:
            yield Path(entry.path)


class MediaScanner:
    """Scanner bound to the configured media folder."""

    def __init__(self, root: str | Path, skip_unreadable: bool = False):
        self._root = Path(root)
        self._skip_unreadable = skip_unreadable

    @property
    def root(self) -> Path:
        return self._root

    def scan(self) -> list[MediaFile]:
        return scan_media_files(self._root, skip_unreadable=self._skip_unreadable)
