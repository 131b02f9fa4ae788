"""Filesystem helpers."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from ..core.errors import FrameDirectoryError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def ensure_directory(path: Path) -> Path:
    """Create a directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)
    return path


def ensure_file(path: Path) -> Path:
    """Create an empty file if it does not exist."""

    ensure_directory(path.parent)
    path.touch(exist_ok=True)
    return path


def list_frames(directory: Path) -> list[Path]:
    """Return every entry of the frame directory in lexicographic order.

    The list is taken once; entries that stop being regular files later are
    skipped by the player at render time.
    """

    if not directory.exists():
        raise FrameDirectoryError(directory, reason="No such directory")
    if not directory.is_dir():
        raise FrameDirectoryError(directory, reason="Not a directory")
    frames = sorted(directory.iterdir(), key=lambda p: p.name)
    if not frames:
        raise FrameDirectoryError(directory, reason="No files found")
    if not any(frame.is_file() for frame in frames):
        raise FrameDirectoryError(directory, reason="No regular files found")
    logger.debug("Discovered %s frame entries in %s", len(frames), directory)
    return frames


def sanitize_filename(name: str) -> str:
    """Replace spaces with underscores and drop anything outside ``[A-Za-z0-9._-]``."""

    return _UNSAFE_CHARS.sub("", name.replace(" ", "_"))


def move_into(path: Path, directory: Path) -> Path:
    """Move ``path`` into ``directory`` keeping its name."""

    ensure_directory(directory)
    destination = directory / path.name
    shutil.move(str(path), str(destination))
    logger.debug("Moved %s -> %s", path, destination)
    return destination
