"""Synchronous invocation of the external image-to-text rasterizer."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Sequence

from .errors import RasterizerError

logger = logging.getLogger(__name__)

DEFAULT_RASTERIZER = "jp2a"


def rasterizer_available(binary: str) -> bool:
    """Return True if the rasterizer can be found on PATH (or is an explicit path)."""

    return shutil.which(binary) is not None


def render_frame(binary: str, args: Sequence[str], image_path: Path) -> None:
    """Run the rasterizer on one frame, letting its output stream to the terminal.

    Raises ``RasterizerError`` when the tool is missing or exits non-zero.
    """

    command = [binary, *args, str(image_path)]
    logger.debug("Running %s", command)
    try:
        completed = subprocess.run(command, check=False)
    except FileNotFoundError as exc:
        raise RasterizerError(image_path, f"{binary} not found on PATH") from exc
    except PermissionError as exc:
        raise RasterizerError(image_path, f"{binary} is not executable") from exc

    if completed.returncode != 0:
        raise RasterizerError(
            image_path,
            f"{binary} exited with status {completed.returncode}",
            returncode=completed.returncode,
        )
