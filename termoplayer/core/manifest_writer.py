"""FRAMES.md manifest writing."""

from __future__ import annotations

import logging
from pathlib import Path

from . import SpliceOutcome
from ..utils import file_tools

logger = logging.getLogger(__name__)

MANIFEST_NAME = "FRAMES.md"


def format_manifest_entry(outcome: SpliceOutcome) -> str:
    """``[name] - [fps] - [frame count] - [W x H]``"""

    return (
        f"[{outcome.name}] - [{outcome.metadata.fps_label}] - "
        f"[{outcome.frame_count}] - [{outcome.metadata.resolution_label}]"
    )


def append_manifest_entry(manifest_path: Path, outcome: SpliceOutcome) -> str:
    """Append one line describing a spliced source to the manifest."""

    file_tools.ensure_file(manifest_path)
    line = format_manifest_entry(outcome)
    with manifest_path.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")
    logger.info("Indexed %s in %s", outcome.name, manifest_path)
    return line
