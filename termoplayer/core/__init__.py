"""Core playback and preprocessing building blocks."""

__all__ = [
    "MediaMetadata",
    "SpliceOutcome",
    "RenderConfig",
    "RenderSnapshot",
]

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .render_config import RenderConfig, RenderSnapshot


@dataclass
class MediaMetadata:
    """Basic metadata read from a source clip."""

    width: int
    height: int
    fps: Optional[float]
    duration_seconds: float

    @property
    def fps_label(self) -> str:
        return f"{self.fps:.3f}" if self.fps else "N/A"

    @property
    def resolution_label(self) -> str:
        return f"{self.width} x {self.height}"


@dataclass
class SpliceOutcome:
    """Result of splitting one media file into a frame directory."""

    name: str
    frames_dir: Path
    frame_count: int
    metadata: MediaMetadata
    processed_path: Path
