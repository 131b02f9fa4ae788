"""Split video/gif files into numbered JPEG frame directories using moviepy."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Mapping, Optional

import numpy as np
from PIL import Image

from . import MediaMetadata, SpliceOutcome
from .errors import InvalidMediaError, ProcessingError
from .manifest_writer import MANIFEST_NAME, append_manifest_entry
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)

FRAME_PATTERN = "frame_{index:06d}.jpg"
PROCESSED_DIR_NAME = "PROCESSED"
FALLBACK_FPS = 24.0


def resolve_frames_root(cwd: Path, environ: Mapping[str, str] | None = None) -> Path:
    """Prefer ``./frames``; otherwise the existing directory named by ``$frames_path``."""

    environ = os.environ if environ is None else environ
    local = cwd / "frames"
    if local.is_dir():
        return local.resolve()
    configured = environ.get("frames_path")
    if configured and Path(configured).is_dir():
        return Path(configured)
    raise ProcessingError(
        "frames directory not found. Create ./frames or export frames_path=/path/to/frames"
    )


def _metadata_from_clip(clip) -> MediaMetadata:
    width, height = clip.size
    fps = getattr(clip, "fps", None)
    return MediaMetadata(
        width=int(width),
        height=int(height),
        fps=float(fps) if fps else None,
        duration_seconds=float(getattr(clip, "duration", 0.0) or 0.0),
    )


def _sample_times(metadata: MediaMetadata) -> list[float]:
    """One timestamp per source frame across the clip."""

    fps = metadata.fps or FALLBACK_FPS
    duration = metadata.duration_seconds
    if duration <= 0:
        return [0.0]
    times = np.arange(0.0, duration, 1.0 / fps, dtype=float)
    last = max(duration - 0.001, 0.0)
    return [min(float(t), last) for t in times]


def iter_frames(media_path: Path) -> Iterator[tuple[int, Image.Image, MediaMetadata]]:
    """Yield ``(1-based index, frame, metadata)`` for every sampled frame."""

    _ensure_ffmpeg_available()
    clip_class = _resolve_video_file_clip()
    try:
        clip = clip_class(str(media_path))
    except Exception as exc:  # pragma: no cover - moviepy internals
        raise InvalidMediaError(media_path, reason=str(exc)) from exc
    try:
        metadata = _metadata_from_clip(clip)
        for index, ts in enumerate(_sample_times(metadata), start=1):
            frame = np.asarray(clip.get_frame(ts), dtype=np.uint8)
            yield index, Image.fromarray(frame).convert("RGB"), metadata
    finally:
        clip.close()


def write_frames(media_path: Path, output_dir: Path) -> tuple[int, MediaMetadata]:
    """Decode ``media_path`` into ``output_dir/frame_NNNNNN.jpg`` files."""

    file_tools.ensure_directory(output_dir)
    count = 0
    metadata: Optional[MediaMetadata] = None
    for index, image, metadata in iter_frames(media_path):
        image.save(output_dir / FRAME_PATTERN.format(index=index), "JPEG")
        count = index
    if metadata is None or count == 0:
        raise ProcessingError(f"No frames could be extracted from {media_path}")
    logger.info("Wrote %s frames from %s to %s", count, media_path.name, output_dir)
    return count, metadata


def splice_media(media_path: Path, frames_root: Path) -> SpliceOutcome:
    """Extract one media file and index it in the frames root manifest."""

    if not media_path.is_file():
        raise InvalidMediaError(media_path, reason="File not found")

    input_dir = media_path.parent
    sanitized = file_tools.sanitize_filename(media_path.name)
    name = Path(sanitized).stem
    destination = frames_root / name
    if destination.exists():
        raise ProcessingError(f"{destination} already exists; remove it before re-splicing {name}")

    if sanitized != media_path.name:
        renamed = input_dir / sanitized
        if renamed.exists():
            raise ProcessingError(f"Cannot rename {media_path.name}: {sanitized} already exists")
        media_path.rename(renamed)
        logger.info("Renamed %s -> %s", media_path.name, sanitized)
        media_path = renamed

    staging_dir = input_dir / name
    count, metadata = write_frames(media_path, staging_dir)

    processed_path = file_tools.move_into(media_path, input_dir / PROCESSED_DIR_NAME)
    frames_dir = file_tools.move_into(staging_dir, frames_root)

    outcome = SpliceOutcome(
        name=name,
        frames_dir=frames_dir,
        frame_count=count,
        metadata=metadata,
        processed_path=processed_path,
    )
    append_manifest_entry(frames_root / MANIFEST_NAME, outcome)
    return outcome


def splice_folder(input_dir: Path, frames_root: Path) -> list[SpliceOutcome]:
    """Splice every supported media file directly inside ``input_dir``."""

    if not input_dir.is_dir():
        raise InvalidMediaError(input_dir, reason="Not a directory")

    file_tools.ensure_file(frames_root / MANIFEST_NAME)
    file_tools.ensure_directory(input_dir / PROCESSED_DIR_NAME)

    outcomes = []
    for path in sorted(p for p in input_dir.iterdir() if p.is_file()):
        if not validators.is_media_file(path):
            logger.info("Skipping non-media file: %s", path)
            continue
        outcome = splice_media(path, frames_root)
        logger.info(
            "Done: %s -> %s (%s frames, moved to %s)",
            path.name,
            outcome.frames_dir,
            outcome.frame_count,
            PROCESSED_DIR_NAME,
        )
        outcomes.append(outcome)
    return outcomes


def _ensure_ffmpeg_available() -> None:
    """Raise a friendly error if ffmpeg is missing."""

    try:
        from moviepy.config import FFMPEG_BINARY  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover
        raise ProcessingError("moviepy is not installed. Run pip install termo.") from exc

    if not FFMPEG_BINARY:
        raise ProcessingError("ffmpeg not found. Install ffmpeg and ensure it is on PATH.")


def _resolve_video_file_clip():
    """Import VideoFileClip from supported moviepy locations."""

    try:
        from moviepy.editor import VideoFileClip  # type: ignore
        return VideoFileClip
    except ModuleNotFoundError:
        try:
            from moviepy.video.io.VideoFileClip import VideoFileClip  # type: ignore
            return VideoFileClip
        except ModuleNotFoundError as exc:  # pragma: no cover
            raise ProcessingError("moviepy is not installed. Run pip install termo.") from exc
