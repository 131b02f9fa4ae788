"""Wiring for the player and splicer commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .core import frame_splicer
from .core.frame_scheduler import FrameScheduler
from .core.input_poller import InputPoller
from .core.rasterizer import rasterizer_available
from .core.terminal_session import TerminalSession
from .settings import PlayerOptions
from .utils import file_tools

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    handlers: list[logging.Handler]
    if log_file is not None:
        file_tools.ensure_directory(log_file.parent)
        handlers = [logging.FileHandler(log_file, encoding="utf-8")]
    else:
        handlers = [logging.StreamHandler(sys.stderr)]
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def _stdin_fd() -> Optional[int]:
    try:
        return sys.stdin.fileno()
    except (AttributeError, ValueError, OSError):
        return None


def run_player(
    options: PlayerOptions,
    stdin_fd: Optional[int] = None,
    stream: Optional[TextIO] = None,
    **scheduler_kwargs,
) -> int:
    """Validate the frame directory, then play until quit or signal.

    Directory validation happens before the terminal is touched, so a
    ``FrameDirectoryError`` leaves cursor and echo exactly as they were.
    """

    frames = file_tools.list_frames(options.directory)
    config = options.to_render_config()
    if not rasterizer_available(options.rasterizer):
        logger.warning("Rasterizer %r not found on PATH; frames will fail to render", options.rasterizer)

    fd = stdin_fd if stdin_fd is not None else (_stdin_fd() if options.interactive else None)
    session = TerminalSession(interactive=options.interactive, fd=fd, stream=stream)
    poller = InputPoller(config, fd=fd, interactive=options.interactive)
    scheduler = FrameScheduler(frames, config, session, poller, rasterizer=options.rasterizer, **scheduler_kwargs)

    logger.info(
        "Playing %s frames from %s at %s fps via %s (interactive=%s)",
        len(frames),
        options.directory,
        config.fps,
        options.rasterizer,
        options.interactive,
    )
    return scheduler.run()


def run_splice(input_dir: Path, cwd: Optional[Path] = None) -> int:
    """Split every media file in ``input_dir`` into the frames root."""

    frames_root = frame_splicer.resolve_frames_root(cwd or Path.cwd())
    outcomes = frame_splicer.splice_folder(input_dir, frames_root)
    logger.info("Spliced %s media files into %s", len(outcomes), frames_root)
    for outcome in outcomes:
        print(f"Done: {outcome.processed_path.name} -> {outcome.frames_dir}/ ({outcome.frame_count} frames)")
    return 0
