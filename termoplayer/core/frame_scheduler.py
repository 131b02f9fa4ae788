"""Steady-rate render loop over a fixed, wrapping list of frame files."""

from __future__ import annotations

import enum
import logging
import signal
import time
from pathlib import Path
from typing import Callable, Optional, Sequence

from . import RenderConfig
from .arg_builder import build_rasterizer_args
from .errors import RasterizerError
from .hud import render_hud
from .input_poller import InputPoller
from .rasterizer import DEFAULT_RASTERIZER, render_frame
from .terminal_session import TerminalSession

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SchedulerState(enum.Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"


class ShutdownSignal(BaseException):
    """Raised out of the signal handler to unwind the render loop."""

    def __init__(self, signum: int):
        self.signum = signum
        super().__init__(signal.Signals(signum).name)


class FrameScheduler:
    """Play ``frames`` in a closed loop until a quit key or SIGINT/SIGTERM.

    Each tick polls input, snapshots the config, renders the frame through
    the rasterizer, paints the HUD and then sleeps until the tick boundary.
    Rasterizer time counts against the interval; late ticks are not skipped.
    """

    def __init__(
        self,
        frames: Sequence[Path],
        config: RenderConfig,
        session: TerminalSession,
        poller: InputPoller,
        rasterizer: str = DEFAULT_RASTERIZER,
        render: Callable[[str, Sequence[str], Path], None] = render_frame,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not frames:
            raise ValueError("FrameScheduler needs at least one frame")
        self.frames = list(frames)
        self.config = config
        self.session = session
        self.poller = poller
        self.rasterizer = rasterizer
        self._render = render
        self._clock = clock
        self._sleep = sleep
        self.state = SchedulerState.RUNNING
        self.shutdown_reason: Optional[str] = None
        self.ticks = 0
        self.failures = 0
        self._seen_failures: set[str] = set()
        self._skipped: set[Path] = set()
        self._consecutive_skips = 0
        self._previous_handlers: dict[int, object] = {}

    def run(self) -> int:
        """Drive the loop to completion and return the process exit status."""

        self._install_signal_handlers()
        try:
            with self.session:
                self._loop()
        except ShutdownSignal as exc:
            logger.info("Received %s, shutting down", exc)
        finally:
            self._restore_signal_handlers()
            self.session.release()
        logger.info(
            "Stopped after %s ticks (%s rasterizer failures): %s",
            self.ticks,
            self.failures,
            self.shutdown_reason,
        )
        return 0

    def request_shutdown(self, reason: str) -> None:
        if self.state is SchedulerState.SHUTTING_DOWN:
            return
        self.state = SchedulerState.SHUTTING_DOWN
        self.shutdown_reason = reason

    def tick(self, frame: Path) -> None:
        """Run the per-frame protocol once."""

        started = self._clock()
        if self.poller.poll():
            self.request_shutdown("quit key")
            return

        if not frame.is_file():
            self._skip(frame, started)
            return
        self._consecutive_skips = 0

        snapshot = self.config.snapshot()
        args = build_rasterizer_args(snapshot)

        self.session.clear()
        try:
            self._render(self.rasterizer, args, frame)
        except RasterizerError as exc:
            self._report_failure(exc)

        if self.poller.interactive and snapshot.show_hud:
            self.session.write(render_hud(snapshot))

        self.ticks += 1
        remaining = started + snapshot.frame_interval - self._clock()
        if remaining > 0:
            self._sleep(remaining)

    def _loop(self) -> None:
        index = 0
        while self.state is SchedulerState.RUNNING:
            self.tick(self.frames[index])
            index = (index + 1) % len(self.frames)

    def _report_failure(self, exc: RasterizerError) -> None:
        self.failures += 1
        message = str(exc)
        reason = exc.reason
        if reason in self._seen_failures:
            logger.debug("%s", message)
        else:
            self._seen_failures.add(reason)
            if exc.returncode is None:
                logger.error("%s", message)
            else:
                logger.warning("%s", message)
        self.session.write(f"{message}\n")

    def _skip(self, frame: Path, started: float) -> None:
        if frame in self._skipped:
            logger.debug("Skipping %s again", frame)
        else:
            self._skipped.add(frame)
            logger.warning("Skipping %s: no longer a regular file", frame)
        self._consecutive_skips += 1
        # A whole pass without a playable frame still waits out one tick.
        if self._consecutive_skips >= len(self.frames):
            self._consecutive_skips = 0
            remaining = started + self.config.frame_interval - self._clock()
            if remaining > 0:
                self._sleep(remaining)

    def _handle_signal(self, signum, frame) -> None:
        if self.state is SchedulerState.SHUTTING_DOWN:
            return
        self.request_shutdown(signal.Signals(signum).name)
        self.session.release()
        raise ShutdownSignal(signum)

    def _install_signal_handlers(self) -> None:
        for signum in HANDLED_SIGNALS:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)

    def _restore_signal_handlers(self) -> None:
        while self._previous_handlers:
            signum, handler = self._previous_handlers.popitem()
            signal.signal(signum, handler)
