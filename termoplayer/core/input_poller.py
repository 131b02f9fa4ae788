"""Non-blocking keystroke reader that mutates the shared RenderConfig."""

from __future__ import annotations

import logging
import os
import select
import time
from typing import Callable, Optional

from . import RenderConfig

logger = logging.getLogger(__name__)

POLL_BUDGET_SECONDS = 0.01
ESCAPE = b"\x1b"
WEIGHT_STEP = 0.01
THRESHOLD_STEP = 0.01
WIDTH_STEP = 2
HEIGHT_STEP = 1

KeyHandler = Callable[[RenderConfig], object]


def _toggle(name: str) -> KeyHandler:
    return lambda config: config.toggle(name)


def _weight(channel: str, delta: float) -> KeyHandler:
    return lambda config: config.adjust_weight(channel, delta)


KEY_BINDINGS: dict[str, KeyHandler] = {
    "1": _toggle("use_color"),
    "2": _toggle("edges_only"),
    "3": _toggle("invert"),
    "4": lambda config: config.cycle_color_depth(),
    "5": _toggle("border"),
    "6": _toggle("flip_x"),
    "7": _toggle("flip_y"),
    "8": _toggle("term_fit"),
    "9": _toggle("term_center"),
    "0": _toggle("term_zoom"),
    "x": _toggle("grayscale"),
    "X": _toggle("grayscale"),
    "y": lambda config: config.cycle_background(),
    "Y": lambda config: config.cycle_background(),
    "f": _toggle("fill"),
    "F": _toggle("fill"),
    "p": _toggle("show_hud"),
    "P": _toggle("show_hud"),
    "r": _weight("red", -WEIGHT_STEP),
    "R": _weight("red", WEIGHT_STEP),
    "g": _weight("green", -WEIGHT_STEP),
    "G": _weight("green", WEIGHT_STEP),
    "b": _weight("blue", -WEIGHT_STEP),
    "B": _weight("blue", WEIGHT_STEP),
    "w": lambda config: config.adjust_width(WIDTH_STEP),
    "W": lambda config: config.adjust_width(-WIDTH_STEP),
    "h": lambda config: config.adjust_height(HEIGHT_STEP),
    "H": lambda config: config.adjust_height(-HEIGHT_STEP),
    "s": _toggle("use_explicit_size"),
    "S": _toggle("use_explicit_size"),
}

QUIT_KEYS = frozenset({"q", "Q"})

# Final byte of a CSI (ESC [) or SS3 (ESC O) cursor key sequence.
ARROW_BINDINGS: dict[str, KeyHandler] = {
    "C": lambda config: config.adjust_fps(1),
    "D": lambda config: config.adjust_fps(-1),
    "A": lambda config: config.adjust_edge_threshold(THRESHOLD_STEP),
    "B": lambda config: config.adjust_edge_threshold(-THRESHOLD_STEP),
}


class InputPoller:
    """Drain buffered key events within a fixed time budget.

    ``poll()`` returns ``True`` once a quit key has been read. Reads go
    through ``select`` on a raw file descriptor so no call blocks longer
    than the remaining budget.
    """

    def __init__(
        self,
        config: RenderConfig,
        fd: Optional[int] = None,
        interactive: bool = True,
        budget: float = POLL_BUDGET_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.fd = fd
        self.interactive = interactive
        self.budget = budget
        self._clock = clock
        self._eof = False

    @property
    def active(self) -> bool:
        return self.interactive and self.fd is not None and not self._eof

    def poll(self) -> bool:
        if not self.active:
            return False

        deadline = self._clock() + self.budget
        while True:
            byte = self._read_byte(deadline)
            if byte is None:
                return False
            if byte == ESCAPE:
                self._handle_escape(deadline)
                continue
            if self.dispatch(byte.decode("latin-1")):
                return True

    def dispatch(self, key: str) -> bool:
        """Apply a single key to the config; return True for a quit request."""

        if key in QUIT_KEYS:
            logger.info("Quit key pressed")
            return True
        handler = KEY_BINDINGS.get(key)
        if handler is None:
            logger.debug("Ignoring unbound key %r", key)
            return False
        result = handler(self.config)
        logger.debug("Key %r -> %r", key, result)
        return False

    def dispatch_sequence(self, sequence: str) -> bool:
        """Apply the two bytes that follow an escape.

        Unknown sequences are dropped. Arrow keys never request a quit, so
        this always returns False, matching ``dispatch``.
        """

        if len(sequence) != 2 or sequence[0] not in "[O":
            logger.debug("Discarding escape sequence %r", sequence)
            return False
        handler = ARROW_BINDINGS.get(sequence[1])
        if handler is None:
            logger.debug("Discarding escape sequence %r", sequence)
            return False
        result = handler(self.config)
        logger.debug("Arrow %r -> %r", sequence, result)
        return False

    def _handle_escape(self, deadline: float) -> None:
        tail = b""
        while len(tail) < 2:
            byte = self._read_byte(deadline)
            if byte is None:
                logger.debug("Incomplete escape sequence %r discarded", tail)
                return
            tail += byte
        self.dispatch_sequence(tail.decode("latin-1"))

    def _read_byte(self, deadline: float) -> Optional[bytes]:
        if self._eof:
            return None
        timeout = max(0.0, deadline - self._clock())
        ready, _, _ = select.select([self.fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(self.fd, 1)
        if not data:
            logger.debug("Input stream closed; keyboard polling disabled")
            self._eof = True
            return None
        return data
