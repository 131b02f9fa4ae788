"""Scoped terminal setup: hidden cursor and, in interactive mode, no echo."""

from __future__ import annotations

import logging
import os
import sys
import termios
from typing import Optional, TextIO

logger = logging.getLogger(__name__)

HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"
CLEAR_HOME = "\033[H\033[2J"


def _is_tty(fd: int) -> bool:
    return os.isatty(fd)


class TerminalSession:
    """Acquire on enter, release exactly once on exit or via ``release()``.

    ``release()`` may be called from the normal exit path and from a signal
    handler; only the first call does any work.
    """

    def __init__(self, interactive: bool = False, fd: Optional[int] = None, stream: Optional[TextIO] = None):
        self.interactive = interactive
        self.fd = fd
        self.stream = stream if stream is not None else sys.stdout
        self._saved_attrs: Optional[list] = None
        self._acquired = False
        self._released = False

    @property
    def active(self) -> bool:
        return self._acquired and not self._released

    def acquire(self) -> "TerminalSession":
        if self._acquired:
            return self
        self._acquired = True
        self._write(HIDE_CURSOR)
        if self.interactive and self.fd is not None and _is_tty(self.fd):
            self._saved_attrs = termios.tcgetattr(self.fd)
            quiet = termios.tcgetattr(self.fd)
            # Keep ISIG so Ctrl-C still raises SIGINT.
            quiet[3] &= ~(termios.ECHO | termios.ICANON)
            quiet[6][termios.VMIN] = 1
            quiet[6][termios.VTIME] = 0
            termios.tcsetattr(self.fd, termios.TCSANOW, quiet)
            logger.debug("Echo and canonical mode disabled on fd %s", self.fd)
        return self

    def release(self) -> bool:
        """Restore the terminal; return False if it was already released."""

        if self._released or not self._acquired:
            return False
        self._released = True
        try:
            if self._saved_attrs is not None:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_attrs)
                logger.debug("Terminal attributes restored on fd %s", self.fd)
        finally:
            self._write(SHOW_CURSOR)
        return True

    def clear(self) -> None:
        self._write(CLEAR_HOME)

    def write(self, text: str) -> None:
        self._write(text)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def __enter__(self) -> "TerminalSession":
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
