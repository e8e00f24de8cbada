"""Raw-mode terminal used by the ``dev-console`` demo host.

``RawTerminal`` switches stdin to raw mode on the alternate screen with
bracketed paste turned on, delivers decoded input and resize notifications
through callbacks, and draws whole rows with absolute cursor moves. Input is
read by the running asyncio loop, so ``start`` must be called from a
coroutine.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

InputCallback = Callable[[str], None]
ResizeCallback = Callable[[], None]

# Modes switched on by start() and back off by stop(), in reverse
_ENTER_MODES = "\x1b[?1049h\x1b[?2004h\x1b[?25l"
_LEAVE_MODES = "\x1b[?25h\x1b[?2004l\x1b[?1049l"

_ERASE_ROW = "\x1b[2K"
_ERASE_SCREEN = "\x1b[2J"
_READ_CHUNK = 4096


def _goto(row: int, col: int = 1) -> str:
    return f"\x1b[{row};{col}H"


class Terminal(Protocol):
    """What the demo host needs from a screen."""

    columns: int
    rows: int

    def start(self, on_input: InputCallback, on_resize: ResizeCallback) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    def erase(self) -> None: ...

    def draw(self, lines: list[str], top: int = 1) -> None: ...


class RawTerminal:
    """stdin/stdout terminal in raw mode."""

    def __init__(self) -> None:
        self._fd = sys.stdin.fileno()
        self._saved_mode: list | None = None
        self._saved_winch: signal.Handlers | None = None
        self._on_input: InputCallback | None = None
        self._on_resize: ResizeCallback | None = None
        self._reading = False

    @property
    def columns(self) -> int:
        return shutil.get_terminal_size((80, 24)).columns

    @property
    def rows(self) -> int:
        return shutil.get_terminal_size((80, 24)).lines

    def start(self, on_input: InputCallback, on_resize: ResizeCallback) -> None:
        self._on_input = on_input
        self._on_resize = on_resize

        self._saved_mode = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)
        self.write(_ENTER_MODES)

        self._saved_winch = signal.signal(signal.SIGWINCH, self._handle_winch)
        asyncio.get_running_loop().add_reader(self._fd, self._handle_readable)
        self._reading = True

    def stop(self) -> None:
        """Undo everything ``start`` did. Safe to call more than once."""
        if self._reading:
            asyncio.get_running_loop().remove_reader(self._fd)
            self._reading = False
        if self._saved_winch is not None:
            signal.signal(signal.SIGWINCH, self._saved_winch)
            self._saved_winch = None
        if self._saved_mode is not None:
            self.write(_LEAVE_MODES)
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_mode)
            self._saved_mode = None
        self._on_input = self._on_resize = None

    def write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()

    def erase(self) -> None:
        self.write(_ERASE_SCREEN)

    def draw(self, lines: list[str], top: int = 1) -> None:
        """Replace rows ``top``, ``top + 1``, ... (1-based) with *lines*."""
        self.write("".join(_goto(top + i) + _ERASE_ROW + line for i, line in enumerate(lines)))

    def _handle_readable(self) -> None:
        try:
            chunk = os.read(self._fd, _READ_CHUNK)
        except BlockingIOError:
            return
        if chunk and self._on_input is not None:
            self._on_input(chunk.decode("utf-8", errors="replace"))

    def _handle_winch(self, signum: int, frame: object) -> None:
        if self._on_resize is not None:
            self._on_resize()
