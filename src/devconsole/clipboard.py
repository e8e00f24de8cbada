"""Clipboard backends for the console's copy and paste shortcuts.

The dispatcher only needs ``write`` and ``read``. ``SystemClipboard`` pipes
text through whichever platform tool is installed; ``MemoryClipboard``
keeps it in the process.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import Protocol

# (copy command, paste command) pairs, most preferred first
_MACOS_TOOLS: list[tuple[list[str], list[str]]] = [
    (["pbcopy"], ["pbpaste"]),
]
_X11_TOOLS: list[tuple[list[str], list[str]]] = [
    (["xclip", "-selection", "clipboard"], ["xclip", "-selection", "clipboard", "-o"]),
    (["xsel", "--clipboard", "--input"], ["xsel", "--clipboard", "--output"]),
]


class ClipboardUnavailableError(Exception):
    """No clipboard tool is installed for this platform."""


class Clipboard(Protocol):
    def write(self, text: str) -> None: ...

    def read(self) -> str: ...


class MemoryClipboard:
    """In-process clipboard, for tests and hosts without an OS clipboard."""

    def __init__(self, text: str = "") -> None:
        self.text = text

    def write(self, text: str) -> None:
        self.text = text

    def read(self) -> str:
        return self.text


class SystemClipboard:
    """OS clipboard reached through its command-line tools.

    Both directions raise ``ClipboardUnavailableError`` when no tool is
    found and ``subprocess.CalledProcessError`` when the tool fails.
    """

    def write(self, text: str) -> None:
        subprocess.run(_require(find_copy_command()), input=text.encode("utf-8"), check=True)

    def read(self) -> str:
        result = subprocess.run(_require(find_paste_command()), capture_output=True, check=True)
        return result.stdout.decode("utf-8", errors="replace")


def _require(cmd: list[str] | None) -> list[str]:
    if cmd is None:
        raise ClipboardUnavailableError(
            "No clipboard tool found (pbcopy/pbpaste on macOS, xclip or xsel elsewhere)"
        )
    return cmd


def _platform_tools() -> list[tuple[list[str], list[str]]]:
    return _MACOS_TOOLS if sys.platform == "darwin" else _X11_TOOLS


def _first_installed(commands: list[list[str]]) -> list[str] | None:
    for cmd in commands:
        if shutil.which(cmd[0]):
            return list(cmd)
    return None


def find_copy_command() -> list[str] | None:
    """Command that stores its stdin on the clipboard, or None."""
    return _first_installed([copy for copy, _ in _platform_tools()])


def find_paste_command() -> list[str] | None:
    """Command that prints the clipboard to stdout, or None."""
    return _first_installed([paste for _, paste in _platform_tools()])
