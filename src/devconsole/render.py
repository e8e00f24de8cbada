"""Frame data for hosts, plus an ANSI renderer for terminal hosts.

The console never draws. ``build_frame`` packages what a host needs for the
next frame; ``render_ansi`` is one way to draw it, used by the terminal demo.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

import grapheme
import wcwidth as _wcwidth

from devconsole.console import DevConsole
from devconsole.messages import RGB, Message

_RESET = "\x1b[0m"
_DIM_BG = "\x1b[48;2;20;20;20m"


@dataclass
class RenderFrame:
    """Everything needed to draw one console frame."""

    lines: list[Message]
    command_line: str
    open: bool


def build_frame(console: DevConsole) -> RenderFrame:
    return RenderFrame(
        lines=console.visible_messages() if console.is_open else [],
        command_line=console.command_line.full_text(),
        open=console.is_open,
    )


# ---------------------------------------------------------------------------
# Width measurement
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Terminal columns taken by one grapheme cluster."""
    if not g:
        return 0
    cp = ord(g[0])
    if cp < 0x20 or (0x7F <= cp <= 0x9F):
        return 0
    if len(g) > 1:
        # ZWJ sequences, VS16 and flag pairs render as a single wide glyph
        if any(ch in ("\u200d", "\ufe0f") or 0x1F1E6 <= ord(ch) <= 0x1F1FF for ch in g):
            return 2
        if unicodedata.category(g[0]).startswith("M"):
            return 0
    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(grapheme_width(g) for g in grapheme.graphemes(text))


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Cut *text* at a grapheme boundary so it fits *max_width* columns."""
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - len(ellipsis)
    if target <= 0:
        return ellipsis[:max_width]

    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if cols + w > target:
            break
        result.append(g)
        cols += w
    return "".join(result) + ellipsis


# ---------------------------------------------------------------------------
# ANSI output
# ---------------------------------------------------------------------------


def rgb_to_sgr(color: RGB) -> str:
    r, g, b = (max(0, min(255, round(c * 255))) for c in color)
    return f"\x1b[38;2;{r};{g};{b}m"


def render_ansi(frame: RenderFrame, width: int) -> list[str]:
    """Render a frame as terminal lines: the log window, then the command line."""
    if not frame.open:
        return []

    lines: list[str] = []
    for message in frame.lines:
        text = truncate_to_width(message.formatted(), width)
        pad = " " * max(0, width - visible_width(text))
        lines.append(f"{_DIM_BG}{rgb_to_sgr(message.color)}{text}{pad}{_RESET}")

    command = truncate_to_width(frame.command_line, width)
    lines.append(f"{rgb_to_sgr((1.0, 1.0, 1.0))}{command}{_RESET}")
    return lines
