"""Translate raw terminal input into console key events.

Terminals deliver bytes, not key-down/key-up pairs. ``split_sequences``
cuts a chunk into escape sequences and characters, and ``translate`` turns
each piece into a ``TerminalKeyEvent``: the console key name, the modifier
keys that were held, and any literal text the key produced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from devconsole.keys import Key

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

# xterm modifier parameter bits (parameter value is bits + 1)
_MOD_SHIFT = 1
_MOD_ALT = 2
_MOD_CTRL = 4
_MOD_META = 8

# Final byte of CSI / SS3 cursor sequences -> key
_CURSOR_KEYS: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "H": Key.home,
    "F": Key.end,
    "P": Key.f1,
    "Q": Key.f2,
    "R": Key.f3,
    "S": Key.f4,
}

# CSI <number> ~ sequences -> key
_TILDE_KEYS: dict[int, str] = {
    1: Key.home,
    2: "insert",
    3: Key.delete,
    4: Key.end,
    5: Key.page_up,
    6: Key.page_down,
    7: Key.home,
    8: Key.end,
    11: Key.f1,
    12: Key.f2,
    13: Key.f3,
    14: Key.f4,
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

_SIMPLE_KEYS: dict[str, str] = {
    ESC: Key.escape,
    "\r": Key.return_,
    "\n": Key.return_,
    "\t": Key.tab,
    "\x7f": Key.backspace,
    "\x08": Key.backspace,
    " ": Key.space,
}

_CSI_CURSOR_RE = re.compile(r"^\x1b\[(?:1;(\d+))?([ABCDHF])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?~$")
_SS3_RE = re.compile(r"^\x1bO([ABCDHFPQRS])$")


@dataclass
class TerminalKeyEvent:
    """One logical key press recovered from terminal input."""

    key: str | None
    modifiers: list[str] = field(default_factory=list)
    text: str | None = None


def _modifier_keys(param: int) -> list[str]:
    bits = max(param - 1, 0)
    keys: list[str] = []
    if bits & _MOD_SHIFT:
        keys.append(Key.lshift)
    if bits & _MOD_ALT:
        keys.append(Key.lalt)
    if bits & _MOD_CTRL:
        keys.append(Key.lctrl)
    if bits & _MOD_META:
        keys.append(Key.lgui)
    return keys


def split_sequences(data: str) -> list[str]:
    """Split raw input into complete escape sequences and single characters."""
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        if data.startswith(BRACKETED_PASTE_START, pos):
            end = data.find(BRACKETED_PASTE_END, pos)
            stop = len(data) if end == -1 else end + len(BRACKETED_PASTE_END)
            sequences.append(data[pos:stop])
            pos = stop
            continue

        ch = data[pos]
        if ch != ESC or pos + 1 >= len(data):
            sequences.append(ch)
            pos += 1
            continue

        nxt = data[pos + 1]
        if nxt == "[":
            # CSI: parameters then one final byte in 0x40..0x7E
            end = pos + 2
            while end < len(data) and not 0x40 <= ord(data[end]) <= 0x7E:
                end += 1
            sequences.append(data[pos : end + 1])
            pos = end + 1
        elif nxt == "O":
            sequences.append(data[pos : pos + 3])
            pos += 3
        else:
            # ESC + char is how terminals spell alt+char
            sequences.append(data[pos : pos + 2])
            pos += 2
    return sequences


def translate(sequence: str) -> TerminalKeyEvent | None:  # noqa: C901
    """Map one sequence from ``split_sequences`` to a key event, or None."""
    if not sequence:
        return None

    if sequence.startswith(BRACKETED_PASTE_START):
        body = sequence[len(BRACKETED_PASTE_START) :]
        if body.endswith(BRACKETED_PASTE_END):
            body = body[: -len(BRACKETED_PASTE_END)]
        return TerminalKeyEvent(key=None, text=body)

    if sequence in _SIMPLE_KEYS:
        key = _SIMPLE_KEYS[sequence]
        return TerminalKeyEvent(key=key, text=" " if key == Key.space else None)

    if sequence == "\x1b[Z":
        return TerminalKeyEvent(key=Key.tab, modifiers=[Key.lshift])

    match = _CSI_CURSOR_RE.match(sequence)
    if match:
        param = int(match.group(1)) if match.group(1) else 1
        return TerminalKeyEvent(key=_CURSOR_KEYS[match.group(2)], modifiers=_modifier_keys(param))

    match = _CSI_TILDE_RE.match(sequence)
    if match:
        key = _TILDE_KEYS.get(int(match.group(1)))
        if key is None:
            return None
        param = int(match.group(2)) if match.group(2) else 1
        return TerminalKeyEvent(key=key, modifiers=_modifier_keys(param))

    match = _SS3_RE.match(sequence)
    if match:
        return TerminalKeyEvent(key=_CURSOR_KEYS[match.group(1)])

    if len(sequence) == 2 and sequence[0] == ESC:
        inner = translate(sequence[1])
        if inner is None or inner.key is None:
            return None
        return TerminalKeyEvent(key=inner.key, modifiers=[Key.lalt, *inner.modifiers])

    if len(sequence) == 1:
        cp = ord(sequence)
        # Ctrl + letter arrives as 0x01..0x1a
        if 1 <= cp <= 26:
            return TerminalKeyEvent(key=chr(cp + ord("a") - 1), modifiers=[Key.lctrl])
        if sequence.isprintable():
            modifiers = [Key.lshift] if sequence.isupper() else []
            return TerminalKeyEvent(key=sequence.lower(), modifiers=modifiers, text=sequence)
        return None

    if sequence.startswith(ESC):
        return None
    return TerminalKeyEvent(key=None, text=sequence)
