"""Key identifiers and modifier-aware key matching.

Keys use short lowercase names (``"return"``, ``"pageup"``, ``"lctrl"``,
``"c"``). Bindings are written as ``+``-joined key ids such as
``"primary+shift+c"`` or ``"alt+right"``, where ``primary`` stands for the
platform shortcut modifier (see ``ModifierState.primary_modifier_held``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devconsole.modifiers import ModifierState

KeyId = str

# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    # Special keys
    escape = "escape"
    return_ = "return"
    kp_enter = "kpenter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageup"
    page_down = "pagedown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    # Function keys
    f1 = "f1"
    f2 = "f2"
    f3 = "f3"
    f4 = "f4"

    # Modifier keys
    lshift = "lshift"
    rshift = "rshift"
    lctrl = "lctrl"
    rctrl = "rctrl"
    lalt = "lalt"
    ralt = "ralt"
    lgui = "lgui"
    rgui = "rgui"

    # Lock keys
    capslock = "capslock"
    scrolllock = "scrolllock"
    numlock = "numlock"

    @staticmethod
    def primary(key: str) -> str:
        return f"primary+{key}"

    @staticmethod
    def primary_shift(key: str) -> str:
        return f"primary+shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"

    @staticmethod
    def meta(key: str) -> str:
        return f"meta+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIER_NAMES: frozenset[str] = frozenset({"shift", "ctrl", "alt", "meta", "primary"})

# Spellings accepted in binding strings and config files
KEY_ALIASES: dict[str, str] = {
    "enter": Key.return_,
    "esc": Key.escape,
    "pgup": Key.page_up,
    "pgdn": Key.page_down,
    "del": Key.delete,
    "cmd": "meta",
    "command": "meta",
    "gui": "meta",
    "super": "meta",
    "control": "ctrl",
    "option": "alt",
}


# ---------------------------------------------------------------------------
# Binding parsing and matching
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyBinding:
    """A key plus the modifiers that must be held for it to match."""

    key: str
    modifiers: frozenset[str] = field(default_factory=frozenset)

    def __str__(self) -> str:
        order = ["primary", "ctrl", "meta", "alt", "shift"]
        mods = [m for m in order if m in self.modifiers]
        return "+".join([*mods, self.key])


def _normalize(part: str) -> str:
    part = part.strip().lower()
    return KEY_ALIASES.get(part, part)


def parse_key_id(key_id: KeyId) -> KeyBinding | None:
    """Parse ``"primary+shift+c"`` into a ``KeyBinding``.

    Returns None for an empty id, an id with no key, or an unknown modifier.
    A lone ``"+"`` is the plus key itself.
    """
    if not key_id:
        return None
    if key_id == "+":
        return KeyBinding(key="+")

    parts = [_normalize(p) for p in key_id.split("+")]
    if any(not p for p in parts):
        return None

    *mods, key = parts
    if key in MODIFIER_NAMES:
        return None
    if any(m not in MODIFIER_NAMES for m in mods):
        return None
    return KeyBinding(key=key, modifiers=frozenset(mods))


def matches_key(key: str, modifiers: ModifierState, key_id: KeyId) -> bool:
    """Check whether *key* pressed under *modifiers* satisfies *key_id*.

    Every modifier named in the binding must be held; additional held
    modifiers do not prevent a match, so callers test more specific
    bindings first.
    """
    binding = parse_key_id(key_id)
    if binding is None or binding.key != key.lower():
        return False
    return all(modifiers.is_held(m) for m in binding.modifiers)
