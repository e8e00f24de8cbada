"""Modifier and lock key tracking."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from devconsole.keys import Key

# Physical key -> flag it drives while held
MODIFIER_KEYS: dict[str, str] = {
    Key.lshift: "shift",
    Key.rshift: "shift",
    Key.lctrl: "ctrl",
    Key.rctrl: "ctrl",
    Key.lalt: "alt",
    Key.ralt: "alt",
    Key.lgui: "meta",
    Key.rgui: "meta",
}

# Hardware-latched keys, toggled once per release
LATCHED_KEYS: dict[str, str] = {
    Key.capslock: "capslock",
    Key.scrolllock: "scrolllock",
    Key.numlock: "numlock",
}


def is_command_key_platform() -> bool:
    """True where shortcuts use the command key rather than control."""
    return sys.platform == "darwin"


@dataclass
class ModifierState:
    """Which modifiers are held and which locks are latched."""

    capslock: bool = False
    scrolllock: bool = False
    numlock: bool = False
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False
    command_key: bool = field(default_factory=is_command_key_platform)

    def primary_modifier_held(self) -> bool:
        """The platform shortcut modifier: meta with a command key, ctrl otherwise."""
        return self.meta if self.command_key else self.ctrl

    def is_held(self, name: str) -> bool:
        if name == "primary":
            return self.primary_modifier_held()
        return bool(getattr(self, name, False))

    def press(self, key: str) -> bool:
        """Set the flag for a momentary modifier key. Returns True if *key* is one."""
        flag = MODIFIER_KEYS.get(key)
        if flag is None:
            return False
        setattr(self, flag, True)
        return True

    def release(self, key: str) -> bool:
        """Clear a momentary flag or toggle a latched one. Returns True if handled."""
        flag = MODIFIER_KEYS.get(key)
        if flag is not None:
            setattr(self, flag, False)
            return True
        latch = LATCHED_KEYS.get(key)
        if latch is not None:
            setattr(self, latch, not getattr(self, latch))
            return True
        return False

    def release_all(self) -> None:
        """Drop every momentary modifier; latched keys keep their state."""
        self.shift = self.ctrl = self.alt = self.meta = False

    def suppresses_text_input(self) -> bool:
        # Shortcut chords must not echo their letter into the buffer.
        return self.ctrl or self.meta

    def held_names(self) -> list[str]:
        return [
            name
            for name in ("capslock", "scrolllock", "numlock", "shift", "ctrl", "alt", "meta")
            if getattr(self, name)
        ]
