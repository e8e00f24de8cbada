"""Console keybindings manager."""

from __future__ import annotations

from typing import Literal, Mapping

from devconsole.keys import Key, KeyId, matches_key
from devconsole.modifiers import ModifierState, is_command_key_platform

ConsoleAction = Literal[
    # Visibility
    "toggle",
    "close",
    # Clipboard
    "copyAll",
    "copyCommand",
    "paste",
    # Editing
    "clearLine",
    "deleteCharBackward",
    "complete",
    "submit",
    # Scrolling
    "scrollBottom",
    "scrollTop",
    "pageDown",
    "pageUp",
    "lineUp",
    "lineDown",
]

ConsoleKeybindingsConfig = Mapping[str, KeyId | list[KeyId]]


def default_console_keybindings(command_key: bool) -> dict[ConsoleAction, list[KeyId]]:
    """Default bindings; clear-line gains cmd+backspace under the command-key convention."""
    clear_line = [Key.delete]
    if command_key:
        clear_line.append(Key.meta(Key.backspace))
    return {
        "toggle": [Key.f2],
        "close": [Key.escape],
        "copyAll": [Key.primary_shift("c")],
        "copyCommand": [Key.primary("c")],
        "paste": [Key.primary("v")],
        "clearLine": clear_line,
        "deleteCharBackward": [Key.backspace],
        "complete": [Key.tab],
        "submit": [Key.return_, Key.kp_enter],
        "scrollBottom": [Key.end, Key.alt(Key.right)],
        "scrollTop": [Key.home, Key.alt(Key.left)],
        "pageDown": [Key.page_down, Key.alt(Key.down)],
        "pageUp": [Key.page_up, Key.alt(Key.up)],
        "lineUp": [Key.up],
        "lineDown": [Key.down],
    }


class ConsoleKeybindingsManager:
    """Maps console actions to the key ids that trigger them."""

    def __init__(
        self,
        config: ConsoleKeybindingsConfig | None = None,
        command_key: bool | None = None,
    ) -> None:
        self.command_key = is_command_key_platform() if command_key is None else command_key
        self._action_to_keys: dict[str, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: ConsoleKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        # Start with defaults
        for action, keys in default_console_keybindings(self.command_key).items():
            self._action_to_keys[action] = list(keys)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, key: str, modifiers: ModifierState, action: ConsoleAction) -> bool:
        """Check if *key* under *modifiers* triggers *action*."""
        return any(
            matches_key(key, modifiers, key_id)
            for key_id in self._action_to_keys.get(action, [])
        )

    def get_keys(self, action: ConsoleAction) -> list[KeyId]:
        return list(self._action_to_keys.get(action, []))

    def set_config(self, config: ConsoleKeybindingsConfig) -> None:
        self._build_maps(config)
