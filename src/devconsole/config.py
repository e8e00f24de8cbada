"""Console settings with JSON file loading.

Settings files use camelCase keys::

    {
        "toggleKey": "f2",
        "closeKeys": ["escape"],
        "logLevel": "DEBUG",
        "lineHeight": 20,
        "bottomPadding": 5,
        "commandKey": null,
        "keybindings": {"clearLine": ["delete", "ctrl+u"]}
    }

Values from the file are merged over the defaults, then explicit overrides
are merged over the result.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import MISSING, Field, dataclass, field, fields
from typing import Any

from devconsole.command_line import DEFAULT_PROMPT
from devconsole.keys import KeyId
from devconsole.messages import DEFAULT_LEVEL, LEVELS

logger = logging.getLogger(__name__)

DEFAULT_LINE_HEIGHT = 20
DEFAULT_BOTTOM_PADDING = 5

# camelCase file key -> dataclass field
_FIELD_NAMES: dict[str, str] = {
    "toggleKey": "toggle_key",
    "closeKeys": "close_keys",
    "logLevel": "log_level",
    "prompt": "prompt",
    "lineHeight": "line_height",
    "bottomPadding": "bottom_padding",
    "commandKey": "command_key",
    "keybindings": "keybindings",
}

# Expected types per field; close_keys and keybinding values are checked separately
_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "toggle_key": (str,),
    "log_level": (str,),
    "prompt": (str,),
    "line_height": (int, float),
    "bottom_padding": (int,),
    "command_key": (bool, type(None)),
    "keybindings": (dict,),
}


def _is_instance(value: Any, expected: tuple[type, ...]) -> bool:
    # JSON true/false must not pass as a number
    if isinstance(value, bool) and bool not in expected:
        return False
    return isinstance(value, expected)


def _field_default(f: Field) -> Any:
    if f.default_factory is not MISSING:
        return f.default_factory()
    return f.default


def _is_key_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(k, str) for k in value)


def _valid_keybindings(config: dict[str, Any]) -> dict[str, KeyId | list[KeyId]]:
    """Drop overrides whose keys are not a key id or a list of key ids."""
    valid: dict[str, KeyId | list[KeyId]] = {}
    for action, keys in config.items():
        if isinstance(keys, str) or _is_key_list(keys):
            valid[action] = keys
        else:
            logger.warning("Invalid keys %r for action %s, using default", keys, action)
    return valid


@dataclass
class ConsoleSettings:
    """Runtime options for a ``DevConsole``."""

    toggle_key: KeyId = "f2"
    close_keys: list[KeyId] = field(default_factory=lambda: ["escape"])
    log_level: str = DEFAULT_LEVEL
    prompt: str = DEFAULT_PROMPT
    line_height: int = DEFAULT_LINE_HEIGHT
    bottom_padding: int = DEFAULT_BOTTOM_PADDING
    command_key: bool | None = None
    keybindings: dict[str, KeyId | list[KeyId]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for f in fields(self):
            expected = _FIELD_TYPES.get(f.name)
            value = getattr(self, f.name)
            if expected is not None and not _is_instance(value, expected):
                logger.warning("Invalid value %r for setting %s, using default", value, f.name)
                setattr(self, f.name, _field_default(f))
        if isinstance(self.close_keys, str):
            self.close_keys = [self.close_keys]
        if not _is_key_list(self.close_keys):
            logger.warning(
                "Invalid value %r for setting close_keys, using default", self.close_keys
            )
            self.close_keys = ["escape"]
        self.keybindings = _valid_keybindings(self.keybindings)

        level = self.log_level.upper()
        if level not in LEVELS:
            logger.warning("Unknown log level %r, using %s", self.log_level, DEFAULT_LEVEL)
            level = DEFAULT_LEVEL
        self.log_level = level
        self.line_height = max(1, self.line_height)
        self.bottom_padding = max(0, self.bottom_padding)

    def keybinding_config(self) -> dict[str, KeyId | list[KeyId]]:
        """Keybinding overrides with toggle/close keys folded in."""
        config: dict[str, KeyId | list[KeyId]] = {
            "toggle": [self.toggle_key],
            "close": list(self.close_keys),
        }
        config.update(self.keybindings)
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConsoleSettings:
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_NAMES.get(key)
            if name is None:
                # Allow snake_case as well as the file spelling
                name = key if key in _FIELD_NAMES.values() else None
            if name is None:
                logger.debug("Ignoring unknown setting %r", key)
                continue
            kwargs[name] = value
        return cls(**kwargs)


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely. ``None`` overrides are skipped.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Loading ---


def _load_from_file(path: str) -> dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        logger.exception("Failed to read console settings from %s", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Console settings in %s are not an object, ignoring", path)
        return {}
    return data


def load_settings(
    path: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> ConsoleSettings:
    """Load settings from *path* (if given) and apply *overrides* on top."""
    data = _load_from_file(path) if path else {}
    if overrides:
        data = deep_merge_settings(data, overrides)
    return ConsoleSettings.from_dict(data)
