"""Tests for devconsole.keybindings.ConsoleKeybindingsManager."""

from __future__ import annotations

from devconsole.keybindings import ConsoleKeybindingsManager, default_console_keybindings
from devconsole.keys import Key, parse_key_id
from devconsole.modifiers import ModifierState


class TestDefaults:
    def test_clear_line_without_command_key(self) -> None:
        assert default_console_keybindings(False)["clearLine"] == ["delete"]

    def test_clear_line_with_command_key(self) -> None:
        assert default_console_keybindings(True)["clearLine"] == ["delete", "meta+backspace"]

    def test_submit_keys(self) -> None:
        assert default_console_keybindings(False)["submit"] == ["return", "kpenter"]

    def test_shortcuts_use_primary_modifier(self) -> None:
        defaults = default_console_keybindings(False)
        assert defaults["copyAll"] == [Key.primary_shift("c")]
        assert defaults["copyCommand"] == ["primary+c"]
        assert defaults["paste"] == [Key.primary("v")]

    def test_every_default_parses(self) -> None:
        for keys in default_console_keybindings(True).values():
            for key_id in keys:
                assert parse_key_id(key_id) is not None, key_id

    def test_navigation_has_alt_alternatives(self) -> None:
        defaults = default_console_keybindings(False)
        assert "alt+up" in defaults["pageUp"]
        assert "alt+down" in defaults["pageDown"]
        assert "alt+left" in defaults["scrollTop"]
        assert "alt+right" in defaults["scrollBottom"]


class TestManager:
    def test_matches_default(self) -> None:
        manager = ConsoleKeybindingsManager(command_key=False)
        assert manager.matches("f2", ModifierState(), "toggle")
        assert manager.matches("kpenter", ModifierState(), "submit")
        assert not manager.matches("return", ModifierState(), "complete")

    def test_primary_uses_manager_platform_state(self) -> None:
        manager = ConsoleKeybindingsManager(command_key=True)
        mods = ModifierState(meta=True, command_key=True)
        assert manager.matches("v", mods, "paste")
        assert manager.matches("backspace", mods, "clearLine")

    def test_override_replaces_action(self) -> None:
        manager = ConsoleKeybindingsManager({"toggle": "f1"}, command_key=False)
        assert manager.get_keys("toggle") == ["f1"]
        assert not manager.matches("f2", ModifierState(), "toggle")
        assert manager.matches("f1", ModifierState(), "toggle")

    def test_override_leaves_other_actions(self) -> None:
        manager = ConsoleKeybindingsManager({"clearLine": ["delete", "ctrl+u"]}, command_key=False)
        assert manager.get_keys("submit") == ["return", "kpenter"]
        assert manager.matches("u", ModifierState(ctrl=True), "clearLine")

    def test_set_config_rebuilds_from_defaults(self) -> None:
        manager = ConsoleKeybindingsManager({"toggle": "f1"}, command_key=False)
        manager.set_config({"close": ["escape", "q"]})
        assert manager.get_keys("toggle") == ["f2"]
        assert manager.get_keys("close") == ["escape", "q"]

    def test_get_keys_returns_copy(self) -> None:
        manager = ConsoleKeybindingsManager(command_key=False)
        manager.get_keys("toggle").append("f9")
        assert manager.get_keys("toggle") == ["f2"]
