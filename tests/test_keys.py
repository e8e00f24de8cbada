"""Tests for devconsole.keys -- parse_key_id and matches_key."""

from __future__ import annotations

import pytest

from devconsole.keys import Key, KeyBinding, matches_key, parse_key_id
from devconsole.modifiers import ModifierState


class TestParseKeyId:
    def test_plain_key(self) -> None:
        assert parse_key_id("return") == KeyBinding(key="return")

    def test_modifiers(self) -> None:
        binding = parse_key_id("primary+shift+c")
        assert binding is not None
        assert binding.key == "c"
        assert binding.modifiers == frozenset({"primary", "shift"})

    def test_case_and_whitespace(self) -> None:
        assert parse_key_id(" Ctrl + C ") == KeyBinding(key="c", modifiers=frozenset({"ctrl"}))

    @pytest.mark.parametrize(
        ("key_id", "expected"),
        [
            ("enter", KeyBinding(key="return")),
            ("esc", KeyBinding(key="escape")),
            ("pgup", KeyBinding(key="pageup")),
            ("cmd+backspace", KeyBinding(key="backspace", modifiers=frozenset({"meta"}))),
            ("option+up", KeyBinding(key="up", modifiers=frozenset({"alt"}))),
            ("control+u", KeyBinding(key="u", modifiers=frozenset({"ctrl"}))),
        ],
    )
    def test_aliases(self, key_id: str, expected: KeyBinding) -> None:
        assert parse_key_id(key_id) == expected

    def test_plus_key(self) -> None:
        assert parse_key_id("+") == KeyBinding(key="+")

    @pytest.mark.parametrize("key_id", ["", "ctrl+", "ctrl++c", "shift", "hyper+x"])
    def test_invalid(self, key_id: str) -> None:
        assert parse_key_id(key_id) is None

    def test_str_orders_modifiers(self) -> None:
        binding = KeyBinding(key="c", modifiers=frozenset({"shift", "primary"}))
        assert str(binding) == "primary+shift+c"


class TestKeyHelpers:
    def test_combinators(self) -> None:
        assert Key.primary("v") == "primary+v"
        assert Key.primary_shift("c") == "primary+shift+c"
        assert Key.alt(Key.up) == "alt+up"
        assert Key.meta(Key.backspace) == "meta+backspace"


class TestMatchesKey:
    def test_plain_key_without_modifiers(self) -> None:
        assert matches_key("return", ModifierState(), "return")

    def test_key_mismatch(self) -> None:
        assert not matches_key("tab", ModifierState(), "return")

    def test_required_modifier_missing(self) -> None:
        assert not matches_key("c", ModifierState(command_key=False), "primary+c")

    def test_primary_is_ctrl_without_command_key(self) -> None:
        mods = ModifierState(ctrl=True, command_key=False)
        assert matches_key("c", mods, "primary+c")
        assert not matches_key("c", ModifierState(meta=True, command_key=False), "primary+c")

    def test_primary_is_meta_with_command_key(self) -> None:
        mods = ModifierState(meta=True, command_key=True)
        assert matches_key("c", mods, "primary+c")
        assert not matches_key("c", ModifierState(ctrl=True, command_key=True), "primary+c")

    def test_extra_modifiers_still_match(self) -> None:
        mods = ModifierState(ctrl=True, shift=True, command_key=False)
        assert matches_key("c", mods, "primary+c")
        assert matches_key("c", mods, "primary+shift+c")

    def test_key_name_is_case_insensitive(self) -> None:
        assert matches_key("F2", ModifierState(), "f2")

    def test_invalid_binding_never_matches(self) -> None:
        assert not matches_key("x", ModifierState(), "hyper+x")
