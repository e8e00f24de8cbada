"""Tests for devconsole.modifiers.ModifierState."""

from __future__ import annotations

import sys

import pytest

from devconsole.modifiers import ModifierState, is_command_key_platform


class TestMomentaryModifiers:
    @pytest.mark.parametrize(
        ("key", "flag"),
        [
            ("lshift", "shift"),
            ("rshift", "shift"),
            ("lctrl", "ctrl"),
            ("rctrl", "ctrl"),
            ("lalt", "alt"),
            ("ralt", "alt"),
            ("lgui", "meta"),
            ("rgui", "meta"),
        ],
    )
    def test_press_and_release(self, key: str, flag: str) -> None:
        state = ModifierState()
        assert state.press(key)
        assert getattr(state, flag)
        assert state.release(key)
        assert not getattr(state, flag)

    def test_press_ignores_other_keys(self) -> None:
        state = ModifierState()
        assert not state.press("a")
        assert not state.press("capslock")
        assert state.held_names() == []

    def test_release_ignores_other_keys(self) -> None:
        assert not ModifierState().release("a")

    def test_release_all_keeps_locks(self) -> None:
        state = ModifierState(shift=True, ctrl=True, alt=True, meta=True, capslock=True)
        state.release_all()
        assert state.held_names() == ["capslock"]


class TestLatchedKeys:
    @pytest.mark.parametrize("key", ["capslock", "scrolllock", "numlock"])
    def test_toggles_on_each_release(self, key: str) -> None:
        state = ModifierState()
        state.release(key)
        assert getattr(state, key)
        state.release(key)
        assert not getattr(state, key)


class TestPrimaryModifier:
    def test_ctrl_platform(self) -> None:
        state = ModifierState(command_key=False)
        state.press("lctrl")
        assert state.primary_modifier_held()
        assert state.is_held("primary")
        assert state.is_held("ctrl")

    def test_command_key_platform(self) -> None:
        state = ModifierState(command_key=True)
        state.press("lctrl")
        assert not state.primary_modifier_held()
        state.press("rgui")
        assert state.primary_modifier_held()

    def test_platform_detection(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "darwin")
        assert is_command_key_platform()
        assert ModifierState().command_key
        monkeypatch.setattr(sys, "platform", "linux")
        assert not is_command_key_platform()


class TestTextSuppression:
    def test_ctrl_or_meta_suppress(self) -> None:
        assert ModifierState(ctrl=True).suppresses_text_input()
        assert ModifierState(meta=True).suppresses_text_input()

    def test_shift_and_alt_do_not(self) -> None:
        assert not ModifierState(shift=True, alt=True).suppresses_text_input()
