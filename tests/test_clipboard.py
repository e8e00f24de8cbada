"""Tests for devconsole.clipboard."""

from __future__ import annotations

import subprocess
import sys
from typing import Any

import pytest

from devconsole import clipboard as clipboard_module
from devconsole.clipboard import (
    ClipboardUnavailableError,
    MemoryClipboard,
    SystemClipboard,
    find_copy_command,
    find_paste_command,
)


def _which(available: set[str]):
    return lambda name: f"/usr/bin/{name}" if name in available else None


class TestMemoryClipboard:
    def test_round_trip(self) -> None:
        board = MemoryClipboard()
        assert board.read() == ""
        board.write("x")
        assert board.read() == "x"


class TestCommandDiscovery:
    def test_macos(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "darwin")
        monkeypatch.setattr(clipboard_module.shutil, "which", _which({"pbcopy", "pbpaste"}))
        assert find_copy_command() == ["pbcopy"]
        assert find_paste_command() == ["pbpaste"]

    def test_prefers_xclip(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setattr(clipboard_module.shutil, "which", _which({"xclip", "xsel"}))
        assert find_copy_command() == ["xclip", "-selection", "clipboard"]
        assert find_paste_command() == ["xclip", "-selection", "clipboard", "-o"]

    def test_falls_back_to_xsel(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setattr(clipboard_module.shutil, "which", _which({"xsel"}))
        assert find_copy_command() == ["xsel", "--clipboard", "--input"]
        assert find_paste_command() == ["xsel", "--clipboard", "--output"]

    def test_nothing_available(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setattr(clipboard_module.shutil, "which", _which(set()))
        assert find_copy_command() is None
        assert find_paste_command() is None


class TestSystemClipboard:
    def test_unavailable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(clipboard_module, "find_copy_command", lambda: None)
        monkeypatch.setattr(clipboard_module, "find_paste_command", lambda: None)
        board = SystemClipboard()
        with pytest.raises(ClipboardUnavailableError):
            board.write("x")
        with pytest.raises(ClipboardUnavailableError):
            board.read()

    def test_write_and_read_use_commands(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple[list[str], dict[str, Any]]] = []

        def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
            calls.append((cmd, kwargs))
            return subprocess.CompletedProcess(cmd, 0, stdout="héllo".encode("utf-8"))

        monkeypatch.setattr(clipboard_module, "find_copy_command", lambda: ["copy"])
        monkeypatch.setattr(clipboard_module, "find_paste_command", lambda: ["paste"])
        monkeypatch.setattr(clipboard_module.subprocess, "run", fake_run)

        board = SystemClipboard()
        board.write("héllo")
        assert board.read() == "héllo"
        assert calls[0] == (["copy"], {"input": "héllo".encode("utf-8"), "check": True})
        assert calls[1][0] == ["paste"]
