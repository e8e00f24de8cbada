"""Tests for the terminal demo host."""

from __future__ import annotations

import io
import sys

import pytest

from devconsole import cli
from devconsole.cli import TerminalHost, build_console, main, parse_args


class FakeTerminal:
    def __init__(self, columns: int = 40, rows: int = 10) -> None:
        self.columns = columns
        self.rows = rows
        self.writes: list[str] = []
        self.erased = 0
        self.frames: list[tuple[list[str], int]] = []

    def start(self, on_input, on_resize) -> None:
        pass

    def stop(self) -> None:
        pass

    def write(self, data: str) -> None:
        self.writes.append(data)

    def erase(self) -> None:
        self.erased += 1

    def draw(self, lines: list[str], top: int = 1) -> None:
        self.frames.append((lines, top))


@pytest.fixture
def host(monkeypatch: pytest.MonkeyPatch) -> TerminalHost:
    monkeypatch.setattr(cli, "find_copy_command", lambda: None)
    console, money = build_console(parse_args(["--log-level", "debug"]))
    return TerminalHost(console, FakeTerminal(), money)


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.config is None
        assert args.log_level is None
        assert not args.demo_logs

    def test_flags(self) -> None:
        args = parse_args(["--config", "c.json", "--log-level", "WARN", "--demo-logs"])
        assert args.config == "c.json"
        assert args.log_level == "WARN"
        assert args.demo_logs


class TestTerminalHost:
    def test_log_level_override(self, host: TerminalHost) -> None:
        assert host.console.log_level == "DEBUG"

    def test_f2_opens_console(self, host: TerminalHost) -> None:
        host.feed("\x1bOQ")
        assert host.console.is_open

    def test_typed_command_runs(self, host: TerminalHost) -> None:
        host.feed("\x1bOQ")
        host.feed("money add 5\r")
        assert host.money["value"] == 5
        assert host.console.command_line.buffer == ""

    def test_shifted_letters_are_typed(self, host: TerminalHost) -> None:
        host.feed("\x1bOQ")
        host.feed("Hi")
        assert host.console.command_line.buffer == "Hi"
        assert not host.console.modifiers.shift

    def test_ctrl_chord_does_not_type(self, host: TerminalHost) -> None:
        host.feed("\x1bOQ")
        host.feed("ab\x15")
        assert host.console.command_line.buffer == "ab"
        assert not host.console.modifiers.ctrl

    def test_paste_event(self, host: TerminalHost) -> None:
        host.feed("\x1bOQ")
        host.feed("\x1b[200~money\x1b[201~")
        assert host.console.command_line.buffer == "money"

    def test_q_quits_when_closed(self, host: TerminalHost) -> None:
        host.feed("q")
        assert host.done.is_set()

    def test_q_is_typed_when_open(self, host: TerminalHost) -> None:
        host.feed("\x1bOQq")
        assert not host.done.is_set()
        assert host.console.command_line.buffer == "q"

    def test_resize_sets_page_size(self, host: TerminalHost) -> None:
        host.on_resize()
        assert host.console.scroll.page_size == 5

    def test_redraw_erases_before_drawing(self, host: TerminalHost) -> None:
        terminal = host.terminal
        host.redraw()
        assert terminal.erased == 1
        assert terminal.writes == []
        lines, top = terminal.frames[-1]
        assert top == 1
        assert lines[0].startswith("Demo host. Press F2")

    def test_redraw_open_puts_command_line_last(self, host: TerminalHost) -> None:
        terminal = host.terminal
        host.on_resize()
        host.feed("\x1bOQ")
        lines, top = terminal.frames[-1]
        assert top == terminal.rows
        assert "> " in lines[0]


class TestMain:
    def test_requires_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO())
        assert main([]) == 1
