"""Shared fixtures for console tests."""

from __future__ import annotations

import pytest

from devconsole.clipboard import MemoryClipboard
from devconsole.config import ConsoleSettings
from devconsole.console import DevConsole


@pytest.fixture
def clipboard() -> MemoryClipboard:
    return MemoryClipboard()


@pytest.fixture
def console(clipboard: MemoryClipboard) -> DevConsole:
    """A console using ctrl as the primary modifier, five lines per page."""
    return DevConsole(ConsoleSettings(command_key=False), clipboard=clipboard, page_size=5)


@pytest.fixture
def mac_console(clipboard: MemoryClipboard) -> DevConsole:
    """A console using the command key as the primary modifier."""
    return DevConsole(ConsoleSettings(command_key=True), clipboard=clipboard, page_size=5)
