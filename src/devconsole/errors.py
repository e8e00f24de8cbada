"""Error taxonomy for console commands and registration."""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for errors reported to the console scrollback."""


class InvalidArgument(ConsoleError):
    """An argument could not be interpreted (bad number, unknown operation)."""


class MissingArguments(ConsoleError):
    """A command was called without its required arguments."""

    def __init__(self, usage: str) -> None:
        super().__init__(usage)
        self.usage = usage


class UnknownCommand(ConsoleError):
    """No command is registered under the submitted name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Command not found: {name}")
        self.name = name


class DuplicateCommand(ConsoleError):
    """A command with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Command already registered: {name}")
        self.name = name
