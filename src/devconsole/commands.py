"""Command registry: names mapped to handler, help text and argument completion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from devconsole.errors import DuplicateCommand

CommandHandler = Callable[[list[str]], None]
ArgumentCompleter = Callable[[str], Sequence[str] | None]


def no_completions(partial: str) -> None:
    return None


@dataclass
class CommandSpec:
    """A registered console command."""

    name: str
    handler: CommandHandler
    description: str | None = None
    autocomplete: ArgumentCompleter = no_completions
    usage: str | None = None

    def complete(self, partial: str) -> list[str]:
        return list(self.autocomplete(partial) or [])


class CommandRegistry:
    """Insertion-ordered mapping from command name to ``CommandSpec``.

    Registering a name twice raises ``DuplicateCommand`` and leaves the
    existing entry untouched; call ``unregister`` first to replace one.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(self, spec: CommandSpec) -> CommandSpec:
        if spec.name in self._commands:
            raise DuplicateCommand(spec.name)
        self._commands[spec.name] = spec
        return spec

    def unregister(self, name: str) -> CommandSpec | None:
        return self._commands.pop(name, None)

    def lookup(self, name: str) -> CommandSpec | None:
        return self._commands.get(name)

    def all(self) -> list[CommandSpec]:
        return list(self._commands.values())

    def names(self) -> list[str]:
        return list(self._commands)

    def names_with_prefix(self, prefix: str) -> list[str]:
        """Registered names that literally start with *prefix* (case-sensitive)."""
        return [name for name in self._commands if name.startswith(prefix)]

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self.all())
