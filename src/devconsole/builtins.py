"""Commands every console ships with, plus a factory for counter commands."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable

from devconsole.commands import CommandSpec
from devconsole.errors import InvalidArgument, MissingArguments, UnknownCommand
from devconsole.messages import ConsoleOutput

if TYPE_CHECKING:
    from devconsole.console import DevConsole

Number = int | float

ADJUST_OPERATIONS = ("add", "remove", "set")


def register_builtin_commands(console: DevConsole) -> None:
    """Register ``help``, ``shortcuts``, ``clear`` and ``exit`` on *console*."""
    output = console.output
    registry = console.registry

    def help_command(args: list[str]) -> None:
        if args:
            spec = registry.lookup(args[0])
            if spec is None:
                raise UnknownCommand(args[0])
            output.print(f"{spec.name}: {spec.description or 'No description'}")
            if spec.usage:
                output.print(spec.usage)
            return
        output.print("Available commands:")
        for spec in registry.all():
            if spec.description:
                output.print(f"{spec.name}: {spec.description}")

    def shortcuts_command(args: list[str]) -> None:
        output.print("Available shortcuts:")
        for line in shortcut_lines(console):
            output.print(line)

    def clear_command(args: list[str]) -> None:
        console.log.clear()

    def exit_command(args: list[str]) -> None:
        if console.is_open:
            console.toggle()

    registry.register(
        CommandSpec(
            name="help",
            handler=help_command,
            description="Prints a list of available commands",
            autocomplete=registry.names_with_prefix,
            usage="Usage: help <command>",
        )
    )
    registry.register(
        CommandSpec(
            name="shortcuts",
            handler=shortcuts_command,
            description="Prints a list of available shortcuts",
            usage="Usage: shortcuts",
        )
    )
    registry.register(
        CommandSpec(name="clear", handler=clear_command, description="Clear the console")
    )
    registry.register(
        CommandSpec(name="exit", handler=exit_command, description="Close the console")
    )


def shortcut_lines(console: DevConsole) -> list[str]:
    mod = "Cmd" if console.modifiers.command_key else "Ctrl"
    toggle = "/".join(k.upper() for k in console.keybindings.get_keys("toggle"))
    return [
        f"{toggle}: Open/Close the console",
        f"{mod}+C: Copy the current command to the clipboard",
        f"{mod}+Shift+C: Copy all messages to the clipboard",
        f"{mod}+V: Paste the clipboard into the current command",
        "Tab: Complete the current command or argument",
        "Up/Down, PageUp/PageDown, Home/End: Scroll the log",
    ]


# ---------------------------------------------------------------------------
# add / remove / set counters
# ---------------------------------------------------------------------------


def parse_amount(text: str) -> Number:
    """Parse a finite number, keeping integers as ``int``."""
    try:
        value = float(text)
    except ValueError:
        raise InvalidArgument("Invalid amount") from None
    if not math.isfinite(value):
        raise InvalidArgument("Invalid amount")
    return int(value) if value.is_integer() else value


def make_adjust_command(
    output: ConsoleOutput,
    name: str,
    noun: str,
    get_value: Callable[[], Number],
    adjust: Callable[[Number], None],
    description: str | None = None,
) -> CommandSpec:
    """Build a ``<name> <add|remove|set> <amount>`` command.

    *get_value* reads the current host value and *adjust* applies a signed
    delta to it; ``set`` is expressed as the delta to the target.
    """
    usage = f"Usage: {name} <add/remove/set> <amount>"

    def handler(args: list[str]) -> None:
        if len(args) < 2:
            raise MissingArguments(usage)
        operation, amount = args[0], parse_amount(args[1])
        if operation == "add":
            adjust(amount)
            output.info(f"Added {amount} {noun}")
        elif operation == "remove":
            adjust(-amount)
            output.info(f"Removed {amount} {noun}")
        elif operation == "set":
            adjust(amount - get_value())
            output.info(f"Set {noun} to {amount}")
        else:
            raise InvalidArgument("Invalid operation, use add, remove or set")

    def complete(partial: str) -> list[str]:
        return [op for op in ADJUST_OPERATIONS if op.startswith(partial)]

    return CommandSpec(
        name=name,
        handler=handler,
        description=description or f"Change the {noun}",
        autocomplete=complete,
        usage=usage,
    )
