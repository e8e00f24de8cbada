"""Interactive terminal demo: a tiny host application with the console embedded."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from devconsole.builtins import make_adjust_command
from devconsole.clipboard import MemoryClipboard, SystemClipboard, find_copy_command
from devconsole.config import load_settings
from devconsole.console import DevConsole
from devconsole.messages import MessageLogHandler
from devconsole.render import build_frame, render_ansi, truncate_to_width
from devconsole.terminal import RawTerminal, Terminal
from devconsole.terminal_keys import TerminalKeyEvent, split_sequences, translate

logger = logging.getLogger("devconsole.demo")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dev-console",
        description="Run a demo host with the developer console embedded",
    )
    parser.add_argument("--config", help="Path to a JSON settings file")
    parser.add_argument(
        "--log-level",
        help="Lowest level shown in the console (TRACE, DEBUG, INFO, WARN, ERROR)",
    )
    parser.add_argument(
        "--demo-logs",
        action="store_true",
        help="Emit one sample log line per level at startup",
    )
    return parser.parse_args(argv)


class TerminalHost:
    """Feeds terminal input to a console and redraws after every chunk."""

    def __init__(self, console: DevConsole, terminal: Terminal, money: dict[str, float]) -> None:
        self.console = console
        self.terminal = terminal
        self.money = money
        self.done = asyncio.Event()

    def feed(self, data: str) -> None:
        for sequence in split_sequences(data):
            event = translate(sequence)
            if event is not None:
                self.handle(event)
        self.redraw()

    def handle(self, event: TerminalKeyEvent) -> None:
        # Terminals report no releases, so each chord becomes press/release pairs.
        for mod in event.modifiers:
            self.console.on_key_down(mod)
        if event.key is not None:
            if not self.console.on_key_down(event.key):
                self._host_key(event)
        if event.text:
            self.console.on_text_input(event.text)
        if event.key is not None:
            self.console.on_key_up(event.key)
        for mod in reversed(event.modifiers):
            self.console.on_key_up(mod)

    def _host_key(self, event: TerminalKeyEvent) -> None:
        if event.key == "q" or (event.key in ("c", "d") and "lctrl" in event.modifiers):
            self.done.set()

    def on_resize(self) -> None:
        self.console.on_frame_resize(self.terminal.rows * self.console.settings.line_height)
        self.redraw()

    def redraw(self) -> None:
        width = self.terminal.columns
        self.terminal.erase()
        frame = build_frame(self.console)
        if not frame.open:
            toggle = "/".join(self.console.keybindings.get_keys("toggle")).upper()
            self.terminal.draw(
                [
                    truncate_to_width(f"Demo host. Press {toggle} to open the console, q to quit.", width),
                    truncate_to_width(f"money = {self.money['value']}", width),
                ]
            )
            return
        lines = render_ansi(frame, width)
        self.terminal.draw(lines[:-1])
        self.terminal.draw(lines[-1:], top=self.terminal.rows)


def build_console(args: argparse.Namespace) -> tuple[DevConsole, dict[str, float]]:
    overrides = {"logLevel": args.log_level} if args.log_level else None
    settings = load_settings(args.config, overrides)
    clipboard = SystemClipboard() if find_copy_command() else MemoryClipboard()
    console = DevConsole(settings, clipboard=clipboard)

    money: dict[str, float] = {"value": 0}

    def adjust(delta: float) -> None:
        money["value"] += delta

    console.registry.register(
        make_adjust_command(
            console.output, "money", "money", lambda: money["value"], adjust,
            description="Change the player's money",
        )
    )
    return console, money


async def run(args: argparse.Namespace) -> None:
    console, money = build_console(args)

    handler = MessageLogHandler(console.log)
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    terminal = RawTerminal()
    host = TerminalHost(console, terminal, money)
    terminal.start(host.feed, host.on_resize)
    try:
        host.on_resize()
        if args.demo_logs:
            logger.log(5, "trace sample")
            logger.debug("debug sample")
            logger.info("info sample")
            logger.warning("warn sample")
            logger.error("error sample")
        host.redraw()
        await host.done.wait()
    finally:
        terminal.stop()
        root.removeHandler(handler)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if not sys.stdin.isatty():
        print("dev-console needs an interactive terminal", file=sys.stderr)
        return 1
    asyncio.run(run(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
