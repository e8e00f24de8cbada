"""DevConsole: the embeddable console facade a host wires into its event loop.

A host forwards its input events to ``on_key_down``, ``on_key_up``,
``on_text_input`` and ``on_frame_resize``, reads ``visible_messages()`` and
``command_line.full_text()`` each frame to draw, and registers commands
during setup::

    console = DevConsole(load_settings("console.json"))
    console.register_command("give", give_item, "Give an item to the player")
    logging.getLogger().addHandler(MessageLogHandler(console.log))

Everything runs synchronously on the caller's thread; nothing blocks.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from devconsole.autocomplete import AutocompleteEngine
from devconsole.builtins import register_builtin_commands
from devconsole.clipboard import Clipboard, SystemClipboard
from devconsole.command_line import CommandLine
from devconsole.commands import (
    ArgumentCompleter,
    CommandHandler,
    CommandRegistry,
    CommandSpec,
    no_completions,
)
from devconsole.config import ConsoleSettings
from devconsole.dispatcher import KeyDispatcher
from devconsole.errors import ConsoleError, MissingArguments, UnknownCommand
from devconsole.keybindings import ConsoleKeybindingsManager
from devconsole.messages import ConsoleOutput, Message, MessageLog, level_number
from devconsole.modifiers import ModifierState, is_command_key_platform
from devconsole.scroll import ScrollWindow

logger = logging.getLogger(__name__)

CommandListener = Callable[[str, list[str]], None]

DEFAULT_PAGE_SIZE = 20


class DevConsole:
    """Scrollback viewer, command line and key handling in one object."""

    def __init__(
        self,
        settings: ConsoleSettings | None = None,
        *,
        log: MessageLog | None = None,
        registry: CommandRegistry | None = None,
        clipboard: Clipboard | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        builtins: bool = True,
    ) -> None:
        self.settings = settings or ConsoleSettings()
        self.log = log if log is not None else MessageLog()
        self.registry = registry if registry is not None else CommandRegistry()
        self.clipboard: Clipboard = clipboard if clipboard is not None else SystemClipboard()
        self.output = ConsoleOutput(self.log)

        command_key = self.settings.command_key
        if command_key is None:
            command_key = is_command_key_platform()

        self.log_level = self.settings.log_level
        self.command_line = CommandLine(self.settings.prompt)
        self.modifiers = ModifierState(command_key=command_key)
        self.keybindings = ConsoleKeybindingsManager(
            self.settings.keybinding_config(), command_key=command_key
        )
        self.scroll = ScrollWindow(page_size)
        self.completer = AutocompleteEngine(self.registry)

        self._listeners: list[CommandListener] = [self.run_command]

        self.dispatcher = KeyDispatcher(
            log=self.log,
            output=self.output,
            scroll=self.scroll,
            command_line=self.command_line,
            modifiers=self.modifiers,
            completer=self.completer,
            clipboard=self.clipboard,
            keybindings=self.keybindings,
            threshold=lambda: self.threshold,
            on_submit=self.dispatch_command,
        )

        if builtins:
            register_builtin_commands(self)

    # -- state ----------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.dispatcher.is_open

    @property
    def key_repeat_enabled(self) -> bool:
        return self.dispatcher.is_open

    @property
    def text_input_enabled(self) -> bool:
        return self.dispatcher.text_input_enabled

    @property
    def threshold(self) -> int:
        return level_number(self.log_level)

    def toggle(self) -> None:
        self.dispatcher.toggle()

    def filtered_messages(self) -> list[Message]:
        return self.log.filtered(self.threshold)

    def visible_messages(self) -> list[Message]:
        """Exactly ``page_size`` messages for the next frame."""
        return self.scroll.visible_slice(self.filtered_messages())

    # -- inbound events -------------------------------------------------------

    def on_key_down(self, key: str) -> bool:
        return self.dispatcher.key_down(key)

    def on_key_up(self, key: str) -> None:
        self.dispatcher.key_up(key)

    def on_text_input(self, text: str) -> bool:
        return self.dispatcher.text_input(text)

    def on_frame_resize(self, available_height: float) -> int:
        return self.scroll.resize_for_height(
            available_height, self.settings.line_height, self.settings.bottom_padding
        )

    def on_mouse_pressed(self) -> bool:
        """Swallow clicks while open so they don't reach the host UI."""
        return self.is_open

    def on_mouse_released(self) -> bool:
        return self.is_open

    # -- commands -------------------------------------------------------------

    def register_command(
        self,
        name: str,
        handler: CommandHandler,
        description: str | None = None,
        autocomplete: ArgumentCompleter | None = None,
        usage: str | None = None,
    ) -> CommandSpec:
        """Register a command. Raises ``DuplicateCommand`` if *name* is taken."""
        return self.registry.register(
            CommandSpec(
                name=name,
                handler=handler,
                description=description,
                autocomplete=autocomplete or no_completions,
                usage=usage,
            )
        )

    def on_command(self, listener: CommandListener) -> Callable[[], None]:
        """Subscribe to submitted commands. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch_command(self, name: str, args: Sequence[str]) -> None:
        """Broadcast a submitted command to every listener.

        Listener failures are reported in the scrollback; the remaining
        listeners still run.
        """
        for listener in list(self._listeners):
            try:
                listener(name, list(args))
            except Exception as e:
                logger.exception("Command listener failed for %r", name)
                self.output.error(f"Command listener failed: {e}")

    def execute(self, name: str, args: Sequence[str]) -> None:
        """Run a registered command, raising its errors to the caller."""
        spec = self.registry.lookup(name)
        if spec is None:
            raise UnknownCommand(name)
        spec.handler(list(args))

    def run_command(self, name: str, args: Sequence[str]) -> None:
        """Run a command and report any failure as a scrollback line."""
        try:
            self.execute(name, args)
        except MissingArguments as e:
            self.output.warn(e.usage)
        except ConsoleError as e:
            self.output.error(str(e))
        except Exception as e:
            logger.exception("Command %r failed", name)
            self.output.error(f"Command {name} failed: {e}")
