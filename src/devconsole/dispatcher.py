"""Key event state machine: turns raw key events into console actions.

While the console is closed only the toggle key is consumed; modifier
keys are still tracked so chorded toggle bindings can match. While open
every key is consumed and resolved against the keybindings in a fixed
precedence order, first match wins:

1. toggle / close
2. copy all filtered messages (primary+shift+c)
3. copy the command buffer (primary+c)
4. paste into the command buffer (primary+v)
5. clear the line
6. scroll navigation
7. tab completion
8. modifier keys (also re-evaluates raw text capture)
9. backspace
10. submit
11. anything else: left to the text-input channel
"""

from __future__ import annotations

import logging
from typing import Callable

from devconsole.autocomplete import AutocompleteEngine
from devconsole.clipboard import Clipboard
from devconsole.command_line import CommandLine
from devconsole.keybindings import ConsoleAction, ConsoleKeybindingsManager
from devconsole.messages import ConsoleOutput, Message, MessageLog
from devconsole.modifiers import ModifierState
from devconsole.scroll import ScrollWindow

logger = logging.getLogger(__name__)

SubmitCallback = Callable[[str, list[str]], None]

_NAVIGATION: list[tuple[ConsoleAction, str]] = [
    ("scrollBottom", "to_bottom"),
    ("scrollTop", "to_top"),
    ("pageDown", "page_down"),
    ("pageUp", "page_up"),
    ("lineUp", "line_up"),
    ("lineDown", "line_down"),
]


class KeyDispatcher:
    """Routes key-down, key-up and text events to the console components."""

    def __init__(
        self,
        *,
        log: MessageLog,
        output: ConsoleOutput,
        scroll: ScrollWindow,
        command_line: CommandLine,
        modifiers: ModifierState,
        completer: AutocompleteEngine,
        clipboard: Clipboard,
        keybindings: ConsoleKeybindingsManager,
        threshold: Callable[[], int],
        on_submit: SubmitCallback,
    ) -> None:
        self._log = log
        self._output = output
        self._scroll = scroll
        self._command_line = command_line
        self._modifiers = modifiers
        self._completer = completer
        self._clipboard = clipboard
        self._keybindings = keybindings
        self._threshold = threshold
        self._on_submit = on_submit

        self.is_open: bool = False
        self.text_input_enabled: bool = False

    # -- state ----------------------------------------------------------------

    def filtered(self) -> list[Message]:
        return self._log.filtered(self._threshold())

    def toggle(self) -> None:
        self.is_open = not self.is_open
        if self.is_open:
            self._modifiers.release_all()
            self._scroll.offset = self._scroll.page_size - 1
            self._scroll.clamp(len(self.filtered()))
        self._update_text_capture()
        logger.debug("Console %s", "opened" if self.is_open else "closed")

    def _update_text_capture(self) -> None:
        self.text_input_enabled = self.is_open and not self._modifiers.suppresses_text_input()

    # -- inbound events -------------------------------------------------------

    def key_down(self, key: str) -> bool:
        """Handle a key press. Returns True when the key was consumed."""
        if not self.is_open:
            # Modifiers pass through to the host.
            if self._modifiers.press(key):
                return False
            if self._keybindings.matches(key, self._modifiers, "toggle"):
                self.toggle()
                return True
            return False

        try:
            self._dispatch(key)
        except Exception as e:
            logger.exception("Error handling key %r", key)
            self._output.error(f"Error handling key {key}: {e}")
        return True

    def key_up(self, key: str) -> None:
        if self._modifiers.release(key):
            logger.debug("modifiers %s", self._modifiers.held_names())
            self._update_text_capture()

    def text_input(self, text: str) -> bool:
        """Append typed text when capture is enabled. Returns True if accepted."""
        if not self.text_input_enabled:
            return False
        self._command_line.append_text(text)
        return True

    # -- dispatch -------------------------------------------------------------

    def _matches(self, key: str, action: ConsoleAction) -> bool:
        return self._keybindings.matches(key, self._modifiers, action)

    def _dispatch(self, key: str) -> None:  # noqa: C901
        if self._matches(key, "toggle") or self._matches(key, "close"):
            self.toggle()
            return

        if self._matches(key, "copyAll"):
            text = "\n".join(m.formatted() for m in self.filtered())
            self._write_clipboard(text)
            return

        if self._matches(key, "copyCommand"):
            if self._command_line.buffer:
                self._write_clipboard(self._command_line.buffer)
            return

        if self._matches(key, "paste"):
            self._paste()
            return

        if self._matches(key, "clearLine"):
            self._command_line.clear()
            return

        for action, method in _NAVIGATION:
            if self._matches(key, action):
                getattr(self._scroll, method)(len(self.filtered()))
                return

        if self._matches(key, "complete"):
            self._completer.apply(self._command_line)
            return

        if self._modifiers.press(key):
            logger.debug("modifiers %s", self._modifiers.held_names())
            self._update_text_capture()
            return

        if self._matches(key, "deleteCharBackward"):
            self._command_line.backspace()
            return

        if self._matches(key, "submit"):
            self._submit()
            return

    def _submit(self) -> None:
        name, args = self._command_line.split_command()
        self._output.print(self._command_line.full_text())
        try:
            if name is not None:
                self._on_submit(name, args)
        finally:
            self._command_line.clear()

    # -- clipboard ------------------------------------------------------------

    def _write_clipboard(self, text: str) -> None:
        try:
            self._clipboard.write(text)
        except Exception as e:
            logger.debug("Clipboard write failed", exc_info=True)
            self._output.error(f"Clipboard error: {e}")

    def _paste(self) -> None:
        try:
            text = self._clipboard.read()
        except Exception as e:
            logger.debug("Clipboard read failed", exc_info=True)
            self._output.error(f"Clipboard error: {e}")
            return
        clean_text = text.replace("\r\n", "").replace("\r", "").replace("\n", "")
        self._command_line.append_text(clean_text)
