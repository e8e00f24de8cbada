"""Single-line command buffer behind a fixed prompt."""

from __future__ import annotations

import re

DEFAULT_PROMPT = "> "

_LAST_TOKEN_RE = re.compile(r"\S+$")


class CommandLine:
    """The in-progress command.

    ``buffer`` holds only what the user typed; the prompt is never edited.
    Python strings are sequences of code points, so every edit works on
    whole characters and can never leave half of an encoded character behind.
    """

    def __init__(self, prompt: str = DEFAULT_PROMPT, buffer: str = "") -> None:
        self.prompt = prompt
        self.buffer = buffer

    def append_text(self, text: str) -> None:
        self.buffer += text

    def backspace(self) -> None:
        """Remove the last character; no-op on an empty buffer."""
        if self.buffer:
            self.buffer = self.buffer[:-1]

    def clear(self) -> None:
        self.buffer = ""

    def full_text(self) -> str:
        return self.prompt + self.buffer

    def split_command(self) -> tuple[str | None, list[str]]:
        """Split on whitespace runs into ``(name, args)``.

        An empty or blank buffer yields ``(None, [])``.
        """
        tokens = self.buffer.split()
        if not tokens:
            return None, []
        return tokens[0], tokens[1:]

    def ends_with_whitespace(self) -> bool:
        return bool(self.buffer) and self.buffer[-1].isspace()

    def last_token(self) -> str | None:
        """The trailing whitespace-delimited token, or None if there is none."""
        match = _LAST_TOKEN_RE.search(self.buffer)
        return match.group(0) if match else None

    def replace_last_token(self, replacement: str) -> bool:
        """Swap the trailing token for *replacement*, keeping everything before it."""
        token = self.last_token()
        if token is None:
            return False
        self.buffer = self.buffer[: len(self.buffer) - len(token)] + replacement
        return True

    def __str__(self) -> str:
        return self.full_text()
