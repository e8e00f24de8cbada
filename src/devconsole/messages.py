"""Leveled scrollback messages and the append-only log that stores them.

The console keeps every line it shows in a ``MessageLog``. Lines come from
two places: the console's own output (command echo, errors, help text)
written through ``ConsoleOutput``, and host logging routed in through
``MessageLogHandler``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Literal, Protocol

# ---------------------------------------------------------------------------
# Levels
# ---------------------------------------------------------------------------

LevelTag = Literal["PRINT", "TRACE", "DEBUG", "INFO", "WARN", "ERROR"]

LEVELS: dict[str, int] = {
    "TRACE": 5,
    "DEBUG": 10,
    "INFO": 20,
    "WARN": 30,
    "ERROR": 40,
    "PRINT": 1000,
}

RGB = tuple[float, float, float]

WHITE: RGB = (1.0, 1.0, 1.0)

LEVEL_COLORS: dict[str, RGB] = {
    "PRINT": WHITE,
    "TRACE": WHITE,
    "INFO": (0.0, 0.9, 1.0),
    "WARN": (1.0, 0.5, 0.0),
    "ERROR": (1.0, 0.0, 0.0),
    "DEBUG": (0.16, 0.0, 1.0),
}

DEFAULT_LEVEL = "INFO"


def level_number(level: str) -> int:
    """Numeric threshold for a level name; unknown names map to INFO."""
    return LEVELS.get(level.upper(), LEVELS[DEFAULT_LEVEL])


def level_color(level: str) -> RGB:
    return LEVEL_COLORS.get(level, WHITE)


def level_for_record(levelno: int) -> LevelTag:
    """Map a stdlib ``logging`` level number onto a console level."""
    if levelno < logging.DEBUG:
        return "TRACE"
    if levelno < logging.INFO:
        return "DEBUG"
    if levelno < logging.WARNING:
        return "INFO"
    if levelno < logging.ERROR:
        return "WARN"
    return "ERROR"


# ---------------------------------------------------------------------------
# Message
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Message:
    """A single scrollback entry."""

    text: str
    level: str = "PRINT"
    level_numeric: int = LEVELS["PRINT"]
    source_name: str = ""
    timestamp: float = 0.0

    @classmethod
    def create(
        cls,
        text: str,
        level: LevelTag = "PRINT",
        source_name: str = "",
        timestamp: float | None = None,
    ) -> Message:
        return cls(
            text=text,
            level=level,
            level_numeric=level_number(level),
            source_name=source_name,
            timestamp=time.time() if timestamp is None else timestamp,
        )

    @property
    def color(self) -> RGB:
        return level_color(self.level)

    def formatted(self) -> str:
        """Render the message as one display line.

        PRINT lines are shown verbatim; everything else is prefixed with the
        local time, the level and the source.
        """
        if self.level == "PRINT":
            return self.text
        clock = datetime.fromtimestamp(self.timestamp).strftime("%H:%M:%S")
        source = f" {self.source_name}:" if self.source_name else ""
        return f"{clock} [{self.level}]{source} {self.text}"


def blank_message() -> Message:
    """Placeholder used to pad the visible window."""
    return Message(text="", level="PRINT", level_numeric=LEVELS["PRINT"])


# ---------------------------------------------------------------------------
# Log store
# ---------------------------------------------------------------------------


class LogSink(Protocol):
    """Anything that accepts finished messages."""

    def append(self, message: Message) -> None: ...


class MessageLog:
    """Append-only, insertion-ordered message store (oldest first)."""

    def __init__(self, messages: list[Message] | None = None) -> None:
        self._messages: list[Message] = list(messages or [])

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def filtered(self, threshold: int) -> list[Message]:
        """All messages whose level passes *threshold*, in original order.

        Returns a fresh list so later appends never disturb a caller's view.
        """
        return [m for m in self._messages if m.level_numeric >= threshold]

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


class ConsoleOutput:
    """Leveled writer the console and its commands use for scrollback lines."""

    def __init__(self, sink: LogSink, source_name: str = "dev_console") -> None:
        self._sink = sink
        self.source_name = source_name

    def write(self, level: LevelTag, text: str) -> None:
        self._sink.append(Message.create(text, level, self.source_name))

    def print(self, text: str) -> None:
        self.write("PRINT", text)

    def trace(self, text: str) -> None:
        self.write("TRACE", text)

    def debug(self, text: str) -> None:
        self.write("DEBUG", text)

    def info(self, text: str) -> None:
        self.write("INFO", text)

    def warn(self, text: str) -> None:
        self.write("WARN", text)

    def error(self, text: str) -> None:
        self.write("ERROR", text)


class MessageLogHandler(logging.Handler):
    """``logging.Handler`` that feeds records into a console log.

    Attach it to any logger (or the root logger) so host output shows up in
    the scrollback::

        logging.getLogger().addHandler(MessageLogHandler(console.log))
    """

    def __init__(self, sink: LogSink, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record) if self.formatter else record.getMessage()
            level = level_for_record(record.levelno)
            self._sink.append(
                Message(
                    text=text,
                    level=level,
                    level_numeric=LEVELS[level],
                    source_name=record.name,
                    timestamp=record.created,
                )
            )
        except Exception:
            self.handleError(record)
