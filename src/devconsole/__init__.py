"""dev-console: embeddable scrollback log viewer and command console."""

# Autocomplete
from devconsole.autocomplete import AutocompleteEngine, longest_common_prefix

# Built-in commands
from devconsole.builtins import make_adjust_command, register_builtin_commands

# Clipboard
from devconsole.clipboard import (
    Clipboard,
    ClipboardUnavailableError,
    MemoryClipboard,
    SystemClipboard,
)

# Command line and registry
from devconsole.command_line import CommandLine
from devconsole.commands import CommandRegistry, CommandSpec

# Settings
from devconsole.config import ConsoleSettings, load_settings

# Console facade
from devconsole.console import DevConsole

# Key handling
from devconsole.dispatcher import KeyDispatcher
from devconsole.errors import (
    ConsoleError,
    DuplicateCommand,
    InvalidArgument,
    MissingArguments,
    UnknownCommand,
)
from devconsole.keybindings import (
    ConsoleAction,
    ConsoleKeybindingsManager,
    default_console_keybindings,
)
from devconsole.keys import Key, KeyBinding, KeyId, matches_key, parse_key_id

# Messages
from devconsole.messages import (
    LEVEL_COLORS,
    LEVELS,
    ConsoleOutput,
    LevelTag,
    LogSink,
    Message,
    MessageLog,
    MessageLogHandler,
)
from devconsole.modifiers import ModifierState, is_command_key_platform

# Rendering
from devconsole.render import RenderFrame, build_frame, render_ansi
from devconsole.scroll import ScrollWindow

__all__ = [
    # Autocomplete
    "AutocompleteEngine",
    "longest_common_prefix",
    # Built-ins
    "make_adjust_command",
    "register_builtin_commands",
    # Clipboard
    "Clipboard",
    "ClipboardUnavailableError",
    "MemoryClipboard",
    "SystemClipboard",
    # Command line and registry
    "CommandLine",
    "CommandRegistry",
    "CommandSpec",
    # Settings
    "ConsoleSettings",
    "load_settings",
    # Console
    "DevConsole",
    # Errors
    "ConsoleError",
    "DuplicateCommand",
    "InvalidArgument",
    "MissingArguments",
    "UnknownCommand",
    # Keys
    "ConsoleAction",
    "ConsoleKeybindingsManager",
    "Key",
    "KeyBinding",
    "KeyDispatcher",
    "KeyId",
    "ModifierState",
    "default_console_keybindings",
    "is_command_key_platform",
    "matches_key",
    "parse_key_id",
    # Messages
    "LEVELS",
    "LEVEL_COLORS",
    "ConsoleOutput",
    "LevelTag",
    "LogSink",
    "Message",
    "MessageLog",
    "MessageLogHandler",
    # Rendering
    "RenderFrame",
    "ScrollWindow",
    "build_frame",
    "render_ansi",
]
