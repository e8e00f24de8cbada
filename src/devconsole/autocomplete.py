"""Tab completion for command names and command arguments.

Completion is stateless: the result depends only on the registry contents
and the current buffer. One candidate replaces the trailing token verbatim;
several candidates are narrowed to their longest common prefix.
"""

from __future__ import annotations

import logging
from typing import Sequence

from devconsole.command_line import CommandLine
from devconsole.commands import CommandRegistry

logger = logging.getLogger(__name__)


def longest_common_prefix(strings: Sequence[str]) -> str:
    """Longest string that prefixes every item; ``""`` for no items."""
    if not strings:
        return ""
    prefix = strings[0]
    for candidate in strings[1:]:
        j = 0
        while j < len(prefix) and j < len(candidate) and prefix[j] == candidate[j]:
            j += 1
        prefix = prefix[:j]
    return prefix


class AutocompleteEngine:
    """Produces completions for a ``CommandLine`` from a ``CommandRegistry``."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry

    def candidates(self, line: CommandLine) -> list[str]:
        """All candidates for the trailing token of *line*."""
        name, args = line.split_command()
        if name is None:
            return []
        if not args:
            return self._registry.names_with_prefix(name)
        spec = self._registry.lookup(name)
        if spec is None:
            return []
        return spec.complete(args[-1])

    def complete(self, line: CommandLine) -> str | None:
        """The text that should replace the trailing token, or None."""
        if line.ends_with_whitespace():
            return None
        matches = self.candidates(line)
        logger.debug("Autocomplete matches: %d %s", len(matches), ", ".join(matches))
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0]
        return longest_common_prefix(matches)

    def apply(self, line: CommandLine) -> bool:
        """Rewrite the trailing token of *line* in place. Returns True on change."""
        completion = self.complete(line)
        if completion is None:
            return False
        before = line.buffer
        line.replace_last_token(completion)
        return line.buffer != before
