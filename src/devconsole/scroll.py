"""Clamped scroll window over the filtered scrollback."""

from __future__ import annotations

from typing import Sequence

from devconsole.messages import Message, blank_message


class ScrollWindow:
    """Tracks which slice of the filtered log is on screen.

    ``offset`` counts from the newest entry: the walk that builds the visible
    slice starts at the 1-based logical index ``count - 1 + offset``, so any
    offset of 1 or more shows the newest lines and smaller offsets scroll
    back in time. After every operation the offset lies in
    ``[page_size - count, page_size]`` for the current filtered ``count``.
    """

    def __init__(self, page_size: int = 1, offset: int | None = None) -> None:
        self.page_size = max(1, page_size)
        self.offset = self.page_size if offset is None else offset

    # -- sizing ---------------------------------------------------------------

    def set_page_size(self, page_size: int) -> None:
        """Change the page size without moving the offset.

        The clamp is reapplied by the next navigation or read.
        """
        self.page_size = max(1, page_size)

    def resize_for_height(
        self, available_height: float, line_height: float, padding: int
    ) -> int:
        self.set_page_size(int(available_height // line_height) - padding)
        return self.page_size

    # -- clamp ----------------------------------------------------------------

    def bounds(self, count: int) -> tuple[int, int]:
        return self.page_size - count, self.page_size

    def clamp(self, count: int) -> int:
        low, high = self.bounds(count)
        self.offset = max(low, min(self.offset, high))
        return self.offset

    # -- navigation -----------------------------------------------------------

    def to_bottom(self, count: int) -> None:
        self.offset = self.page_size
        self.clamp(count)

    def to_top(self, count: int) -> None:
        self.offset = self.page_size - count
        self.clamp(count)

    def page_down(self, count: int) -> None:
        self.offset = min(self.offset + self.page_size, self.page_size)
        self.clamp(count)

    def page_up(self, count: int) -> None:
        self.offset = max(self.offset - self.page_size, self.page_size - count)
        self.clamp(count)

    def line_down(self, count: int) -> None:
        self.offset = min(self.offset + 1, self.page_size)
        self.clamp(count)

    def line_up(self, count: int) -> None:
        # Stop one short of the top bound so the oldest line stays on screen.
        self.offset = max(self.offset - 1, self.page_size - count + 1)
        self.clamp(count)

    # -- reading --------------------------------------------------------------

    def visible_slice(self, filtered: Sequence[Message]) -> list[Message]:
        """Exactly ``page_size`` messages, oldest first, blank-padded at the front."""
        count = len(filtered)
        self.clamp(count)

        collected: list[Message] = []
        # Indices past the newest entry are skipped, not collected.
        index = min(count - 1 + self.offset, count)
        while len(collected) < self.page_size and index >= 1:
            collected.append(filtered[index - 1])
            index -= 1

        collected.reverse()
        padding = [blank_message() for _ in range(self.page_size - len(collected))]
        return padding + collected
