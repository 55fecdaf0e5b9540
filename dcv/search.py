"""State of the incremental search input line."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

_CURSOR_STYLE = "\x1b[38;5;235;48;5;226m"
_RESET = "\x1b[0m"


def _with_cursor(text: str, pos: int) -> str:
    cursor = text[pos] if pos < len(text) else " "
    return text[:pos] + _CURSOR_STYLE + cursor + _RESET + text[pos + 1 :]


@dataclass
class SearchState:
    """The search text being edited, its options and its matches."""

    mode: bool = False
    text: str = ""
    ignore_case: bool = False
    regex: bool = False
    results: list[int] = field(default_factory=list)
    current_idx: int = 0
    cursor_pos: int = 0

    def render(self) -> str:
        """The search prompt with the cursor highlighted."""
        return "/" + _with_cursor(self.text, self.cursor_pos)

    def clear(self) -> None:
        """Start a fresh search."""
        self.mode = True
        self.text = ""
        self.cursor_pos = 0
        self.results = []
        self.current_idx = 0

    def perform_search(self, lines: Sequence[str], height: int) -> int | None:
        """Find matching line indices; return the scroll position of the current match."""
        self.results = []
        if not self.text:
            return None

        if self.regex:
            try:
                pattern = re.compile(self.text, re.IGNORECASE if self.ignore_case else 0)
            except re.error:
                return None
            self.results = [i for i, line in enumerate(lines) if pattern.search(line)]
        elif self.ignore_case:
            needle = self.text.lower()
            self.results = [i for i, line in enumerate(lines) if needle in line.lower()]
        else:
            self.results = [i for i, line in enumerate(lines) if self.text in line]

        if self.results and self.current_idx < len(self.results):
            target = self.results[self.current_idx]
            return max(target - height // 2 + 3, 0)
        return None

    def input_escape(self) -> None:
        """Leave search mode and forget the search."""
        self.mode = False
        self.text = ""
        self.results = []
        self.current_idx = 0
        self.cursor_pos = 0

    def delete_last_char(self) -> bool:
        """Delete the character before the cursor; report whether anything changed."""
        if self.cursor_pos > 0 and self.text:
            self.text = self.text[: self.cursor_pos - 1] + self.text[self.cursor_pos :]
            self.cursor_pos -= 1
            return True
        return False

    def cursor_left(self) -> None:
        if self.cursor_pos > 0:
            self.cursor_pos -= 1

    def cursor_right(self) -> None:
        if self.cursor_pos < len(self.text):
            self.cursor_pos += 1

    def toggle_ignore_case(self) -> None:
        self.ignore_case = not self.ignore_case

    def toggle_regex(self) -> None:
        self.regex = not self.regex

    def append(self, text: str) -> None:
        """Insert *text* at the cursor."""
        self.text = self.text[: self.cursor_pos] + text + self.text[self.cursor_pos :]
        self.cursor_pos += len(text)