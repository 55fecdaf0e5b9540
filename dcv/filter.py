"""State of the log filter input line."""

from __future__ import annotations

from dataclasses import dataclass

from dcv.keys import KeyEvent, KeyType

_CURSOR_STYLE = "\x1b[38;5;235;48;5;226m"
_RESET = "\x1b[0m"


def _with_cursor(text: str, pos: int) -> str:
    cursor = text[pos] if pos < len(text) else " "
    return text[:pos] + _CURSOR_STYLE + cursor + _RESET + text[pos + 1 :]


@dataclass
class FilterState:
    """The filter text being edited and the log lines it selected."""

    mode: bool = False
    text: str = ""
    cursor_pos: int = 0
    filtered_logs: list[str] | None = None

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

    def append(self, text: str) -> None:
        """Insert *text* at the cursor."""
        self.text = self.text[: self.cursor_pos] + text + self.text[self.cursor_pos :]
        self.cursor_pos += len(text)

    def render(self) -> str:
        """The filter prompt with the cursor highlighted."""
        return "Filter: " + _with_cursor(self.text, self.cursor_pos) + " (ESC to clear)"

    def handle_key(self, key: KeyEvent) -> bool:
        """Apply a key press; return True when the filter should be re-run."""
        match key.type:
            case KeyType.ESC:
                self.clear()
            case KeyType.ENTER:
                self.mode = False
                return True
            case KeyType.BACKSPACE | KeyType.CTRL_H:
                self.delete_last_char()
            case KeyType.LEFT | KeyType.CTRL_F:
                self.cursor_left()
            case KeyType.RIGHT | KeyType.CTRL_B:
                self.cursor_right()
            case KeyType.RUNES:
                self.append(key.text)
                return True
        return False

    def clear(self) -> None:
        """Leave filter mode and forget the filter."""
        self.mode = False
        self.text = ""
        self.filtered_logs = None
        self.cursor_pos = 0