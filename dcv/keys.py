"""Key events and key-binding tables."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Self


class KeyType(Enum):
    """The kind of a key press; the value is its name as used in key maps."""

    RUNES = "runes"
    SPACE = " "
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    CTRL_I = "tab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    CTRL_B = "ctrl+b"
    CTRL_C = "ctrl+c"
    CTRL_F = "ctrl+f"
    CTRL_H = "ctrl+h"
    CTRL_N = "ctrl+n"
    CTRL_P = "ctrl+p"
    CTRL_R = "ctrl+r"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press; ``text`` holds the characters of a RUNES press."""

    type: KeyType
    text: str = ""

    @classmethod
    def runes(cls, text: str) -> Self:
        """A press of ordinary characters."""
        return cls(KeyType.RUNES, text)

    def __str__(self) -> str:
        if self.type is KeyType.RUNES:
            return self.text
        return self.type.value


KeyHandler = Callable[[KeyEvent], Any]


@dataclass(frozen=True)
class KeyConfig:
    """A binding of one or more keys to a handler."""

    keys: Sequence[str]
    description: str
    handler: KeyHandler


def build_keymap(configs: Iterable[KeyConfig]) -> dict[str, KeyHandler]:
    """Map every key of every binding to its handler; later bindings win."""
    return {key: config.handler for config in configs for key in config.keys}