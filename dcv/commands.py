"""Named commands derived from key handlers, for the ``:`` command line."""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass

from dcv.keys import KeyConfig, KeyHandler


@dataclass(frozen=True)
class CommandHandler:
    """A handler reachable by name, with the description of its key binding."""

    handler: KeyHandler
    description: str


def to_kebab_case(text: str) -> str:
    """Convert CamelCase to kebab-case, putting a dash before every capital."""
    pieces = [
        "-" + ch if i > 0 and "A" <= ch <= "Z" else ch for i, ch in enumerate(text)
    ]
    return "".join(pieces).lower()


def command_name(handler: KeyHandler | None) -> str:
    """The command name of a handler: its function name without the ``cmd`` prefix."""
    if handler is None:
        return ""
    name = getattr(handler, "__name__", "")
    if not name.isidentifier():
        return ""
    if name.startswith("cmd_"):
        name = name.removeprefix("cmd_")
    else:
        name = name.removeprefix("Cmd")
    return to_kebab_case(name).replace("_", "-")


class CommandRegistry:
    """Commands available in each view, keyed by view and name."""

    def __init__(self) -> None:
        self._views: dict[Hashable, dict[str, CommandHandler]] = {}
        self._all: set[str] = set()

    def register(self, view: Hashable, configs: Iterable[KeyConfig]) -> None:
        """Replace the commands of *view* with those of its key bindings."""
        commands: dict[str, CommandHandler] = {}
        for config in configs:
            name = command_name(config.handler)
            if name:
                commands[name] = CommandHandler(config.handler, config.description)
                self._all.add(name)
        self._views[view] = commands

    def lookup(self, view: Hashable, name: str) -> CommandHandler | None:
        """The command *name* in *view*, or None when it is not available there."""
        return self._views.get(view, {}).get(name)

    def is_known(self, name: str) -> bool:
        """Whether *name* is a command in any view."""
        return name in self._all