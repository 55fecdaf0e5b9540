"""Docker and Docker Compose inspection: listings, log streaming, and key and command state."""

__version__ = "0.1.0"

__all__ = [
    "client",
    "commands",
    "config",
    "container",
    "executor",
    "filter",
    "keys",
    "log_reader",
    "models",
    "parser",
    "search",
]