"""Loading of the user configuration file."""

from __future__ import annotations

import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path


class ConfigError(Exception):
    """Raised when the configuration cannot be located, read or parsed."""


@dataclass
class GeneralConfig:
    """General settings.

    ``initial_view`` names the view shown on start-up; the known values are
    ``compose``, ``docker`` and ``projects``.
    """

    initial_view: str = "docker"


@dataclass
class Config:
    """The application configuration."""

    general: GeneralConfig = field(default_factory=GeneralConfig)


def default_config() -> Config:
    """Return the default configuration."""
    return Config()


def _user_config_dir() -> Path:
    if sys.platform == "win32":
        appdata = os.environ.get("AppData", "")
        if not appdata:
            raise ConfigError("failed to get user config directory: %AppData% is not defined")
        return Path(appdata)
    home = os.environ.get("HOME", "")
    if sys.platform == "darwin":
        if not home:
            raise ConfigError("failed to get user config directory: $HOME is not defined")
        return Path(home) / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg)
    if not home:
        raise ConfigError(
            "failed to get user config directory: neither $XDG_CONFIG_HOME nor $HOME are defined"
        )
    return Path(home) / ".config"


def config_path() -> Path:
    """Return the path of the configuration file."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else _user_config_dir()
    return base / "dcv" / "config.toml"


def _apply(cfg: Config, data: dict, path: Path) -> None:
    general = data.get("general")
    if general is None:
        return
    if not isinstance(general, dict):
        raise ConfigError(f"failed to parse config file {path}: 'general' must be a table")
    if "initial_view" in general:
        value = general["initial_view"]
        if not isinstance(value, str):
            raise ConfigError(
                f"failed to parse config file {path}: 'general.initial_view' must be a string"
            )
        cfg.general.initial_view = value


def load() -> Config:
    """Load the configuration file, falling back to defaults when it does not exist."""
    path = config_path()
    cfg = default_config()

    try:
        path.stat()
    except FileNotFoundError:
        return cfg
    except OSError as exc:
        raise ConfigError(f"failed to stat config file: {exc}") from exc

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"failed to read config file {path}: {exc}") from exc

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to parse config file {path}: {exc}") from exc

    _apply(cfg, data, path)
    return cfg