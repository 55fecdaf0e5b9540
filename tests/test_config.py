import sys

import pytest

from dcv.config import Config, ConfigError, GeneralConfig, config_path, default_config, load


def _write_config(base, content):
    directory = base / "dcv"
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "config.toml").write_text(content, encoding="utf-8")


def test_default():
    cfg = default_config()
    assert cfg == Config(general=GeneralConfig(initial_view="docker"))
    assert cfg.general.initial_view == "docker"


def test_load_no_config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    cfg = load()
    assert cfg.general.initial_view == "docker"


def test_load_from_user_config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    _write_config(tmp_path, '[general]\ninitial_view = "projects"')
    assert load().general.initial_view == "projects"


def test_load_unknown_initial_view(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    _write_config(tmp_path, '[general]\ninitial_view = "unknown_view"')
    assert load().general.initial_view == "unknown_view"


def test_load_ignores_unknown_keys(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    _write_config(tmp_path, '[general]\ncolour = "red"\n\n[other]\nx = 1\n')
    assert load().general.initial_view == "docker"


def test_load_invalid_toml(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    _write_config(tmp_path, "[general\ninitial_view = ")
    with pytest.raises(ConfigError, match="failed to parse config file"):
        load()


def test_load_wrong_type(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    _write_config(tmp_path, "[general]\ninitial_view = 3\n")
    with pytest.raises(ConfigError):
        load()


def test_load_config_path_is_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    (tmp_path / "dcv" / "config.toml").mkdir(parents=True)
    with pytest.raises(ConfigError, match="failed to read config file"):
        load()


def test_config_path_uses_xdg(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config_path() == tmp_path / "dcv" / "config.toml"


def test_config_path_falls_back_to_home_on_linux(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config_path() == tmp_path / ".config" / "dcv" / "config.toml"


def test_config_path_without_home_fails(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("HOME", raising=False)
    with pytest.raises(ConfigError):
        config_path()