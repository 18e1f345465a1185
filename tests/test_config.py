from __future__ import annotations

import logging
from pathlib import Path

import pytest

from wintile_prefs.config import AppConfig, default_settings_path, load_app_config


def test_default_settings_path_uses_xdg_config_home(tmp_path: Path) -> None:
    env = {"XDG_CONFIG_HOME": str(tmp_path)}
    assert default_settings_path(env) == tmp_path / "wintile" / "settings.yaml"


def test_default_settings_path_falls_back_to_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    assert default_settings_path({}) == tmp_path / ".config" / "wintile" / "settings.yaml"


def test_load_defaults_without_file(tmp_path: Path) -> None:
    config = load_app_config(env={"XDG_CONFIG_HOME": str(tmp_path)})
    assert config.settings_path == tmp_path / "wintile" / "settings.yaml"
    assert config.host == "127.0.0.1"
    assert config.port == 8080
    assert config.log_level == "INFO"
    assert config.log_level_number == logging.INFO


def test_load_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "prefs.yaml"
    config_path.write_text(
        f"settings_path: {tmp_path / 'custom.yaml'}\nhost: 0.0.0.0\nport: 9000\nlog_level: debug\n",
        encoding="utf-8",
    )
    config = load_app_config(config_path, env={})
    assert config.settings_path == tmp_path / "custom.yaml"
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.log_level == "DEBUG"


def test_environment_overrides_file(tmp_path: Path) -> None:
    config_path = tmp_path / "prefs.yaml"
    config_path.write_text("port: 9000\n", encoding="utf-8")
    env = {
        "WINTILE_PREFS_PORT": "9100",
        "WINTILE_PREFS_SETTINGS": str(tmp_path / "env.yaml"),
        "WINTILE_PREFS_LOG_LEVEL": "warning",
        "WINTILE_PREFS_LOCALEDIR": str(tmp_path / "locale"),
    }
    config = load_app_config(config_path, env=env)
    assert config.port == 9100
    assert config.settings_path == tmp_path / "env.yaml"
    assert config.log_level == "WARNING"
    assert config.localedir == tmp_path / "locale"


@pytest.mark.parametrize("port", ["abc", "0", "70000"])
def test_invalid_port(port: str) -> None:
    with pytest.raises(ValueError, match="port"):
        load_app_config(env={"WINTILE_PREFS_PORT": port})


def test_invalid_log_level() -> None:
    with pytest.raises(ValueError, match="log_level"):
        load_app_config(env={"WINTILE_PREFS_LOG_LEVEL": "chatty"})


def test_non_mapping_config_file(tmp_path: Path) -> None:
    config_path = tmp_path / "prefs.yaml"
    config_path.write_text("- a\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_app_config(config_path, env={})


def test_app_config_defaults() -> None:
    assert AppConfig().localedir is None
