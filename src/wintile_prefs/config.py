from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

ENV_SETTINGS = "WINTILE_PREFS_SETTINGS"
ENV_HOST = "WINTILE_PREFS_HOST"
ENV_PORT = "WINTILE_PREFS_PORT"
ENV_LOG_LEVEL = "WINTILE_PREFS_LOG_LEVEL"
ENV_LOCALEDIR = "WINTILE_PREFS_LOCALEDIR"


def default_settings_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    config_home = env.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "wintile" / "settings.yaml"


@dataclass
class AppConfig:
    settings_path: Path = field(default_factory=default_settings_path)
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    localedir: Path | None = None

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def _parse_port(value: Any, *, field_name: str) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"{field_name} must be between 1 and 65535, got {port}")
    return port


def _parse_log_level(value: Any, *, field_name: str) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{field_name} must be a logging level name, got {value!r}")
    return level


def _build_app_config(data: dict[str, Any]) -> AppConfig:
    config = AppConfig()
    if data.get("settings_path"):
        config.settings_path = Path(str(data["settings_path"])).expanduser()
    if data.get("host"):
        config.host = str(data["host"])
    if data.get("port") is not None:
        config.port = _parse_port(data["port"], field_name="port")
    if data.get("log_level"):
        config.log_level = _parse_log_level(data["log_level"], field_name="log_level")
    if data.get("localedir"):
        config.localedir = Path(str(data["localedir"])).expanduser()
    return config


def load_app_config(path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Load the application configuration.

    Values come from the optional YAML file first, then from environment
    variables, which take precedence.
    """
    env = os.environ if env is None else env
    data: dict[str, Any] = {"settings_path": default_settings_path(env)}

    if path is not None:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        data.update({key: value for key, value in loaded.items() if value is not None})

    overrides = {
        "settings_path": env.get(ENV_SETTINGS),
        "host": env.get(ENV_HOST),
        "port": env.get(ENV_PORT),
        "log_level": env.get(ENV_LOG_LEVEL),
        "localedir": env.get(ENV_LOCALEDIR),
    }
    data.update({key: value for key, value in overrides.items() if value})
    return _build_app_config(data)
