"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class RuntimeSettings:
    """Host loop and logging settings from `[runtime]`."""
    log_level: str = "INFO"
    autostart: bool = False
    poll_interval_seconds: float = 0.25


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class NotifierSettings:
    """Phase-start notification settings from `[notifier]`."""
    enabled: bool = True
    backend: str = "ui"
    app_name: str = "Pomodoro"
    urgency: str = "normal"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    runtime: RuntimeSettings
    ui_server: UIServerSettings
    notifier: NotifierSettings
    source_file: str
