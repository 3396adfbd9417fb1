"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    NotifierSettings,
    RuntimeSettings,
    UIServerSettings,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_ALLOWED_NOTIFIER_BACKENDS = {"ui", "desktop"}
_ALLOWED_URGENCIES = {"low", "normal", "critical"}
_DURATION_FIELDS = ("focus_duration", "break_duration", "focus_minutes", "break_minutes")


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    runtime = _parse_runtime_settings(_section(raw, "runtime"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)
    notifier = _parse_notifier_settings(_section(raw, "notifier"))

    return AppConfig(
        runtime=runtime,
        ui_server=ui_server,
        notifier=notifier,
        source_file=source_file,
    )


def _parse_runtime_settings(section: Mapping[str, Any]) -> RuntimeSettings:
    _forbid_fields(
        section,
        "runtime",
        _DURATION_FIELDS,
        "Phase durations are fixed and cannot be configured",
    )
    log_level = _as_str(section.get("log_level", "INFO"), "runtime.log_level").upper()
    if log_level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"runtime.log_level must be one of: {allowed}.")

    poll_interval = _as_float(
        section.get("poll_interval_seconds", 0.25),
        "runtime.poll_interval_seconds",
    )
    if not 0.0 < poll_interval <= 1.0:
        raise AppConfigurationError(
            "runtime.poll_interval_seconds must be in (0, 1]."
        )

    return RuntimeSettings(
        log_level=log_level,
        autostart=_as_bool(section.get("autostart", False), "runtime.autostart"),
        poll_interval_seconds=poll_interval,
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _parse_notifier_settings(section: Mapping[str, Any]) -> NotifierSettings:
    backend = _as_choice(
        section.get("backend", "ui"),
        "notifier.backend",
        _ALLOWED_NOTIFIER_BACKENDS,
    )
    urgency = _as_choice(
        section.get("urgency", "normal"),
        "notifier.urgency",
        _ALLOWED_URGENCIES,
    )
    app_name = _as_str(section.get("app_name", "Pomodoro"), "notifier.app_name")
    return NotifierSettings(
        enabled=_as_bool(section.get("enabled", True), "notifier.enabled"),
        backend=backend,
        app_name=app_name or "Pomodoro",
        urgency=urgency,
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _as_choice(value: Any, field: str, allowed: set[str]) -> str:
    name = _as_str(value, field).lower()
    if name not in allowed:
        joined = ", ".join(sorted(allowed))
        raise AppConfigurationError(f"{field} must be one of: {joined}.")
    return name


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _forbid_fields(
    section: Mapping[str, Any],
    section_name: str,
    fields: tuple[str, ...],
    reason: str,
) -> None:
    present = [field for field in fields if field in section]
    if present:
        joined = ", ".join(f"{section_name}.{field}" for field in present)
        raise AppConfigurationError(f"{reason}: {joined}.")
