"""Configuration model for phase-start notification delivery."""

from __future__ import annotations

from dataclasses import dataclass

BACKEND_UI = "ui"
BACKEND_DESKTOP = "desktop"
ALLOWED_BACKENDS: frozenset[str] = frozenset({BACKEND_UI, BACKEND_DESKTOP})
ALLOWED_URGENCIES: frozenset[str] = frozenset({"low", "normal", "critical"})


class NotifierConfigurationError(Exception):
    """Raised when notifier configuration is invalid."""


@dataclass(frozen=True)
class NotifierConfig:
    """Validated notifier settings derived from `[notifier]`."""
    enabled: bool = True
    backend: str = BACKEND_UI
    app_name: str = "Pomodoro"
    urgency: str = "normal"

    def __post_init__(self) -> None:
        if self.backend not in ALLOWED_BACKENDS:
            allowed = ", ".join(sorted(ALLOWED_BACKENDS))
            raise NotifierConfigurationError(f"NOTIFIER_BACKEND must be one of: {allowed}")
        if self.urgency not in ALLOWED_URGENCIES:
            allowed = ", ".join(sorted(ALLOWED_URGENCIES))
            raise NotifierConfigurationError(f"NOTIFIER_URGENCY must be one of: {allowed}")
        if not self.app_name.strip():
            raise NotifierConfigurationError("NOTIFIER_APP_NAME cannot be empty")

    @classmethod
    def from_settings(cls, settings) -> "NotifierConfig":
        return cls(
            enabled=bool(settings.enabled),
            backend=(settings.backend or BACKEND_UI).strip().lower(),
            app_name=settings.app_name,
            urgency=(settings.urgency or "normal").strip().lower(),
        )
