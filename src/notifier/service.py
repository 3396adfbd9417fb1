"""Notification backends that deliver phase-start events."""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading
from typing import Any, Callable, Optional, Protocol, Sequence

from contracts.ui_protocol import EVENT_NOTIFICATION
from pomodoro import PhaseStarted

from .config import BACKEND_DESKTOP, NotifierConfig
from .content import Notification, build_notification


class NotifierError(Exception):
    """Raised when a notification cannot be delivered."""


class Notifier(Protocol):
    def notify_phase_started(self, event: PhaseStarted) -> None:
        ...


class UIEventPublisher(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class NullNotifier:
    """Notifier used when delivery is disabled."""

    def notify_phase_started(self, event: PhaseStarted) -> None:
        del event


class UINotifier:
    """Forwards notifications to the web UI once the browser granted permission."""

    def __init__(
        self,
        ui: UIEventPublisher,
        logger: Optional[logging.Logger] = None,
        *,
        choice_fn: Optional[Callable[[Sequence[str]], str]] = None,
    ):
        self._ui = ui
        self._logger = logger or logging.getLogger("notifier")
        self._choice_fn = choice_fn
        self._permission_granted = False
        self._lock = threading.Lock()

    @property
    def permission_granted(self) -> bool:
        with self._lock:
            return self._permission_granted

    def set_permission(self, granted: bool) -> None:
        with self._lock:
            self._permission_granted = bool(granted)
        self._logger.info("UI notification permission: %s", "granted" if granted else "denied")

    def notify_phase_started(self, event: PhaseStarted) -> None:
        if not self.permission_granted:
            self._logger.debug(
                "Skipping UI notification without permission: phase=%s",
                event.phase.value,
            )
            return

        notification = build_notification(event, choice_fn=self._choice_fn)
        self._ui.publish(EVENT_NOTIFICATION, **notification.to_payload())


class DesktopNotifier:
    """Shows native notifications through `notify-send` when it is installed."""

    def __init__(
        self,
        config: NotifierConfig,
        logger: Optional[logging.Logger] = None,
        *,
        which_fn: Optional[Callable[[str], Optional[str]]] = None,
        run_fn: Optional[Callable[..., Any]] = None,
        choice_fn: Optional[Callable[[Sequence[str]], str]] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("notifier")
        self._which = which_fn or shutil.which
        self._run = run_fn or subprocess.run
        self._choice_fn = choice_fn

    @property
    def is_available(self) -> bool:
        return self._which("notify-send") is not None

    def notify_phase_started(self, event: PhaseStarted) -> None:
        executable = self._which("notify-send")
        if executable is None:
            self._logger.debug("notify-send not available; dropping notification")
            return

        notification = build_notification(event, choice_fn=self._choice_fn)
        command = self._build_command(executable, notification)
        try:
            self._run(command, check=True, capture_output=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as error:
            raise NotifierError(f"notify-send failed: {error}") from error

    def _build_command(self, executable: str, notification: Notification) -> list[str]:
        command = [
            executable,
            f"--app-name={self._config.app_name}",
            f"--urgency={self._config.urgency}",
            f"--hint=string:x-pomodoro-color:{notification.color_hex}",
        ]
        if notification.action is not None:
            command.append(
                f"--hint=string:x-pomodoro-action:{notification.action.signal}"
            )
        command.extend([notification.title, notification.body])
        return command


class SafeNotifier:
    """Wraps a backend so delivery failures are logged and never propagate."""

    def __init__(self, inner: Notifier, logger: Optional[logging.Logger] = None):
        self._inner = inner
        self._logger = logger or logging.getLogger("notifier")

    @property
    def inner(self) -> Notifier:
        return self._inner

    def notify_phase_started(self, event: PhaseStarted) -> None:
        try:
            self._inner.notify_phase_started(event)
        except NotifierError as error:
            self._logger.warning("Notification delivery failed: %s", error)
        except Exception as error:
            self._logger.error("Notifier crashed: %s", error, exc_info=True)


def build_notifier(
    config: NotifierConfig,
    ui: UIEventPublisher,
    logger: Optional[logging.Logger] = None,
) -> SafeNotifier:
    """Select and wrap the configured notification backend."""
    log = logger or logging.getLogger("notifier")
    if not config.enabled:
        log.info("Notifications disabled")
        return SafeNotifier(NullNotifier(), logger=log)
    if config.backend == BACKEND_DESKTOP:
        return SafeNotifier(DesktopNotifier(config, logger=log), logger=log)
    return SafeNotifier(UINotifier(ui, logger=log), logger=log)
