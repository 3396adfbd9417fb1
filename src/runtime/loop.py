"""Runtime orchestration loop for UI commands, external signals, and clock ticks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Optional

from app_config import AppConfig
from contracts.ui_protocol import (
    COMMAND_PAUSE,
    COMMAND_RESET,
    COMMAND_SKIP_BREAK,
    COMMAND_START,
    COMMAND_START_FOCUS,
    EVENT_ERROR,
)
from notifier import Notifier, SafeNotifier, UINotifier
from pomodoro import (
    CountdownScheduler,
    LiveTimerRegistry,
    PhaseStarted,
    PhaseTimer,
    SIGNAL_SKIP_BREAK,
    SignalRouter,
)
from server import UIServer

from .events import (
    CommandEvent,
    ExternalSignalEvent,
    PermissionEvent,
    QueueEventPublisher,
    ShutdownEvent,
)
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup flow."""
    setup_signal_handlers: Callable[[QueueEventPublisher], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    notifier: Notifier
    ui_server: Optional[UIServer]
    hooks: RuntimeHooks
    scheduler: Optional[CountdownScheduler] = None


class RuntimeEngine:
    """Single-threaded owner of the phase timer; everything else talks to it via a queue."""

    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._poll_interval = bootstrap.app_config.runtime.poll_interval_seconds

        self._ui = RuntimeUIPublisher(bootstrap.ui_server)
        self._scheduler = bootstrap.scheduler or CountdownScheduler(
            logger=logging.getLogger("pomodoro.clock")
        )
        self._registry = LiveTimerRegistry(logger=logging.getLogger("pomodoro.registry"))
        self._signals = SignalRouter(
            self._registry,
            logger=logging.getLogger("pomodoro.signals"),
        )
        self._timer = PhaseTimer(
            self._scheduler,
            notifier=self,
            registry=self._registry,
            logger=logging.getLogger("pomodoro"),
        )
        self._timer.subscribe(self._ui.publish_timer_state)

        self._event_queue: Queue[Any] = Queue()
        self._publisher = QueueEventPublisher(self._event_queue)

    @property
    def timer(self) -> PhaseTimer:
        return self._timer

    @property
    def publisher(self) -> QueueEventPublisher:
        return self._publisher

    def notify_phase_started(self, event: PhaseStarted) -> None:
        self._ui.publish_phase_started(event)
        self._bootstrap.notifier.notify_phase_started(event)

    def run(self) -> int:
        try:
            self._bootstrap.hooks.setup_signal_handlers(self._publisher)
            self._ui.publish_timer_state(self._timer.snapshot())

            if self._bootstrap.app_config.runtime.autostart:
                self._logger.info("Autostart enabled; starting focus session")
                self._timer.start_focus_session()

            self._logger.info("Ready! Timer loop running.")
            while True:
                self._scheduler.run_pending()

                event = self._poll_event()
                if event is None:
                    continue

                event_exit = self._handle_event(event)
                if event_exit is not None:
                    return event_exit

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            self._ui.publish(EVENT_ERROR, message=f"Runtime failed: {error}")
            return 1
        finally:
            self._shutdown()

    def _poll_event(self) -> Optional[Any]:
        timeout = self._poll_interval
        due_in_ms = self._scheduler.next_due_in_ms()
        if due_in_ms is not None:
            timeout = min(timeout, due_in_ms / 1000.0)
        try:
            return self._event_queue.get(timeout=max(0.0, timeout))
        except Empty:
            return None

    def _handle_event(self, event: Any) -> Optional[int]:
        if isinstance(event, CommandEvent):
            self._apply_command(event.command)
            return None

        if isinstance(event, ExternalSignalEvent):
            self._signals.dispatch(event.name)
            return None

        if isinstance(event, PermissionEvent):
            self._apply_permission(event.granted)
            return None

        if isinstance(event, ShutdownEvent):
            self._logger.info("Shutdown requested: %s", event.reason or "no reason given")
            return 0

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)
        return None

    def _apply_command(self, command: str) -> None:
        self._logger.debug("Applying UI command: %s", command)
        if command == COMMAND_START_FOCUS:
            self._timer.start_focus_session()
        elif command == COMMAND_START:
            self._timer.start_timer()
        elif command == COMMAND_PAUSE:
            self._timer.pause_timer()
        elif command == COMMAND_RESET:
            self._timer.reset_timer()
        elif command == COMMAND_SKIP_BREAK:
            # Same path as an out-of-process SKIP_BREAK signal.
            self._signals.dispatch(SIGNAL_SKIP_BREAK)
        else:
            self._logger.warning("Ignoring unsupported UI command: %s", command)

    def _apply_permission(self, granted: bool) -> None:
        notifier = self._bootstrap.notifier
        if isinstance(notifier, SafeNotifier):
            notifier = notifier.inner
        if isinstance(notifier, UINotifier):
            notifier.set_permission(granted)
        else:
            self._logger.debug("Notification permission ignored by %s", type(notifier).__name__)

    def _shutdown(self) -> None:
        self._logger.info("Stopping timer...")
        self._timer.close()

        ui_server = self._bootstrap.ui_server
        if ui_server is not None:
            self._logger.info("Stopping UI server...")
            try:
                ui_server.stop(timeout_seconds=5.0)
            except Exception as error:
                self._logger.error("Error stopping UI server: %s", error, exc_info=True)
