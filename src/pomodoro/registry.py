"""Live-timer handle and routing for signals raised outside the normal call path."""

from __future__ import annotations

import logging
import threading
from typing import Optional, Protocol

from .constants import SIGNAL_SKIP_BREAK


class SkippableTimer(Protocol):
    def skip_break(self) -> None:
        ...


class LiveTimerRegistry:
    """Holds the single live timer; attached on construction, detached on close."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("pomodoro.registry")
        self._lock = threading.Lock()
        self._timer: Optional[SkippableTimer] = None

    def attach(self, timer: SkippableTimer) -> None:
        with self._lock:
            if self._timer is not None and self._timer is not timer:
                self._logger.warning("Replacing previously attached timer instance")
            self._timer = timer

    def detach(self, timer: SkippableTimer) -> None:
        with self._lock:
            if self._timer is timer:
                self._timer = None

    def current(self) -> Optional[SkippableTimer]:
        with self._lock:
            return self._timer


class SignalRouter:
    """Resolves external signal names to operations on the live timer."""

    def __init__(
        self,
        registry: LiveTimerRegistry,
        logger: Optional[logging.Logger] = None,
    ):
        self._registry = registry
        self._logger = logger or logging.getLogger("pomodoro.signals")

    def dispatch(self, signal_name: str) -> bool:
        """Return True when the signal reached a live timer, False when dropped."""
        name = (signal_name or "").strip().upper()
        if name != SIGNAL_SKIP_BREAK:
            self._logger.warning("Dropping unknown signal: %s", signal_name)
            return False

        timer = self._registry.current()
        if timer is None:
            self._logger.debug("Dropping %s: no live timer", name)
            return False

        self._logger.info("Signal received: %s", name)
        timer.skip_break()
        return True
