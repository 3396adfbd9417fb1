"""Thread-safe FOCUS/BREAK phase state machine."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from functools import partial
from typing import Callable, Optional, Protocol

from .clock import Countdown, CountdownScheduler
from .constants import (
    BREAK_DURATION_MS,
    BREAK_STARTED_BODY,
    BREAK_STARTED_TITLE,
    FOCUS_DURATION_MS,
    FOCUS_STARTED_BODY,
    FOCUS_STARTED_TITLE,
    TICK_INTERVAL_MS,
)


class Phase(Enum):
    FOCUS = "focus"
    BREAK = "break"


class PhaseContractError(RuntimeError):
    """Raised when the timer meets a phase value it cannot dispatch on."""


def format_display_time(remaining_ms: int) -> str:
    """Format remaining milliseconds as zero-padded `MM:SS`, truncating to seconds."""
    minutes, seconds = divmod(max(0, int(remaining_ms)) // 1000, 60)
    return f"{minutes:02d}:{seconds:02d}"


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable timer state published to observers after every mutation."""
    phase: Phase
    total_duration_ms: int
    remaining_ms: int
    running: bool
    progress: float
    skip_break_visible: bool

    @property
    def display_time(self) -> str:
        return format_display_time(self.remaining_ms)


@dataclass(frozen=True)
class PhaseStarted:
    """Side-effect event emitted exactly once per phase start."""
    phase: Phase
    title: str
    body: str


class PhaseNotifier(Protocol):
    def notify_phase_started(self, event: PhaseStarted) -> None:
        ...


class TimerRegistryLike(Protocol):
    def attach(self, timer: "PhaseTimer") -> None:
        ...

    def detach(self, timer: "PhaseTimer") -> None:
        ...


SnapshotListener = Callable[[TimerSnapshot], None]

_DEFAULT_TEXTS = {
    Phase.FOCUS: (FOCUS_STARTED_TITLE, FOCUS_STARTED_BODY),
    Phase.BREAK: (BREAK_STARTED_TITLE, BREAK_STARTED_BODY),
}


def _initial_state() -> TimerSnapshot:
    return TimerSnapshot(
        phase=Phase.FOCUS,
        total_duration_ms=FOCUS_DURATION_MS,
        remaining_ms=FOCUS_DURATION_MS,
        running=False,
        progress=0.0,
        skip_break_visible=False,
    )


class PhaseTimer:
    """Pomodoro state machine alternating FOCUS and BREAK without a terminal state."""

    def __init__(
        self,
        scheduler: CountdownScheduler,
        *,
        notifier: Optional[PhaseNotifier] = None,
        registry: Optional[TimerRegistryLike] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._scheduler = scheduler
        self._notifier = notifier
        self._registry = registry
        self._logger = logger or logging.getLogger("pomodoro")
        # Re-entrant: expiry callbacks start the next phase while holding it.
        self._lock = threading.RLock()

        self._state = _initial_state()
        self._countdown: Optional[Countdown] = None
        self._generation = 0
        self._listeners: list[SnapshotListener] = []

        if self._registry is not None:
            self._registry.attach(self)

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return self._state

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def start_focus_session(self) -> None:
        with self._lock:
            self._cancel_countdown_locked()
            self._begin_phase_locked(Phase.FOCUS, FOCUS_DURATION_MS)

    def start_timer(self) -> None:
        with self._lock:
            self._cancel_countdown_locked()
            self._state = replace(self._state, running=True)
            self._generation += 1
            self._countdown = self._scheduler.start(
                self._state.remaining_ms,
                interval_ms=TICK_INTERVAL_MS,
                on_tick=partial(self._on_tick, self._generation),
                on_finish=partial(self._on_finish, self._generation),
            )
            self._logger.debug(
                "Countdown running: phase=%s remaining=%sms",
                self._state.phase.value,
                self._state.remaining_ms,
            )
            self._publish_locked()

    def pause_timer(self) -> None:
        with self._lock:
            self._cancel_countdown_locked()
            self._state = replace(self._state, running=False)
            self._logger.info(
                "Timer paused: phase=%s remaining=%s",
                self._state.phase.value,
                self._state.display_time,
            )
            self._publish_locked()

    def reset_timer(self) -> None:
        with self._lock:
            self._cancel_countdown_locked()
            self._state = _initial_state()
            self._logger.info("Timer reset")
            self._publish_locked()

    def skip_break(self) -> None:
        # No BREAK guard: during FOCUS this restarts the focus session.
        with self._lock:
            if self._state.phase is not Phase.BREAK:
                self._logger.info("Skip break requested outside BREAK; restarting focus")
            self.start_focus_session()

    def close(self) -> None:
        with self._lock:
            self._cancel_countdown_locked()
            self._listeners.clear()
        if self._registry is not None:
            self._registry.detach(self)

    def _start_break_session(self) -> None:
        with self._lock:
            self._cancel_countdown_locked()
            self._begin_phase_locked(Phase.BREAK, BREAK_DURATION_MS)

    def _begin_phase_locked(self, phase: Phase, duration_ms: int) -> None:
        self._state = TimerSnapshot(
            phase=phase,
            total_duration_ms=duration_ms,
            remaining_ms=duration_ms,
            running=False,
            progress=0.0,
            skip_break_visible=phase is Phase.BREAK,
        )
        self._logger.info(
            "Phase started: phase=%s duration=%s",
            phase.value,
            self._state.display_time,
        )
        # Arm before notifying; expiry must not depend on notifier latency.
        self.start_timer()
        self._emit_phase_started(phase)

    def _emit_phase_started(self, phase: Phase) -> None:
        if self._notifier is None:
            return
        title, body = _DEFAULT_TEXTS[phase]
        try:
            self._notifier.notify_phase_started(
                PhaseStarted(phase=phase, title=title, body=body)
            )
        except Exception as error:
            self._logger.warning("Phase notification failed: %s", error)

    def _on_tick(self, generation: int, remaining_ms: int) -> None:
        with self._lock:
            if generation != self._generation or not self._state.running:
                return
            state = self._state
            remaining_ms = max(0, min(int(remaining_ms), state.remaining_ms))
            if state.total_duration_ms > 0:
                progress = 1.0 - remaining_ms / state.total_duration_ms
            else:
                progress = 1.0
            self._state = replace(
                state,
                remaining_ms=remaining_ms,
                progress=min(1.0, max(0.0, progress)),
            )
            self._publish_locked()

    def _on_finish(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self._state.running:
                return
            self._countdown = None
            self._state = replace(
                self._state,
                remaining_ms=0,
                running=False,
                progress=1.0,
            )
            self._logger.info("Phase expired: phase=%s", self._state.phase.value)
            self._publish_locked()

            phase = self._state.phase
            if phase is Phase.FOCUS:
                self._start_break_session()
            elif phase is Phase.BREAK:
                self.start_focus_session()
            else:
                raise PhaseContractError(f"Unhandled phase at expiry: {phase!r}")

    def _cancel_countdown_locked(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None

    def _publish_locked(self) -> None:
        state = self._state
        for listener in tuple(self._listeners):
            try:
                listener(state)
            except Exception as error:
                self._logger.error("Snapshot listener failed: %s", error, exc_info=True)
