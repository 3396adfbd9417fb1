"""Cooperative countdown clock driven by the host loop."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

TickCallback = Callable[[int], None]
FinishCallback = Callable[[], None]


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Countdown:
    """One armed countdown. Owned by whoever started it; cancel before replacing."""

    def __init__(
        self,
        *,
        started_at_ms: int,
        duration_ms: int,
        interval_ms: int,
        on_tick: TickCallback,
        on_finish: FinishCallback,
    ):
        self._deadline_ms = started_at_ms + max(0, int(duration_ms))
        self._interval_ms = interval_ms
        self._next_tick_ms = started_at_ms
        self._last_remaining_ms: Optional[int] = None
        self._on_tick = on_tick
        self._on_finish = on_finish
        self._active = True

    @property
    def is_active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def due_in_ms(self, now_ms: int) -> int:
        if not self._active:
            return -1
        return max(0, min(self._next_tick_ms, self._deadline_ms) - now_ms)

    def service(self, now_ms: int) -> None:
        """Deliver at most one tick, or the finish callback, for `now_ms`."""
        if not self._active:
            return

        remaining = max(0, self._deadline_ms - now_ms)
        if remaining == 0:
            self._active = False
            self._on_finish()
            return

        if now_ms < self._next_tick_ms:
            return

        # Late servicing collapses missed ticks into one.
        while self._next_tick_ms <= now_ms:
            self._next_tick_ms += self._interval_ms

        if self._last_remaining_ms is not None:
            remaining = min(remaining, self._last_remaining_ms)
        self._last_remaining_ms = remaining
        self._on_tick(remaining)


class CountdownScheduler:
    """Arms countdowns and services them whenever the host calls `run_pending`."""

    def __init__(
        self,
        *,
        monotonic_ms_fn: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._now_ms = monotonic_ms_fn or _monotonic_ms
        self._logger = logger or logging.getLogger("pomodoro.clock")
        self._lock = threading.Lock()
        self._countdowns: list[Countdown] = []

    @property
    def active_count(self) -> int:
        with self._lock:
            return sum(1 for countdown in self._countdowns if countdown.is_active)

    def start(
        self,
        duration_ms: int,
        *,
        interval_ms: int,
        on_tick: TickCallback,
        on_finish: FinishCallback,
    ) -> Countdown:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be greater than zero")

        with self._lock:
            countdown = Countdown(
                started_at_ms=self._now_ms(),
                duration_ms=duration_ms,
                interval_ms=interval_ms,
                on_tick=on_tick,
                on_finish=on_finish,
            )
            self._countdowns.append(countdown)
            self._logger.debug(
                "Countdown armed: duration=%sms interval=%sms",
                duration_ms,
                interval_ms,
            )
            return countdown

    def run_pending(self) -> None:
        with self._lock:
            now_ms = self._now_ms()
            pending = tuple(self._countdowns)

        # Callbacks run without the scheduler lock held; countdowns they arm
        # are serviced on the next pass.
        for countdown in pending:
            countdown.service(now_ms)

        with self._lock:
            self._countdowns = [
                countdown for countdown in self._countdowns if countdown.is_active
            ]

    def next_due_in_ms(self) -> Optional[int]:
        with self._lock:
            now_ms = self._now_ms()
            due = [
                countdown.due_in_ms(now_ms)
                for countdown in self._countdowns
                if countdown.is_active
            ]
            return min(due) if due else None
