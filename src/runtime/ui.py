from __future__ import annotations

from typing import Any, Optional, Protocol

from contracts.ui_protocol import EVENT_PHASE_STARTED, EVENT_TIMER_STATE
from pomodoro import PhaseStarted, TimerSnapshot


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


def timer_state_payload(snapshot: TimerSnapshot) -> dict[str, Any]:
    return {
        "phase": snapshot.phase.value,
        "display_time": snapshot.display_time,
        "running": snapshot.running,
        "progress": round(snapshot.progress, 4),
        "skip_break_visible": snapshot.skip_break_visible,
        "remaining_ms": snapshot.remaining_ms,
        "total_duration_ms": snapshot.total_duration_ms,
    }


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_timer_state(self, snapshot: TimerSnapshot) -> None:
        self.publish(EVENT_TIMER_STATE, **timer_state_payload(snapshot))

    def publish_phase_started(self, event: PhaseStarted) -> None:
        self.publish(
            EVENT_PHASE_STARTED,
            phase=event.phase.value,
            title=event.title,
            body=event.body,
        )
