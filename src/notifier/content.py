"""Phase-dependent notification content chosen by the notifier."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from pomodoro import Phase, PhaseStarted, SIGNAL_SKIP_BREAK

FOCUS_MESSAGES: tuple[str, ...] = (
    "You are getting great things done! 💪",
    "Every minute counts, keep going! 🚀",
    "Remember: focus on one thing at a time 🌟",
)
BREAK_MESSAGES: tuple[str, ...] = (
    "Time to relax a little! ☕",
    "Great work! Now recharge 🌿",
    "Use this break to clear your mind 🧘",
)

FOCUS_TITLE = "🎯 Your moment to shine!"
BREAK_TITLE = "☕ Take a well-earned breather!"

FOCUS_COLOR = (255, 69, 0)
BREAK_COLOR = (60, 179, 113)

FOCUS_VIBRATION: tuple[int, ...] = (0, 300, 300, 300)
BREAK_VIBRATION: tuple[int, ...] = (0, 200, 100, 200)

BACK_TO_WORK_LABEL = "Back to work"


@dataclass(frozen=True)
class NotificationAction:
    """Button attached to a notification that raises an external signal."""
    label: str
    signal: str


@dataclass(frozen=True)
class Notification:
    phase: Phase
    title: str
    body: str
    color: tuple[int, int, int]
    vibration_pattern: tuple[int, ...]
    action: Optional[NotificationAction] = None

    @property
    def color_hex(self) -> str:
        red, green, blue = self.color
        return f"#{red:02x}{green:02x}{blue:02x}"

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "phase": self.phase.value,
            "title": self.title,
            "body": self.body,
            "color": self.color_hex,
            "vibration_pattern": list(self.vibration_pattern),
        }
        if self.action is not None:
            payload["action"] = {
                "label": self.action.label,
                "signal": self.action.signal,
            }
        return payload


def build_notification(
    event: PhaseStarted,
    *,
    choice_fn: Optional[Callable[[Sequence[str]], str]] = None,
) -> Notification:
    """Build the notification shown when `event.phase` starts."""
    choose = choice_fn or random.choice
    if event.phase is Phase.FOCUS:
        return Notification(
            phase=event.phase,
            title=FOCUS_TITLE,
            body=choose(FOCUS_MESSAGES),
            color=FOCUS_COLOR,
            vibration_pattern=FOCUS_VIBRATION,
        )
    if event.phase is Phase.BREAK:
        return Notification(
            phase=event.phase,
            title=BREAK_TITLE,
            body=choose(BREAK_MESSAGES),
            color=BREAK_COLOR,
            vibration_pattern=BREAK_VIBRATION,
            action=NotificationAction(label=BACK_TO_WORK_LABEL, signal=SIGNAL_SKIP_BREAK),
        )
    # Unknown phases fall back to the core's default texts.
    return Notification(
        phase=event.phase,
        title=event.title,
        body=event.body,
        color=(70, 130, 180),
        vibration_pattern=(0, 250, 250, 250),
    )
