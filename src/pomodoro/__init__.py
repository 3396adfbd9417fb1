from .clock import Countdown, CountdownScheduler
from .constants import (
    BREAK_DURATION_MS,
    FOCUS_DURATION_MS,
    SIGNAL_SKIP_BREAK,
    TICK_INTERVAL_MS,
)
from .registry import LiveTimerRegistry, SignalRouter
from .service import (
    Phase,
    PhaseContractError,
    PhaseStarted,
    PhaseTimer,
    TimerSnapshot,
    format_display_time,
)

__all__ = [
    "BREAK_DURATION_MS",
    "Countdown",
    "CountdownScheduler",
    "FOCUS_DURATION_MS",
    "LiveTimerRegistry",
    "Phase",
    "PhaseContractError",
    "PhaseStarted",
    "PhaseTimer",
    "SIGNAL_SKIP_BREAK",
    "SignalRouter",
    "TICK_INTERVAL_MS",
    "TimerSnapshot",
    "format_display_time",
]
