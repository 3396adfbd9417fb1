"""Fixed durations, default texts, and signal names used by the phase timer."""

from __future__ import annotations

FOCUS_DURATION_MS = 25 * 60 * 1000
BREAK_DURATION_MS = 5 * 60 * 1000
TICK_INTERVAL_MS = 1000

FOCUS_STARTED_TITLE = "Focus started"
FOCUS_STARTED_BODY = "The focus session has started."
BREAK_STARTED_TITLE = "Break started"
BREAK_STARTED_BODY = "The break has started."

SIGNAL_SKIP_BREAK = "SKIP_BREAK"

KNOWN_SIGNALS: frozenset[str] = frozenset({SIGNAL_SKIP_BREAK})
