"""Web UI websocket event, command, and message-type constants."""

from __future__ import annotations

# Websocket event types (server -> client)
EVENT_HELLO = "hello"
EVENT_TIMER_STATE = "timer_state"
EVENT_PHASE_STARTED = "phase_started"
EVENT_NOTIFICATION = "notification"
EVENT_ERROR = "error"

# Websocket message types (client -> server)
MESSAGE_COMMAND = "command"
MESSAGE_NOTIFICATION_PERMISSION = "notification_permission"

# Client commands
COMMAND_START_FOCUS = "start_focus"
COMMAND_START = "start"
COMMAND_PAUSE = "pause"
COMMAND_RESET = "reset"
COMMAND_SKIP_BREAK = "skip_break"

CLIENT_COMMANDS: frozenset[str] = frozenset(
    {
        COMMAND_START_FOCUS,
        COMMAND_START,
        COMMAND_PAUSE,
        COMMAND_RESET,
        COMMAND_SKIP_BREAK,
    }
)

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_TIMER_STATE,
        EVENT_PHASE_STARTED,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_PHASE_STARTED,
    EVENT_ERROR,
    EVENT_TIMER_STATE,
)
