"""Utilities for serializing UI events, parsing client messages, and sticky state."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from contracts.ui_protocol import (
    CLIENT_COMMANDS,
    MESSAGE_COMMAND,
    MESSAGE_NOTIFICATION_PERMISSION,
    STICKY_EVENT_ORDER,
    STICKY_EVENT_TYPES,
)


class ClientMessageError(ValueError):
    """Raised when a websocket message from the UI cannot be understood."""


@dataclass(frozen=True)
class ClientMessage:
    """Validated inbound UI message."""
    type: str
    command: Optional[str] = None
    granted: Optional[bool] = None


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def parse_client_message(raw: str | bytes) -> ClientMessage:
    """Parse a websocket frame sent by the UI into a `ClientMessage`."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as error:
        raise ClientMessageError(f"Invalid JSON: {error}") from error

    if not isinstance(data, dict):
        raise ClientMessageError("Message must be a JSON object")

    message_type = data.get("type")
    if message_type == MESSAGE_COMMAND:
        command = data.get("command")
        if not isinstance(command, str) or command.strip().lower() not in CLIENT_COMMANDS:
            allowed = ", ".join(sorted(CLIENT_COMMANDS))
            raise ClientMessageError(f"command must be one of: {allowed}")
        return ClientMessage(type=MESSAGE_COMMAND, command=command.strip().lower())

    if message_type == MESSAGE_NOTIFICATION_PERMISSION:
        granted = data.get("granted")
        if not isinstance(granted, bool):
            raise ClientMessageError("granted must be a boolean")
        return ClientMessage(type=MESSAGE_NOTIFICATION_PERMISSION, granted=granted)

    raise ClientMessageError(f"Unsupported message type: {message_type!r}")


class StickyEventStore:
    """Thread-safe cache of sticky events replayed to new websocket clients."""
    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
