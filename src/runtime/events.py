"""Events queued for the runtime loop from other threads and signal handlers."""

from __future__ import annotations

from dataclasses import dataclass
from queue import Queue
from typing import Protocol, Union

from contracts.ui_protocol import MESSAGE_COMMAND, MESSAGE_NOTIFICATION_PERMISSION
from server import ClientMessage


@dataclass(frozen=True)
class CommandEvent:
    """UI command to apply to the phase timer."""
    command: str


@dataclass(frozen=True)
class PermissionEvent:
    """Notification permission reported by the UI client."""
    granted: bool


@dataclass(frozen=True)
class ExternalSignalEvent:
    """Named signal raised from outside the normal call path (e.g. SIGUSR1)."""
    name: str


@dataclass(frozen=True)
class ShutdownEvent:
    """Request to leave the runtime loop."""
    reason: str = ""


RuntimeEvent = Union[CommandEvent, PermissionEvent, ExternalSignalEvent, ShutdownEvent]


class RuntimeEventPublisher(Protocol):
    def publish(self, event: RuntimeEvent) -> None: ...


class QueueEventPublisher:
    """Event publisher that pushes runtime events to a queue."""

    def __init__(self, queue: Queue):
        self._queue = queue

    def publish(self, event: RuntimeEvent) -> None:
        self._queue.put(event)

    def publish_client_message(self, message: ClientMessage) -> None:
        if message.type == MESSAGE_COMMAND and message.command:
            self.publish(CommandEvent(command=message.command))
        elif message.type == MESSAGE_NOTIFICATION_PERMISSION and message.granted is not None:
            self.publish(PermissionEvent(granted=message.granted))
