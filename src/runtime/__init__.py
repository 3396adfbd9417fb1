"""Runtime engine exports."""

from .events import (
    CommandEvent,
    ExternalSignalEvent,
    PermissionEvent,
    QueueEventPublisher,
    ShutdownEvent,
)
from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks

__all__ = [
    "CommandEvent",
    "ExternalSignalEvent",
    "PermissionEvent",
    "QueueEventPublisher",
    "RuntimeBootstrap",
    "RuntimeEngine",
    "RuntimeHooks",
    "ShutdownEvent",
]
