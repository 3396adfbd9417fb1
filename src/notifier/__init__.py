"""Public exports for phase-start notification delivery."""

from .config import NotifierConfig, NotifierConfigurationError
from .content import Notification, NotificationAction, build_notification
from .service import (
    DesktopNotifier,
    Notifier,
    NotifierError,
    NullNotifier,
    SafeNotifier,
    UINotifier,
    build_notifier,
)

__all__ = [
    "DesktopNotifier",
    "Notification",
    "NotificationAction",
    "Notifier",
    "NotifierConfig",
    "NotifierConfigurationError",
    "NotifierError",
    "NullNotifier",
    "SafeNotifier",
    "UINotifier",
    "build_notification",
    "build_notifier",
]
