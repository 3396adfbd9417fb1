"""UI server module for static web UI and websocket streaming."""

from .config import ServerConfigurationError, UIServerConfig
from .events import ClientMessage, ClientMessageError, parse_client_message
from .service import UIServer

__all__ = [
    "ClientMessage",
    "ClientMessageError",
    "ServerConfigurationError",
    "UIServerConfig",
    "UIServer",
    "parse_client_message",
]
