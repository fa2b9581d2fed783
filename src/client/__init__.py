"""Chat client session for the relay.

Responsibilities:
    - Connect to /ws and announce the display name
    - Render history, messages and status lines through callbacks
    - Classify messages as own or incoming by display name
    - Reconnect after a fixed delay, indefinitely
"""

from src.client.config import ClientConfig, get_client_config, relay_url_for
from src.client.session import ChatClient, ConnectionStatus

__all__ = [
    "ChatClient",
    "ClientConfig",
    "ConnectionStatus",
    "get_client_config",
    "relay_url_for",
]
