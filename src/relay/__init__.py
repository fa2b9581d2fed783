"""Server-side chat relay.

Responsibilities:
    - Track open connections for fan-out
    - Keep a bounded history of recent messages
    - Replay history to new connections
    - Classify inbound events and broadcast them to every client

All state lives in one MessageRelay per process and is lost on restart.
"""

from src.relay.config import RelayConfig, get_relay_config
from src.relay.history import HistoryBuffer
from src.relay.registry import Connection, ConnectionClosedError, ConnectionRegistry
from src.relay.relay import MessageRelay

__all__ = [
    "Connection",
    "ConnectionClosedError",
    "ConnectionRegistry",
    "HistoryBuffer",
    "MessageRelay",
    "RelayConfig",
    "get_relay_config",
]
