"""Pydantic models for the chat wire protocol.

Events are JSON objects tagged by ``type``:
    - join: client announces its display name
    - message: chat message (bidirectional)
    - system: server status line
    - history: replay of recent messages for a new connection
"""

from src.models.events import (
    Event,
    EventDecodeError,
    HistoryEntry,
    HistoryEvent,
    JoinEvent,
    MessageEvent,
    SystemEvent,
    UnknownEventError,
    decode_event,
    encode_event,
    now_ms,
)

__all__ = [
    "Event",
    "EventDecodeError",
    "HistoryEntry",
    "HistoryEvent",
    "JoinEvent",
    "MessageEvent",
    "SystemEvent",
    "UnknownEventError",
    "decode_event",
    "encode_event",
    "now_ms",
]
