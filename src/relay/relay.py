"""Message relay: history replay, event classification and fan-out.

One MessageRelay instance owns all server-side chat state for the process:
the registry of live connections and the bounded history buffer. Handlers
receive it by reference rather than reaching for module globals.

Broadcast is best effort. Every open connection gets the same frame from
the same call; a connection that drops mid-send is skipped, not retried.
The sender is included, and clients tell their own messages apart by name.
"""

import logging

from src.models.events import (
    Event,
    EventDecodeError,
    HistoryEvent,
    JoinEvent,
    MessageEvent,
    SystemEvent,
    UnknownEventError,
    decode_event,
    encode_event,
    now_ms,
)
from src.relay.history import DEFAULT_HISTORY_CAPACITY, HistoryBuffer
from src.relay.registry import Connection, ConnectionClosedError, ConnectionRegistry

logger = logging.getLogger(__name__)


class MessageRelay:
    """Relays chat events between all connected clients."""

    def __init__(self, history_capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        self._registry = ConnectionRegistry()
        self._history = HistoryBuffer(history_capacity)

    @property
    def connections(self) -> ConnectionRegistry:
        return self._registry

    @property
    def history(self) -> HistoryBuffer:
        return self._history

    async def connect(self, connection: Connection) -> None:
        """Register a new connection and replay history to it.

        The snapshot is taken and the connection registered before the first
        await, so every message is either in the replay or broadcast to the
        connection later. Connections deliver frames in call order, so the
        replay still arrives first.
        """
        replay = HistoryEvent(items=self._history.snapshot())
        self._registry.register(connection)
        logger.info(f"Client connected ({len(self._registry)} open)")
        await self._send(connection, encode_event(replay))

    def disconnect(self, connection: Connection) -> None:
        self._registry.unregister(connection)
        logger.info(f"Client disconnected ({len(self._registry)} open)")

    async def receive(self, connection: Connection, raw: str | bytes) -> Event | None:
        """Handle one inbound frame.

        Args:
            connection: The connection the frame arrived on.
            raw: The frame payload.

        Returns:
            The event that was broadcast, or None if the frame was ignored.
        """
        try:
            event = decode_event(raw)
        except UnknownEventError as e:
            logger.debug(f"Ignoring frame: {e}")
            return None
        except EventDecodeError as e:
            logger.warning(f"Bad frame from client: {e}")
            return None

        if isinstance(event, JoinEvent):
            system = SystemEvent(text=f"{event.name} joined.", time=now_ms())
            await self.broadcast(system)
            return system

        if isinstance(event, MessageEvent):
            message = MessageEvent(name=event.name, text=event.text, time=event.time or now_ms())
            self._history.append(message.to_entry())
            await self.broadcast(message)
            return message

        # system and history only travel server -> client
        logger.debug(f"Ignoring client-sent {event.type!r} event")
        return None

    async def broadcast(self, event: Event) -> None:
        """Send an event to every open connection."""
        data = encode_event(event)

        async def deliver(connection: Connection) -> None:
            await self._send(connection, data)

        await self._registry.for_each_open(deliver)

    async def _send(self, connection: Connection, data: str) -> None:
        try:
            await connection.send_text(data)
        except ConnectionClosedError as e:
            logger.debug(f"Dropped frame for closed connection: {e}")
