"""Chat client session with automatic reconnect.

A ChatClient holds one connection to the relay at a time. It announces its
display name on every (re)connect, renders what the relay sends through
callbacks, and retries forever with a fixed delay after any drop.

Rendering is left to the caller: the session only decides whether a
message is the user's own (same display name) or incoming.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

import websockets
from websockets.exceptions import ConnectionClosed, InvalidHandshake
from websockets.protocol import State

from src.client.config import ClientConfig, get_client_config
from src.models.events import (
    Event,
    EventDecodeError,
    HistoryEntry,
    HistoryEvent,
    JoinEvent,
    MessageEvent,
    SystemEvent,
    decode_event,
    encode_event,
    now_ms,
)

logger = logging.getLogger(__name__)

MessageCallback = Callable[[HistoryEntry, bool], None]
SystemCallback = Callable[[str, int], None]
StatusCallback = Callable[["ConnectionStatus"], None]


class ConnectionStatus(str, Enum):
    """Lifecycle of the session's connection."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


def _ignore(*args: object) -> None:
    pass


class ChatClient:
    """One user's session against the relay.

    Args:
        name: Display name sent on join and used to spot own messages.
        config: Client configuration. Loads from environment if not provided.
        on_message: Called with (entry, own) for every chat message.
        on_system: Called with (text, time) for status lines.
        on_status: Called whenever the connection status changes.
        page_url: URL of the page hosting the session. Used to locate the
            relay when RELAY_URL is not set.
    """

    def __init__(
        self,
        name: str,
        config: ClientConfig | None = None,
        on_message: MessageCallback | None = None,
        on_system: SystemCallback | None = None,
        on_status: StatusCallback | None = None,
        page_url: str | None = None,
    ) -> None:
        self.name = name
        self._config = config or get_client_config()
        self.relay_url = self._config.resolve_relay_url(page_url)
        self._on_message = on_message or _ignore
        self._on_system = on_system or _ignore
        self._on_status = on_status or _ignore
        self._ws: websockets.ClientConnection | None = None
        self._running = False
        self.status = ConnectionStatus.DISCONNECTED

    @property
    def is_connected(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

    async def run(self) -> None:
        """Connect and keep reconnecting until ``stop`` is called."""
        self._running = True
        while self._running:
            await self._run_once()
            if not self._running:
                break
            logger.info(f"Reconnecting in {self._config.reconnect_delay:g}s")
            await asyncio.sleep(self._config.reconnect_delay)

    async def stop(self) -> None:
        """End the reconnect loop and close the current connection."""
        self._running = False
        if self._ws is not None:
            await self._ws.close()

    async def _run_once(self) -> None:
        self._set_status(ConnectionStatus.CONNECTING)
        try:
            async with websockets.connect(self.relay_url) as ws:
                self._ws = ws
                self._set_status(ConnectionStatus.CONNECTED)
                await ws.send(encode_event(JoinEvent(name=self.name)))
                async for raw in ws:
                    self.handle_raw(raw)
        except ConnectionClosed as e:
            logger.info(f"Connection to relay closed: {e}")
        except (InvalidHandshake, OSError, TimeoutError) as e:
            logger.warning(f"Could not connect to {self.relay_url}: {e}")
        finally:
            self._ws = None
            self._set_status(ConnectionStatus.DISCONNECTED)

    def _set_status(self, status: ConnectionStatus) -> None:
        self.status = status
        self._on_status(status)

    def handle_raw(self, raw: str | bytes) -> None:
        """Render one frame received from the relay.

        Bad frames are dropped. A callback that raises is logged and does
        not end the session.
        """
        try:
            event = decode_event(raw)
        except EventDecodeError as e:
            logger.warning(f"Invalid message from relay: {e}")
            return

        try:
            self._dispatch(event)
        except Exception as e:
            logger.error(f"Failed to render {event.type!r} event: {e}")

    def _dispatch(self, event: Event) -> None:
        if isinstance(event, MessageEvent):
            self._render(event.to_entry())
        elif isinstance(event, SystemEvent):
            self._on_system(event.text, event.time)
        elif isinstance(event, HistoryEvent):
            for entry in event.items:
                self._render(entry)
        else:
            logger.debug(f"Ignoring {event.type!r} event from relay")

    def _render(self, entry: HistoryEntry) -> None:
        self._on_message(entry, entry.name == self.name)

    async def send_message(self, text: str) -> MessageEvent | None:
        """Send a chat message.

        The message is rendered locally right away. It is transmitted only
        if the connection is open at this moment; otherwise it is not queued.

        Args:
            text: Message body; surrounding whitespace is stripped.

        Returns:
            The message event, or None if the text was empty.
        """
        text = text.strip()
        if not text:
            return None

        event = MessageEvent(name=self.name, text=text, time=now_ms())
        self._render(event.to_entry())

        if self.is_connected:
            try:
                await self._ws.send(encode_event(event))
            except ConnectionClosed as e:
                logger.debug(f"Message not sent, connection closed: {e}")
        return event

    def post_local(self, text: str) -> HistoryEntry:
        """Render a message as own without transmitting it.

        Used for attachment notices, which never leave the browser.
        """
        entry = HistoryEntry(name=self.name, text=text, time=now_ms())
        self._render(entry)
        return entry

    def notify_local(self, text: str) -> None:
        """Render a local status line without touching the connection."""
        self._on_system(text, now_ms())
