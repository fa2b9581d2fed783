"""Registry of currently connected clients, used for broadcast fan-out."""

import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class ConnectionClosedError(Exception):
    """Raised by ``Connection.send_text`` when the channel went away mid-send."""

    pass


class Connection(Protocol):
    """An open channel to one client.

    ``send_text`` raises ConnectionClosedError if the peer is gone. Frames
    must go out in the order ``send_text`` was called, even when calls
    overlap.
    """

    @property
    def is_open(self) -> bool: ...

    async def send_text(self, data: str) -> None: ...


class ConnectionRegistry:
    """Set of live connections.

    Connections are added on connect and removed on disconnect. Fan-out
    skips connections that are no longer open but leaves their removal to
    the disconnect path.
    """

    def __init__(self) -> None:
        self._connections: set[Connection] = set()

    def register(self, connection: Connection) -> None:
        self._connections.add(connection)

    def unregister(self, connection: Connection) -> None:
        """Remove a connection. Calling it again for the same connection is a no-op."""
        self._connections.discard(connection)

    async def for_each_open(self, fn: Callable[[Connection], Awaitable[None]]) -> None:
        """Await ``fn`` for every connection that is open at call time.

        Iterates over a snapshot, so connections registered or removed
        while ``fn`` awaits do not disturb the loop.
        """
        for connection in list(self._connections):
            if not connection.is_open:
                logger.debug("Skipping closed connection during fan-out")
                continue
            await fn(connection)

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection: object) -> bool:
        return connection in self._connections
