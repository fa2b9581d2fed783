"""WebSocket relay endpoint and history inspection route.

Each socket is served by one coroutine: history replay on open, then one
relay step per inbound frame until the peer goes away.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from starlette.requests import HTTPConnection
from starlette.websockets import WebSocketState

from src.models.schemas import HistoryResponse
from src.relay.registry import ConnectionClosedError
from src.relay.relay import MessageRelay

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])


def get_relay(connection: HTTPConnection) -> MessageRelay:
    """Return the process-wide relay stored on the application state."""
    return connection.app.state.relay


class WebSocketConnection:
    """Adapts a Starlette WebSocket to the relay's Connection protocol.

    Sends are serialized with a lock so overlapping callers (history replay
    and a concurrent broadcast) reach the socket in call order.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket
        self._send_lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return (
            self._websocket.client_state == WebSocketState.CONNECTED
            and self._websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_text(self, data: str) -> None:
        try:
            async with self._send_lock:
                await self._websocket.send_text(data)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise ConnectionClosedError(str(e) or type(e).__name__) from e


@router.websocket("/ws")
async def relay_socket(websocket: WebSocket, relay: MessageRelay = Depends(get_relay)) -> None:
    """Serve one chat client for the lifetime of its socket.

    Malformed frames are logged and dropped by the relay; only a disconnect
    ends the loop.
    """
    await websocket.accept()
    logger.debug(f"WebSocket accepted from {websocket.client}")
    connection = WebSocketConnection(websocket)
    await relay.connect(connection)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            await relay.receive(connection, raw)
    finally:
        relay.disconnect(connection)


@router.get("/history", response_model=HistoryResponse)
async def get_history(relay: MessageRelay = Depends(get_relay)) -> HistoryResponse:
    """Return the messages a newly connected client would be replayed."""
    return HistoryResponse(items=relay.history.snapshot())
