"""End-to-end chat between ChatClient sessions and a live relay server.

Runs the app under uvicorn on an ephemeral port and connects real
``websockets`` clients, so both sides of the /ws protocol are exercised.
"""

import asyncio
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_check as check
import uvicorn
from fastapi import FastAPI

from src.client.config import ClientConfig
from src.client.session import ChatClient
from tests.fakes import Recorder


async def wait_until(condition: Callable[[], bool], timeout: float = 5.0) -> None:
    async with asyncio.timeout(timeout):
        while not condition():
            await asyncio.sleep(0.01)


@pytest.fixture
async def relay_url(app: FastAPI) -> AsyncGenerator[str]:
    """Serve the app on a free local port.

    Yields:
        WebSocket URL of the running relay.
    """
    server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=0, log_level="warning"))
    task = asyncio.create_task(server.serve())
    await wait_until(lambda: server.started)
    port = server.servers[0].sockets[0].getsockname()[1]

    yield f"ws://127.0.0.1:{port}/ws"

    server.should_exit = True
    await task


class TestRoundTrip:
    """Messages flow from one client session to another through the relay."""

    async def test_sender_sees_own_and_peers_see_incoming(self, relay_url: str) -> None:
        """Alice's message renders as own for her and incoming for Bob and Carol."""
        config = ClientConfig(relay_url=relay_url, reconnect_delay=0.1)
        alice_log, bob_log, carol_log = Recorder(), Recorder(), Recorder()
        alice = alice_log.client("Alice", config)
        bob = bob_log.client("Bob", config)
        sessions: list[ChatClient] = []
        tasks: list[asyncio.Task[None]] = []

        def start(client: ChatClient) -> None:
            sessions.append(client)
            tasks.append(asyncio.create_task(client.run()))

        try:
            start(alice)
            await wait_until(lambda: "Alice joined." in alice_log.system)
            start(bob)
            await wait_until(
                lambda: "Bob joined." in alice_log.system and "Bob joined." in bob_log.system
            )

            await alice.send_message("hello everyone")
            await wait_until(lambda: bob_log.texts() == ["hello everyone"])
            await wait_until(lambda: alice_log.texts() == ["hello everyone"] * 2)

            start(carol_log.client("Carol", config))
            await wait_until(lambda: carol_log.texts() == ["hello everyone"])
        finally:
            for client in sessions:
                await client.stop()
            await asyncio.gather(*tasks)

        check.equal([own for _, own in alice_log.messages], [True, True])
        check.equal([own for _, own in bob_log.messages], [False])
        check.equal([own for _, own in carol_log.messages], [False])
        check.equal(bob_log.messages[0][0].name, "Alice")
        check.equal(alice_log.messages[0][0].time, bob_log.messages[0][0].time)
