"""Pytest fixtures and shared test configuration.

Fixtures:
    - relay: Fresh MessageRelay per test
    - static_dir: Temporary static root with index.html and one asset
    - app: FastAPI app serving the relay and the temporary static root
    - async_client: HTTPX client for HTTP endpoint tests
    - test_client: Starlette TestClient for WebSocket flows
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from src.relay.config import RelayConfig
from src.relay.relay import MessageRelay

INDEX_HTML = "<html><body>main page</body></html>"


@pytest.fixture
def relay() -> MessageRelay:
    """Return an empty relay with the default history capacity."""
    return MessageRelay()


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Create a static root containing index.html and styles.css.

    Returns:
        Path to the temporary static directory.
    """
    (tmp_path / "index.html").write_text(INDEX_HTML)
    (tmp_path / "styles.css").write_text("body { color: black; }")
    return tmp_path


@pytest.fixture
def app(relay: MessageRelay, static_dir: Path) -> FastAPI:
    """Create the application around the test relay."""
    config = RelayConfig(static_dir=static_dir, port=3000, history_capacity=100)
    return create_app(config=config, relay=relay)


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def test_client(app: FastAPI) -> Generator[TestClient]:
    """Create a TestClient sharing one event loop across WebSocket sessions.

    Yields:
        TestClient with the application lifespan running.
    """
    with TestClient(app) as client:
        yield client
