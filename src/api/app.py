"""FastAPI application factory and configuration.

Wires the relay endpoint, health check and static asset root into one
application with lifespan logging.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import router as relay_router
from src.api.static import mount_static
from src.models.schemas import HealthResponse
from src.relay.config import RelayConfig, get_relay_config
from src.relay.relay import MessageRelay

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    relay: MessageRelay = app.state.relay
    logger.info(f"Starting chat relay (history capacity {relay.history.capacity})...")
    yield
    logger.info(f"Shutting down chat relay ({len(relay.connections)} clients still open)...")


def create_app(
    config: RelayConfig | None = None,
    relay: MessageRelay | None = None,
    serve_static: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Relay configuration. Loads from environment if not provided.
        relay: Relay instance to serve. A fresh one is created if not provided.
        serve_static: Mount the static root. Pass False when more mounts must
            be added first, then call ``mount_static`` yourself.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_relay_config()

    application = FastAPI(
        title="Chat Relay",
        description=(
            "Real-time group chat relay. Clients connect to /ws, receive a replay "
            "of recent messages, and exchange JSON events that are broadcast to "
            "every connected client."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.relay = relay or MessageRelay(history_capacity=config.history_capacity)
    application.state.config = config

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(relay_router)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Check service health status."""
        return HealthResponse(status="healthy", service="chat-relay")

    if serve_static:
        mount_static(application, config.static_dir)

    return application
