"""Main application entry point.

Runs the chat relay (port 3000 unless PORT is set) with the NiceGUI chat
page mounted at /chat. Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run the relay with NiceGUI mounted on the same server.

    FastAPI serves /ws, /health and the static root; NiceGUI serves /chat.
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.api.static import mount_static
    from src.relay.config import get_relay_config
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_relay_config()
    app = create_app(config, serve_static=False)

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        mount_path="/chat",
        title="Group Chat",
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chat-relay-secret"),
    )

    # Root mount matches every path, so it goes last
    mount_static(app, config.static_dir)

    logger.info(f"Starting integrated server on http://localhost:{config.port}")
    logger.info(f"Relay socket at ws://localhost:{config.port}/ws")
    logger.info(f"Chat UI available at http://localhost:{config.port}/chat")

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


def run_separate() -> None:
    """Run the relay and NiceGUI as separate servers.

    Relay on PORT (default 3000), NiceGUI on port 8080 connecting to it
    through RELAY_URL.
    """
    import asyncio
    import subprocess

    from src.relay.config import get_relay_config

    config = get_relay_config()

    async def run_servers() -> None:
        logger.info(f"Starting relay on http://localhost:{config.port}")
        logger.info("Starting NiceGUI on http://localhost:8080")

        relay_proc = subprocess.Popen(
            [
                sys.executable,
                "-m",
                "uvicorn",
                "src.api:app",
                "--host",
                config.host,
                "--port",
                str(config.port),
            ]
        )

        # The chat page is on a different port, so it cannot use its own origin
        relay_url = os.getenv("RELAY_URL") or f"ws://localhost:{config.port}/ws"
        nicegui_proc = subprocess.Popen(
            [sys.executable, "-c", "from src.ui.chat_page import main; main()"],
            env={**os.environ, "RELAY_URL": relay_url},
        )

        try:
            while True:
                await asyncio.sleep(1)
                if relay_proc.poll() is not None or nicegui_proc.poll() is not None:
                    break
        except KeyboardInterrupt:
            logger.info("Shutting down servers...")
        finally:
            relay_proc.terminate()
            nicegui_proc.terminate()
            relay_proc.wait()
            nicegui_proc.wait()

    asyncio.run(run_servers())


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run the relay and NiceGUI on different ports.
    Default is integrated mode (both on PORT).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting group chat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
