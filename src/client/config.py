"""Chat client configuration with environment variable loading."""

import os
from urllib.parse import urlsplit

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from .env file
load_dotenv()

RELAY_PATH = "/ws"


def relay_url_for(page_url: str) -> str:
    """Derive the relay WebSocket URL from the URL a page is served from.

    The relay lives at /ws on the same host and port. A page served over
    https gets a wss URL.

    Args:
        page_url: An http(s) URL, e.g. ``https://chat.example.com/``.

    Returns:
        The matching ws(s) URL, e.g. ``wss://chat.example.com/ws``.
    """
    parts = urlsplit(page_url)
    scheme = "wss" if parts.scheme == "https" else "ws"
    return f"{scheme}://{parts.netloc}{RELAY_PATH}"


class ClientConfig(BaseModel):
    """Configuration for a chat client session.

    Attributes:
        relay_url: WebSocket URL of the relay. None means the relay shares
            the chat page's origin.
        reconnect_delay: Seconds to wait before reconnecting after a drop.
        username: Display name to use; None lets the caller pick one.
    """

    model_config = ConfigDict(validate_default=True)

    relay_url: str | None = Field(
        default_factory=lambda: os.getenv("RELAY_URL") or None,
        description="Relay WebSocket URL",
    )
    reconnect_delay: float = Field(
        default_factory=lambda: os.getenv("RECONNECT_DELAY") or 5.0,
        gt=0.0,
        description="Fixed delay between reconnect attempts, in seconds",
    )
    username: str | None = Field(
        default_factory=lambda: os.getenv("CHAT_USERNAME") or None,
        description="Display name announced on join",
    )

    def resolve_relay_url(self, page_url: str | None = None) -> str:
        """Pick the relay URL for one session.

        An explicit ``relay_url`` wins. Otherwise the relay is found on the
        page's own origin, so a page served over https connects with wss.
        Without a page, the local relay on PORT is used.
        """
        if self.relay_url:
            return self.relay_url
        if page_url:
            return relay_url_for(page_url)
        return relay_url_for(f"http://localhost:{os.getenv('PORT') or 3000}")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.
    """
    return ClientConfig()
