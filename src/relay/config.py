"""Relay server configuration with environment variable loading."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Load environment variables from .env file
load_dotenv()

DEFAULT_STATIC_DIR = Path(__file__).parent.parent / "static"


class RelayConfig(BaseModel):
    """Configuration for the chat relay server.

    Attributes:
        host: Interface to bind.
        port: Listening port for HTTP and the /ws channel.
        history_capacity: Number of recent messages kept for replay.
        static_dir: Directory served as the application root.
        log_level: Logging level name.
    """

    # Environment values arrive as strings; coerce and range-check them too
    model_config = ConfigDict(validate_default=True)

    host: str = Field(
        default_factory=lambda: os.getenv("HOST", "0.0.0.0"),
        description="Interface to bind",
    )
    port: int = Field(
        default_factory=lambda: os.getenv("PORT") or 3000,
        ge=1,
        le=65535,
        description="Listening port",
    )
    history_capacity: int = Field(
        default_factory=lambda: os.getenv("HISTORY_CAPACITY") or 100,
        ge=1,
        description="Messages retained for replay to new connections",
    )
    static_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("STATIC_DIR") or DEFAULT_STATIC_DIR),
        description="Static asset root",
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper(),
        description="Logging level",
    )


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ValidationError: If an environment value is out of range or not numeric.
    """
    return RelayConfig()
