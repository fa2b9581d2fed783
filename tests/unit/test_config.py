"""Unit tests for relay and client configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.client.config import ClientConfig, relay_url_for
from src.relay.config import DEFAULT_STATIC_DIR, RelayConfig, get_relay_config


class TestRelayConfig:
    """Tests for RelayConfig environment loading and validation."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without environment overrides the relay listens on 3000."""
        for var in ("PORT", "HOST", "HISTORY_CAPACITY", "STATIC_DIR", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        config = get_relay_config()

        assert config.port == 3000
        assert config.host == "0.0.0.0"
        assert config.history_capacity == 100
        assert config.static_dir == DEFAULT_STATIC_DIR
        assert config.log_level == "INFO"

    def test_port_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """PORT is read from the environment and coerced to int."""
        monkeypatch.setenv("PORT", "8123")

        assert RelayConfig().port == 8123

    def test_empty_port_falls_back_to_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An empty PORT counts as unset."""
        monkeypatch.setenv("PORT", "")

        assert RelayConfig().port == 3000

    def test_rejects_non_numeric_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A non-numeric PORT fails validation."""
        monkeypatch.setenv("PORT", "http")

        with pytest.raises(ValidationError):
            RelayConfig()

    def test_rejects_out_of_range_port(self) -> None:
        """Ports outside 1..65535 are rejected."""
        with pytest.raises(ValidationError):
            RelayConfig(port=70000)

    def test_rejects_zero_history_capacity(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """HISTORY_CAPACITY must be at least 1."""
        monkeypatch.setenv("HISTORY_CAPACITY", "0")

        with pytest.raises(ValidationError):
            RelayConfig()

    def test_static_dir_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """STATIC_DIR overrides the packaged static root."""
        monkeypatch.setenv("STATIC_DIR", str(tmp_path))

        assert RelayConfig().static_dir == tmp_path

    def test_packaged_static_dir_has_index(self) -> None:
        """The default static root ships a main page."""
        assert (DEFAULT_STATIC_DIR / "index.html").is_file()


class TestClientConfig:
    """Tests for ClientConfig defaults and validation."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without RELAY_URL the relay URL is resolved per session."""
        for var in ("RELAY_URL", "RECONNECT_DELAY", "CHAT_USERNAME", "PORT"):
            monkeypatch.delenv(var, raising=False)

        config = ClientConfig()

        assert config.relay_url is None
        assert config.resolve_relay_url() == "ws://localhost:3000/ws"
        assert config.reconnect_delay == 5.0
        assert config.username is None

    def test_relay_url_follows_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default relay URL uses PORT when RELAY_URL is unset."""
        monkeypatch.delenv("RELAY_URL", raising=False)
        monkeypatch.setenv("PORT", "4000")

        assert ClientConfig().resolve_relay_url() == "ws://localhost:4000/ws"

    def test_explicit_relay_url_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """RELAY_URL is used verbatim, even when a page URL is known."""
        monkeypatch.setenv("RELAY_URL", "wss://chat.example.com/ws")

        config = ClientConfig()

        assert config.resolve_relay_url("http://localhost:8080/") == "wss://chat.example.com/ws"

    def test_page_origin_used_without_relay_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A page served over https resolves to wss on the same host."""
        monkeypatch.delenv("RELAY_URL", raising=False)

        url = ClientConfig().resolve_relay_url("https://chat.example.com/chat/")

        assert url == "wss://chat.example.com/ws"

    def test_rejects_non_positive_delay(self) -> None:
        """Reconnect delay must be positive."""
        with pytest.raises(ValidationError):
            ClientConfig(reconnect_delay=0)


class TestRelayUrlFor:
    """Tests for deriving the relay URL from a page URL."""

    @pytest.mark.parametrize(
        ("page_url", "expected"),
        [
            ("http://localhost:3000/", "ws://localhost:3000/ws"),
            ("https://chat.example.com/chat/", "wss://chat.example.com/ws"),
            ("http://10.0.0.5:8080/some/page?x=1", "ws://10.0.0.5:8080/ws"),
        ],
    )
    def test_matches_page_scheme_and_host(self, page_url: str, expected: str) -> None:
        """Secure pages get wss; host and port are kept; path is always /ws."""
        assert relay_url_for(page_url) == expected
