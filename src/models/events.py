"""Wire events exchanged over the /ws channel.

Every frame is a JSON object tagged by ``type``. Decoding goes through a
pydantic discriminated union so a payload either becomes one of the known
variants or is rejected at the boundary.
"""

import math
import time
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator


def now_ms() -> int:
    """Return the current time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class EventDecodeError(Exception):
    """Raised when a raw frame cannot be decoded into an Event."""

    pass


class UnknownEventError(EventDecodeError):
    """Raised when a frame carries a ``type`` tag with no known variant."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"Unknown event type: {tag!r}")
        self.tag = tag


class HistoryEntry(BaseModel):
    """A stored chat message, as replayed to newly connected clients.

    Attributes:
        name: Display name of the author.
        text: Message body.
        time: Milliseconds since the Unix epoch.
    """

    name: str
    text: str
    time: int


class JoinEvent(BaseModel):
    """Client announces its display name after connecting."""

    type: Literal["join"] = "join"
    name: str


class MessageEvent(BaseModel):
    """A chat message.

    ``time`` is optional on input; the relay fills it with the server clock
    when it is missing or falsy. Fractional milliseconds are truncated.
    """

    type: Literal["message"] = "message"
    name: str
    text: str
    time: int | None = None

    @field_validator("time", mode="before")
    @classmethod
    def truncate_fractional_time(cls, value: object) -> object:
        if isinstance(value, float) and math.isfinite(value):
            return int(value)
        return value

    def to_entry(self) -> HistoryEntry:
        """Project the message into a history entry (drops the tag)."""
        return HistoryEntry(name=self.name, text=self.text, time=self.time or now_ms())


class SystemEvent(BaseModel):
    """Server status line, e.g. ``"Alice joined."``."""

    type: Literal["system"] = "system"
    text: str
    time: int = Field(default_factory=now_ms)


class HistoryEvent(BaseModel):
    """Replay of recent messages sent to a connection right after it opens."""

    type: Literal["history"] = "history"
    items: list[HistoryEntry] = Field(default_factory=list)


Event = Annotated[
    JoinEvent | MessageEvent | SystemEvent | HistoryEvent,
    Field(discriminator="type"),
]

_event_adapter: TypeAdapter[Event] = TypeAdapter(Event)


def decode_event(raw: str | bytes) -> Event:
    """Decode a raw JSON frame into an Event.

    Args:
        raw: The frame payload as received from the socket.

    Returns:
        The decoded event variant.

    Raises:
        UnknownEventError: If ``type`` names no known variant.
        EventDecodeError: If the payload is not JSON or fails validation.
    """
    try:
        return _event_adapter.validate_json(raw)
    except ValidationError as e:
        for error in e.errors():
            if error["type"] == "union_tag_invalid":
                raise UnknownEventError(error["ctx"]["tag"]) from e
        raise EventDecodeError(f"Invalid event: {e.error_count()} validation error(s)") from e


def encode_event(event: Event) -> str:
    """Serialize an event to a compact JSON string."""
    return event.model_dump_json()
