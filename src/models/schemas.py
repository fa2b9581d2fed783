from pydantic import BaseModel, Field

from src.models.events import HistoryEntry


class HistoryResponse(BaseModel):
    """Current contents of the relay's history buffer.

    Attributes:
        items: Buffered messages, oldest first.
    """

    items: list[HistoryEntry] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Service health status."""

    status: str
    service: str
