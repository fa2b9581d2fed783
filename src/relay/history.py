"""Bounded FIFO buffer of recent chat messages."""

from collections import deque

from src.models.events import HistoryEntry

DEFAULT_HISTORY_CAPACITY = 100


class HistoryBuffer:
    """Keeps the most recent ``capacity`` entries in arrival order.

    Oldest entries are evicted first once the buffer is full.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def append(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    def snapshot(self) -> list[HistoryEntry]:
        """Return a copy of the buffered entries, oldest first."""
        return [entry.model_copy() for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
