"""Bounded calculation history for the interactive shell.

Keeps the most recent successful calculations, newest first, the way a
calculator's history panel lists them.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone

DEFAULT_HISTORY_SIZE = 50


@dataclass(frozen=True)
class HistoryItem:
    """One completed calculation."""

    expression: str
    result: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class History:
    """Newest-first list of ``HistoryItem`` capped at ``max_items`` entries.

    Parameters
    ----------
    max_items:
        Maximum number of entries kept; the oldest entry is dropped when
        a new one would exceed it.
    """

    def __init__(self, max_items: int = DEFAULT_HISTORY_SIZE) -> None:
        if max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {max_items}")
        self._items: deque[HistoryItem] = deque(maxlen=max_items)

    def add(self, expression: str, result: str) -> HistoryItem:
        """Record a calculation and return the new entry."""
        item = HistoryItem(expression=expression, result=result)
        self._items.appendleft(item)
        return item

    def clear(self) -> None:
        self._items.clear()

    @property
    def latest(self) -> HistoryItem | None:
        """The most recent entry, or ``None`` when empty."""
        return self._items[0] if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[HistoryItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> HistoryItem:
        return self._items[index]
