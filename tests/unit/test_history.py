"""Unit tests for scicalc.cli.history: the bounded calculation history."""
from __future__ import annotations

import pytest

from scicalc.cli.history import DEFAULT_HISTORY_SIZE, History, HistoryItem


class TestHistory:
    def test_empty(self) -> None:
        history = History()
        assert len(history) == 0
        assert history.latest is None
        assert list(history) == []

    def test_newest_first(self) -> None:
        history = History()
        history.add("1+1", "2")
        history.add("2+2", "4")
        assert [item.expression for item in history] == ["2+2", "1+1"]
        assert history[0].result == "4"
        assert history.latest is not None
        assert history.latest.expression == "2+2"

    def test_add_returns_item(self) -> None:
        item = History().add("3²", "9")
        assert isinstance(item, HistoryItem)
        assert item.timestamp.tzinfo is not None

    def test_oldest_entries_are_dropped(self) -> None:
        history = History(max_items=3)
        for n in range(5):
            history.add(str(n), str(n))
        assert [item.expression for item in history] == ["4", "3", "2"]

    def test_default_size(self) -> None:
        history = History()
        for n in range(DEFAULT_HISTORY_SIZE + 10):
            history.add(str(n), str(n))
        assert len(history) == DEFAULT_HISTORY_SIZE == 50

    def test_clear(self) -> None:
        history = History()
        history.add("1", "1")
        history.clear()
        assert len(history) == 0
        assert history.latest is None

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            History(max_items=0)
