"""Tests for the bounded query log and its statistics."""
from datetime import datetime, timedelta

import pytest

from campus_assistant.core.query_log import QueryLogStore

NOW = datetime(2026, 10, 17, 15, 30)


@pytest.fixture
def log_store():
    return QueryLogStore(limit=10)


class TestQueryLogStore:
    """Recording queries."""

    def test_add_anonymizes(self, log_store):
        entry = log_store.add("email me at jane@example.com", 0.0)

        assert "jane@example.com" not in entry.query
        assert entry.id.startswith("log-")

    def test_bounded(self):
        store = QueryLogStore(limit=3)
        for i in range(5):
            store.add(f"query {i}", 0.0)

        assert len(store) == 3
        assert [e.query for e in store.entries()] == ["query 2", "query 3", "query 4"]

    def test_clear(self, log_store):
        log_store.add("bus", 0.0)
        log_store.clear()
        assert len(log_store) == 0

    def test_to_dict(self, log_store):
        entry = log_store.add("menu", 0.4, 12.5, timestamp=NOW)
        data = entry.to_dict()

        assert data["timestamp"] == NOW.isoformat()
        assert data["response_time_ms"] == 12.5


class TestStats:
    """Aggregation over time windows."""

    def test_empty(self, log_store):
        stats = log_store.stats("day", now=NOW)

        assert stats["total"] == 0
        assert stats["hourly"] == [0] * 24
        assert stats["sentiment"] == {"positive": 0, "neutral": 100, "negative": 0}
        assert stats["popular"] == []

    def test_window_filters_old_entries(self, log_store):
        log_store.add("recent", 0.0, timestamp=NOW - timedelta(hours=2))
        log_store.add("old", 0.0, timestamp=NOW - timedelta(days=3))

        assert log_store.stats("day", now=NOW)["total"] == 1
        assert log_store.stats("week", now=NOW)["total"] == 2

    def test_hourly_histogram(self, log_store):
        log_store.add("a", 0.0, timestamp=NOW.replace(hour=9))
        log_store.add("b", 0.0, timestamp=NOW.replace(hour=9, minute=45))
        log_store.add("c", 0.0, timestamp=NOW.replace(hour=14))

        hourly = log_store.stats("day", now=NOW)["hourly"]
        assert hourly[9] == 2
        assert hourly[14] == 1

    def test_sentiment_percentages(self, log_store):
        for score in (0.6, 0.4, -0.4, 0.0):
            log_store.add("q", score, timestamp=NOW)

        assert log_store.stats("day", now=NOW)["sentiment"] == {
            "positive": 50,
            "neutral": 25,
            "negative": 25,
        }

    def test_popular_queries(self, log_store):
        for text in ["Bus", "bus ", "menu", "bus", "events"]:
            log_store.add(text, 0.0, timestamp=NOW)

        popular = log_store.stats("day", now=NOW)["popular"]
        assert popular[0] == {"text": "bus", "count": 3}

    def test_unknown_window(self, log_store):
        with pytest.raises(ValueError):
            log_store.stats("year")
