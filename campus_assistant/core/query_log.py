from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Deque, Dict, List, Optional
import secrets

from campus_assistant.engines.sentiment_engine import label_for_score
from campus_assistant.utils.logging_utils import anonymize_text

QUERY_LOG_LIMIT = 500

STATS_WINDOWS = {
    "day": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}


@dataclass
class QueryLog:
    query: str
    sentiment: float
    response_time_ms: float
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: f"log-{secrets.token_hex(6)}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "query": self.query,
            "sentiment": self.sentiment,
            "response_time_ms": self.response_time_ms,
            "timestamp": self.timestamp.isoformat(),
        }


class QueryLogStore:
    """Bounded query log owned by one application instance."""

    def __init__(self, limit: int = QUERY_LOG_LIMIT):
        self._logs: Deque[QueryLog] = deque(maxlen=max(1, limit))

    def add(
        self,
        query: str,
        sentiment: float,
        response_time_ms: float = 0.0,
        timestamp: Optional[datetime] = None,
    ) -> QueryLog:
        entry = QueryLog(
            query=anonymize_text(query or ""),
            sentiment=float(sentiment),
            response_time_ms=float(response_time_ms),
            timestamp=timestamp or datetime.now(),
        )
        self._logs.append(entry)
        return entry

    def clear(self):
        self._logs.clear()

    def entries(self) -> List[QueryLog]:
        return list(self._logs)

    def __len__(self):
        return len(self._logs)

    def stats(self, window: str = "day", now: Optional[datetime] = None) -> Dict[str, Any]:
        """Totals, hourly histogram, sentiment split (percent) and top queries."""
        if window not in STATS_WINDOWS:
            raise ValueError(f"window must be one of {sorted(STATS_WINDOWS)}")
        now = now or datetime.now()
        cutoff = now - STATS_WINDOWS[window]
        logs = [log for log in self._logs if log.timestamp > cutoff]
        total = len(logs)

        hourly = [0] * 24
        for log in logs:
            hourly[log.timestamp.hour] += 1

        labels = Counter(label_for_score(log.sentiment) for log in logs)
        positive = round(labels["positive"] / total * 100) if total else 0
        negative = round(labels["negative"] / total * 100) if total else 0

        counts = Counter(
            log.query.lower().strip() for log in logs if log.query and log.query.strip()
        )
        popular = [{"text": text, "count": count} for text, count in counts.most_common(5)]

        return {
            "window": window,
            "total": total,
            "hourly": hourly,
            "sentiment": {
                "positive": positive,
                "neutral": 100 - positive - negative,
                "negative": negative,
            },
            "popular": popular,
        }
