"""In-memory store of completed analyses."""
from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from aeo_checker.analysis.models import AnalysisRecord, AnalysisResult
from aeo_checker.config.settings import settings

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AnalysisStore:
    """Process-lifetime analysis store.

    Records are kept in insertion order and never updated. A record counts
    as recent while it is younger than the freshness window.

    Usage:
        store = AnalysisStore()
        record = store.save(result)
        cached = store.get_recent(result.url)
    """

    def __init__(self, clock: Clock = _utcnow, freshness: timedelta | None = None):
        self._clock = clock
        self._freshness = freshness or timedelta(hours=settings.cache.freshness_hours)
        self._records: list[AnalysisRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def save(self, result: AnalysisResult) -> AnalysisRecord:
        """Persist a result and return its record."""
        with self._lock:
            record = AnalysisRecord.from_result(
                self._next_id, self._clock().isoformat(), result
            )
            self._next_id += 1
            self._records.append(record)
        logger.debug("analysis_saved", id=record.id, url=record.url)
        return record

    def get_by_url(self, url: str) -> AnalysisRecord | None:
        """Newest record for url regardless of age."""
        with self._lock:
            for record in reversed(self._records):
                if record.url == url:
                    return record
        return None

    def get_recent(self, url: str) -> AnalysisRecord | None:
        """Newest record for url still inside the freshness window."""
        record = self.get_by_url(url)
        if record is None:
            return None
        age = self._clock() - datetime.fromisoformat(record.timestamp)
        if age >= self._freshness:
            return None
        return record

    def list_recent(self, limit: int | None = None) -> list[AnalysisRecord]:
        """Most recent records, newest first."""
        limit = settings.cache.recent_limit if limit is None else limit
        if limit <= 0:
            return []
        with self._lock:
            return list(reversed(self._records))[:limit]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._next_id = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


# Global store instance
analysis_store = AnalysisStore()
