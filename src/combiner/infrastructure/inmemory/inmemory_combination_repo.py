from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from combiner.domain.models.combination_record import CombinationRecord
from combiner.domain.repositories import CombinationRecordRepository, DuplicateLabelError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryCombinationRecordRepository(CombinationRecordRepository):
    """Process-local ledger store. Labels are unique; writes are serialised by a lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: Dict[int, CombinationRecord] = {}
        self._id_by_label: Dict[str, int] = {}
        self._next_id = 1

    def find_by_label(self, label: str) -> Optional[CombinationRecord]:
        with self._lock:
            record_id = self._id_by_label.get(label)
            return self._by_id.get(record_id) if record_id is not None else None

    def insert(self, label: str, count: int = 1) -> CombinationRecord:
        with self._lock:
            if label in self._id_by_label:
                raise DuplicateLabelError(label)
            now = _utcnow()
            record = CombinationRecord(
                id=self._next_id,
                label=label,
                count=max(1, int(count)),
                created_at=now,
                updated_at=now,
            )
            self._by_id[record.id] = record
            self._id_by_label[label] = record.id
            self._next_id += 1
            return record

    def increment_count(self, record_id: int) -> CombinationRecord:
        with self._lock:
            current = self._by_id.get(record_id)
            if current is None:
                raise KeyError(f"Unknown combination record id: {record_id}")
            updated = replace(current, count=current.count + 1, updated_at=_utcnow())
            self._by_id[record_id] = updated
            return updated

    def list_top(self, limit: int = 10) -> List[CombinationRecord]:
        with self._lock:
            rows = sorted(self._by_id.values(), key=lambda record: (-record.count, record.label))
        return rows[: max(0, int(limit))]
