from __future__ import annotations

import asyncio
import logging

from combiner.domain.models.combination_record import CombinationRecord
from combiner.domain.repositories import CombinationRecordRepository, DuplicateLabelError


class LedgerConflictError(RuntimeError):
    pass


class CombinationLedger:
    """Create-or-increment counter per produced label.

    Repository calls are blocking, so they run in a worker thread to keep the
    event loop free. A lost create race re-reads and increments instead of
    failing.
    """

    def __init__(self, repository: CombinationRecordRepository, max_attempts: int = 3) -> None:
        self.repository = repository
        self.max_attempts = max(1, int(max_attempts))
        self._logger = logging.getLogger(__name__)

    def record_occurrence_sync(self, label: str) -> CombinationRecord:
        label = str(label or "").strip()
        if not label:
            raise ValueError("Cannot record an empty label")

        for attempt in range(self.max_attempts):
            existing = self.repository.find_by_label(label)
            if existing is not None:
                return self.repository.increment_count(existing.id)
            try:
                return self.repository.insert(label, count=1)
            except DuplicateLabelError:
                self._logger.info(
                    "Lost create race for combination record; retrying",
                    extra={"label": label, "attempt": attempt + 1},
                )
        raise LedgerConflictError(f"Could not record '{label}' after {self.max_attempts} attempts")

    async def record_occurrence(self, label: str) -> CombinationRecord:
        return await asyncio.to_thread(self.record_occurrence_sync, label)

    async def top(self, limit: int = 10) -> list[CombinationRecord]:
        return await asyncio.to_thread(self.repository.list_top, limit)
