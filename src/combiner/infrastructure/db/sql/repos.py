from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from combiner.domain.models.combination_record import CombinationRecord
from combiner.domain.repositories import CombinationRecordRepository, DuplicateLabelError

from .schema import element_combination


def _row_to_record(row) -> CombinationRecord:
    # Row is tuple-like, so "count" must be read through the mapping view.
    values = row._mapping
    return CombinationRecord(
        id=int(values["id"]),
        label=str(values["label"]),
        count=int(values["count"]),
        created_at=values["created_at"],
        updated_at=values["updated_at"],
    )


class SqlCombinationRecordRepository(CombinationRecordRepository):
    """Ledger rows in ``element_combination``; the unique label index arbitrates create races."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def find_by_label(self, label: str) -> Optional[CombinationRecord]:
        with self._session_factory() as session:
            row = session.execute(
                select(element_combination).where(element_combination.c.label == label)
            ).first()
        return _row_to_record(row) if row is not None else None

    def insert(self, label: str, count: int = 1) -> CombinationRecord:
        now = datetime.now(timezone.utc)
        try:
            with self._session_factory.begin() as session:
                session.execute(
                    insert(element_combination).values(
                        label=label,
                        count=max(1, int(count)),
                        created_at=now,
                        updated_at=now,
                    )
                )
        except IntegrityError as exc:
            raise DuplicateLabelError(label) from exc

        record = self.find_by_label(label)
        if record is None:
            raise RuntimeError(f"Inserted combination record for '{label}' could not be read back")
        return record

    def increment_count(self, record_id: int) -> CombinationRecord:
        with self._session_factory.begin() as session:
            result = session.execute(
                update(element_combination)
                .where(element_combination.c.id == int(record_id))
                .values(
                    count=element_combination.c["count"] + 1,
                    updated_at=datetime.now(timezone.utc),
                )
            )
            if result.rowcount == 0:
                raise KeyError(f"Unknown combination record id: {record_id}")
            row = session.execute(
                select(element_combination).where(element_combination.c.id == int(record_id))
            ).one()
            return _row_to_record(row)

    def list_top(self, limit: int = 10) -> List[CombinationRecord]:
        with self._session_factory() as session:
            rows = session.execute(
                select(element_combination)
                .order_by(element_combination.c["count"].desc(), element_combination.c.label.asc())
                .limit(max(0, int(limit)))
            ).all()
        return [_row_to_record(row) for row in rows]
