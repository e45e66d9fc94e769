from abc import ABC, abstractmethod
from typing import List, Optional

from combiner.domain.models.combination_record import CombinationRecord


class DuplicateLabelError(RuntimeError):
    """Raised by ``insert`` when another writer created the label first."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Combination record already exists for '{label}'")
        self.label = label


class CombinationRecordRepository(ABC):
    @abstractmethod
    def find_by_label(self, label: str) -> Optional[CombinationRecord]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, label: str, count: int = 1) -> CombinationRecord:
        raise NotImplementedError

    @abstractmethod
    def increment_count(self, record_id: int) -> CombinationRecord:
        raise NotImplementedError

    @abstractmethod
    def list_top(self, limit: int = 10) -> List[CombinationRecord]:
        raise NotImplementedError
