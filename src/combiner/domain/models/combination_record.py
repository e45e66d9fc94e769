from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CombinationRecord:
    id: int
    label: str
    count: int
    created_at: datetime
    updated_at: datetime

    @property
    def is_first_discovery(self) -> bool:
        return self.count == 1
