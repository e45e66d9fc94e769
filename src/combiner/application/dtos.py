from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from combiner.domain.models.classification import DomainTag, RarityTier


RESULT_SOURCES: Tuple[str, ...] = ("instant", "generative", "thematic", "simple", "absolute")


@dataclass(frozen=True)
class CombinationResult:
    word: str
    icon: str
    translations: Dict[str, str] = field(default_factory=dict)
    rarity: RarityTier = RarityTier.COMMON
    domain: DomainTag = DomainTag.UNKNOWN
    source: str = "absolute"

    def __post_init__(self) -> None:
        if self.source not in RESULT_SOURCES:
            raise ValueError(f"Unknown result source: {self.source!r}")


@dataclass(frozen=True)
class LedgerEntryView:
    label: str
    count: int
