from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from combiner.domain.models.classification import DomainTag, RarityTier


@dataclass(frozen=True)
class Entity:
    """A combinable unit on the board.

    Base entities are seeded at startup and never carry ancestry. Derived
    entities are created once per successful combination; only
    ``last_combined_at`` ever changes afterwards, by way of ``stamped``.
    """

    id: str
    name: str
    icon: str
    translations: Dict[str, str] = field(default_factory=dict)
    is_base: bool = False
    combined_from: Tuple[str, ...] = ()
    last_combined_at: Optional[int] = None
    rarity: Optional[RarityTier] = None
    domain: Optional[DomainTag] = None

    def __post_init__(self) -> None:
        if self.is_base and self.combined_from:
            raise ValueError(f"Base entity '{self.name}' cannot carry ancestry")

    def ancestry(self) -> Tuple[str, ...]:
        return self.combined_from or (self.name,)

    def label_for(self, locale: str) -> str:
        return self.translations.get(locale) or self.name

    def stamped(self, now_ms: int) -> "Entity":
        return replace(self, last_combined_at=int(now_ms))


def combined_ancestry(first: Entity, second: Entity) -> Tuple[str, ...]:
    return first.ancestry() + second.ancestry()
