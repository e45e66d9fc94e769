from __future__ import annotations

from enum import Enum


class DomainTag(str, Enum):
    NATURE = "NATURE"
    TECH = "TECH"
    CULTURE = "CULTURE"
    MYTHOLOGY = "MYTHOLOGY"
    SCIENCE = "SCIENCE"
    COSMIC = "COSMIC"
    ABSTRACT = "ABSTRACT"
    ELEMENTAL = "ELEMENTAL"
    UNKNOWN = "UNKNOWN"


class RarityTier(str, Enum):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    LEGENDARY = "Legendary"

    @property
    def rank(self) -> int:
        return _RARITY_ORDER.index(self)

    # str ordering would be alphabetical; tiers compare by rank.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RarityTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RarityTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RarityTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RarityTier):
            return NotImplemented
        return self.rank >= other.rank


_RARITY_ORDER = (
    RarityTier.COMMON,
    RarityTier.UNCOMMON,
    RarityTier.RARE,
    RarityTier.LEGENDARY,
)
