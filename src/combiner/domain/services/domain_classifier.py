from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from combiner.domain.models.classification import DomainTag


# Order matters: the first domain that matches wins.
DOMAIN_KEYWORDS: Mapping[DomainTag, Tuple[str, ...]] = MappingProxyType(
    {
        DomainTag.NATURE: (
            "Water", "Fire", "Earth", "Air", "Wind", "Ice", "Plant", "Tree", "Forest", "Ocean",
            "Mountain", "River", "Lake", "Rain", "Snow", "Cloud", "Storm", "Lightning", "Thunder",
            "Volcano", "Lava", "Magma", "Rock", "Stone", "Mud", "Steam",
        ),
        DomainTag.TECH: (
            "Bitcoin", "Cyber", "Digital", "Quantum", "Computer", "Robot", "AI", "Code", "Network",
            "Crypto", "Tech", "Data", "Blockchain", "Token", "Mining", "Hash", "Wallet", "Key",
            "Algorithm", "Program", "Internet", "Web", "Virtual", "Smart",
        ),
        DomainTag.CULTURE: (
            "Music", "Art", "Film", "Dance", "Book", "Story", "Song", "Painting", "Sculpture",
            "Fashion", "Media", "Game", "Play", "Sport", "Festival", "Celebration", "Tradition",
            "Heritage", "Language", "Symbol", "Icon", "Emblem",
        ),
        DomainTag.MYTHOLOGY: (
            "Dragon", "Phoenix", "Titan", "God", "Myth", "Legend", "Hero", "Magic", "Spirit", "Soul",
            "Fairy", "Elf", "Dwarf", "Giant", "Ghost", "Angel", "Demon", "Devil", "Wizard", "Witch",
            "Spell", "Potion", "Enchant", "Mystic",
        ),
        DomainTag.SCIENCE: (
            "Atom", "Energy", "Plasma", "Chemical", "Physics", "Biology", "Molecule", "Element",
            "Formula", "Lab", "Fusion", "Reaction", "Compound", "Catalyst", "Experiment", "Research",
            "Discovery", "Theory", "Hypothesis", "Test", "Analysis",
        ),
        DomainTag.COSMIC: (
            "Star", "Planet", "Moon", "Sun", "Galaxy", "Universe", "Cosmos", "Nebula", "Comet",
            "Asteroid", "Meteor", "Space", "Orbit", "Gravity", "Supernova", "Stardust",
            "Constellation", "Celestial", "Cosmic", "Astral", "Stellar",
        ),
        DomainTag.ABSTRACT: (
            "Time", "Power", "Life", "Death", "Mind", "Love", "Hate", "Peace", "War", "Light", "Dark",
            "Sound", "Silence", "Truth", "Lie", "Dream", "Nightmare", "Reality", "Illusion",
            "Concept", "Idea",
        ),
        DomainTag.ELEMENTAL: (
            "Blaze", "Flame", "Burn", "Ember", "Spark", "Aqua", "Hydro", "Liquid", "Fluid", "Terra",
            "Geo", "Land", "Soil", "Aero", "Zephyr", "Gust", "Breeze", "Cryo", "Frost", "Freeze",
            "Chill", "Electro", "Volt", "Shock", "Current",
        ),
    }
)

_AFFIX_RULES: Tuple[Tuple[Tuple[str, ...], DomainTag], ...] = (
    (("coin", "token", "chain", "crypto"), DomainTag.TECH),
    (("fire", "flame", "burn", "blaze"), DomainTag.ELEMENTAL),
    (("water", "aqua", "hydro", "liquid"), DomainTag.ELEMENTAL),
    (("earth", "terra", "geo", "land"), DomainTag.ELEMENTAL),
)

_MIN_PARTIAL_LENGTH = 3

_EXACT_INDEX: Mapping[str, DomainTag] = MappingProxyType(
    {
        keyword.lower(): domain
        for domain, keywords in reversed(list(DOMAIN_KEYWORDS.items()))
        for keyword in keywords
    }
)


def _partial_match(lowered: str, keyword: str) -> bool:
    if len(keyword) < _MIN_PARTIAL_LENGTH or len(lowered) < _MIN_PARTIAL_LENGTH:
        return False
    return keyword in lowered or lowered in keyword


def classify_domain(label: str | None) -> DomainTag:
    lowered = str(label or "").strip().lower()
    if not lowered:
        return DomainTag.UNKNOWN

    exact = _EXACT_INDEX.get(lowered)
    if exact is not None:
        return exact

    for domain, keywords in DOMAIN_KEYWORDS.items():
        if any(_partial_match(lowered, keyword.lower()) for keyword in keywords):
            return domain

    for fragments, domain in _AFFIX_RULES:
        if any(fragment in lowered for fragment in fragments):
            return domain

    return DomainTag.UNKNOWN
