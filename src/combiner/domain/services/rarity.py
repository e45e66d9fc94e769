from __future__ import annotations

from combiner.domain.models.classification import DomainTag, RarityTier
from combiner.domain.services.domain_classifier import classify_domain


def rarity_for_domains(first: DomainTag, second: DomainTag) -> RarityTier:
    """Priority list, first match wins.

    The same-domain check runs before the mythology check, so a
    MYTHOLOGY + MYTHOLOGY pair is Common.
    """
    if first == second:
        return RarityTier.COMMON
    if {first, second} == {DomainTag.TECH, DomainTag.NATURE}:
        return RarityTier.UNCOMMON
    if DomainTag.MYTHOLOGY in (first, second):
        return RarityTier.RARE
    return RarityTier.LEGENDARY


def rarity_for_labels(first_label: str, second_label: str) -> RarityTier:
    return rarity_for_domains(classify_domain(first_label), classify_domain(second_label))
