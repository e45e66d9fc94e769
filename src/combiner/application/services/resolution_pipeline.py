from __future__ import annotations

import logging
import random
import re
from dataclasses import replace
from typing import Awaitable, Callable, Optional, Sequence

from combiner.application.dtos import CombinationResult
from combiner.application.services.combination_prompts import WORD_SYSTEM_PROMPT, word_prompt
from combiner.application.services.combination_settings import CombinationSettings
from combiner.application.services.combination_tables import (
    ABSOLUTE_FALLBACK,
    PLACEHOLDER_GLYPH,
    SIMPLE_FALLBACK_POOL,
    glyphs_for_domains,
    lookup_instant,
    lookup_thematic,
)
from combiner.application.services.rate_limiter import SlidingWindowRateLimiter
from combiner.application.services.translation_resolver import (
    TranslationResolver,
    complete_translations,
    identity_translations,
)
from combiner.domain.models.classification import DomainTag, RarityTier
from combiner.domain.services.domain_classifier import classify_domain
from combiner.domain.services.rarity import rarity_for_domains


_NON_ALPHA_RE = re.compile(r"[^A-Za-z]")

_ABSOLUTE_TRANSLATIONS = dict(ABSOLUTE_FALLBACK.translations)


def normalize_candidate(raw: str | None) -> str:
    """First line of a model reply, letters only, first letter upper-cased."""
    lines = str(raw or "").strip().splitlines()
    if not lines:
        return ""
    letters = _NON_ALPHA_RE.sub("", lines[0])
    return letters[:1].upper() + letters[1:].lower()


def absolute_fallback(
    rarity: RarityTier = RarityTier.COMMON,
    domain: DomainTag = DomainTag.UNKNOWN,
) -> CombinationResult:
    return CombinationResult(
        word=ABSOLUTE_FALLBACK.word,
        icon=ABSOLUTE_FALLBACK.icon,
        translations=dict(_ABSOLUTE_TRANSLATIONS),
        rarity=rarity,
        domain=domain,
        source="absolute",
    )


Step = Callable[[str, str, DomainTag, DomainTag], Awaitable[Optional[CombinationResult]]]


class ResolutionPipeline:
    """Turns two labels into a new word, trying each source in order.

    Order: instant table, generative service (rate limited), thematic list
    for the two domain tags, simple generic pool, then a fixed default.
    ``resolve`` never raises.
    """

    def __init__(
        self,
        rate_limiter: SlidingWindowRateLimiter,
        text_client=None,
        icon_resolver=None,
        translation_resolver=None,
        settings: CombinationSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.text_client = text_client
        self.icon_resolver = icon_resolver
        self.translation_resolver = translation_resolver
        self.settings = settings or CombinationSettings()
        self._rng = rng or random.Random()
        self._logger = logging.getLogger(__name__)

    def _steps(self) -> Sequence[tuple[str, Step]]:
        return (
            ("instant", self._from_instant_table),
            ("generative", self._from_generative_service),
            ("thematic", self._from_thematic_table),
            ("simple", self._from_simple_pool),
        )

    def is_acceptable(self, word: str) -> bool:
        return (
            self.settings.min_word_length <= len(word) <= self.settings.max_word_length
            and word.isalpha()
        )

    async def _from_instant_table(self, first: str, second: str, *_domains: DomainTag) -> Optional[CombinationResult]:
        preset = lookup_instant(first, second)
        if preset is None:
            return None
        return CombinationResult(
            word=preset.word,
            icon=preset.icon,
            translations=dict(preset.translations),
            source="instant",
        )

    async def _from_generative_service(self, first: str, second: str, *_domains: DomainTag) -> Optional[CombinationResult]:
        if self.text_client is None:
            return None
        if not self.rate_limiter.try_acquire():
            self._logger.info("Generative lookup skipped: rate limit reached", extra={"first": first, "second": second})
            return None

        raw = await self.text_client.complete(
            system=WORD_SYSTEM_PROMPT,
            prompt=word_prompt(first, second),
            temperature=self.settings.word_temperature,
            max_tokens=self.settings.word_max_tokens,
        )
        word = normalize_candidate(raw)
        if not self.is_acceptable(word):
            self._logger.debug("Generative reply rejected", extra={"reply": str(raw)[:40]})
            return None

        icon = PLACEHOLDER_GLYPH
        if self.icon_resolver is not None:
            icon = await self.icon_resolver.resolve(word)
        translations = identity_translations(word)
        if self.translation_resolver is not None:
            translations = await self.translation_resolver.resolve(word)
        return CombinationResult(word=word, icon=icon, translations=translations, source="generative")

    async def _from_thematic_table(
        self, first: str, second: str, first_domain: DomainTag, second_domain: DomainTag
    ) -> Optional[CombinationResult]:
        candidates = lookup_thematic(first_domain, second_domain)
        if not candidates:
            return None
        word = self._rng.choice(candidates)
        return CombinationResult(
            word=word,
            icon=self._rng.choice(glyphs_for_domains(first_domain, second_domain)),
            translations=TranslationResolver.static_translations(word) or identity_translations(word),
            source="thematic",
        )

    async def _from_simple_pool(self, *_args) -> Optional[CombinationResult]:
        preset = self._rng.choice(SIMPLE_FALLBACK_POOL)
        return CombinationResult(
            word=preset.word,
            icon=preset.icon,
            translations=complete_translations(preset.word, preset.translations),
            source="simple",
        )

    @staticmethod
    def _result_domain(word: str, first_domain: DomainTag, second_domain: DomainTag) -> DomainTag:
        own = classify_domain(word)
        if own != DomainTag.UNKNOWN:
            return own
        if first_domain != DomainTag.UNKNOWN:
            return first_domain
        return second_domain

    async def resolve(self, first_label: str, second_label: str) -> CombinationResult:
        rarity = RarityTier.COMMON
        first_domain = second_domain = DomainTag.UNKNOWN
        try:
            first = str(first_label or "").strip()
            second = str(second_label or "").strip()
            first_domain = classify_domain(first)
            second_domain = classify_domain(second)
            rarity = rarity_for_domains(first_domain, second_domain)

            for step_name, step in self._steps():
                try:
                    result = await step(first, second, first_domain, second_domain)
                except Exception as exc:
                    self._logger.warning(
                        "Resolution step failed; falling through",
                        extra={"step": step_name, "first": first, "second": second, "error": str(exc)},
                    )
                    continue
                if result is None:
                    continue
                self._logger.debug("Resolution step produced a word", extra={"step": step_name, "word": result.word})
                return replace(
                    result,
                    rarity=rarity,
                    domain=self._result_domain(result.word, first_domain, second_domain),
                )
        except Exception:
            self._logger.exception("Resolution pipeline failed; using the fixed default")

        return absolute_fallback(rarity, first_domain)
