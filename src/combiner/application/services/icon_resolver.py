from __future__ import annotations

import logging
import random
import re

from combiner.application.services.combination_prompts import ICON_SYSTEM_PROMPT, icon_prompt
from combiner.application.services.combination_tables import ICON_MAPPINGS, PLACEHOLDER_GLYPH, glyphs_for_domains
from combiner.domain.models.classification import DomainTag
from combiner.domain.services.domain_classifier import classify_domain


_ASCII_WORD_RE = re.compile(r"[A-Za-z0-9]")
_MAX_GLYPH_CHARS = 8
_MIN_PARTIAL_LENGTH = 3


def _clean_glyph(raw: str) -> str | None:
    token = str(raw or "").strip().split()
    if not token:
        return None
    candidate = token[0]
    if len(candidate) > _MAX_GLYPH_CHARS or _ASCII_WORD_RE.search(candidate):
        return None
    return candidate


class IconResolver:
    """Best-effort glyph lookup for a finished word. Never raises."""

    def __init__(self, text_client=None, store=None, rng: random.Random | None = None, temperature: float = 0.3) -> None:
        self.text_client = text_client
        self.store = store
        self.temperature = temperature
        self._rng = rng or random.Random()
        self._cache: dict[str, str] = {}
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def static_icon(word: str) -> str | None:
        if word in ICON_MAPPINGS:
            return ICON_MAPPINGS[word]
        lowered = word.lower()
        if len(lowered) < _MIN_PARTIAL_LENGTH:
            return None
        for key, glyph in ICON_MAPPINGS.items():
            key_lower = key.lower()
            if len(key_lower) < _MIN_PARTIAL_LENGTH:
                continue
            if key_lower in lowered or lowered in key_lower:
                return glyph
        return None

    def _domain_icon(self, word: str) -> str | None:
        domain = classify_domain(word)
        if domain == DomainTag.UNKNOWN:
            return None
        return self._rng.choice(glyphs_for_domains(domain, domain))

    def _stored_icon(self, word: str) -> str | None:
        if self.store is None:
            return None
        try:
            payload = self.store.get(f"icon:{word}")
        except Exception:
            self._logger.warning("Icon cache read failed", exc_info=True)
            return None
        if not payload:
            return None
        return _clean_glyph(str(payload.get("icon", "")))

    def _remember(self, word: str, icon: str, *, persist: bool) -> str:
        self._cache[word] = icon
        if persist and self.store is not None:
            try:
                self.store.set(f"icon:{word}", {"icon": icon})
            except Exception:
                self._logger.warning("Icon cache write failed", exc_info=True)
        return icon

    async def _generated_icon(self, word: str) -> str | None:
        if self.text_client is None:
            return None
        raw = await self.text_client.complete(
            system=ICON_SYSTEM_PROMPT,
            prompt=icon_prompt(word),
            temperature=self.temperature,
            max_tokens=4,
            model=getattr(self.text_client, "lookup_model", None),
        )
        return _clean_glyph(raw)

    async def resolve(self, word: str) -> str:
        word = str(word or "").strip()
        if not word:
            return PLACEHOLDER_GLYPH
        if word in self._cache:
            return self._cache[word]

        try:
            icon = self.static_icon(word) or self._domain_icon(word)
            if icon:
                return self._remember(word, icon, persist=False)

            icon = self._stored_icon(word)
            if icon:
                return self._remember(word, icon, persist=False)

            icon = await self._generated_icon(word)
            if icon:
                return self._remember(word, icon, persist=True)
        except Exception as exc:
            self._logger.warning("Icon lookup failed; using placeholder", extra={"word": word, "error": str(exc)})

        return PLACEHOLDER_GLYPH
