from __future__ import annotations

import json
import logging
import re
from typing import Dict, Mapping

from combiner.application.services.combination_prompts import TRANSLATION_SYSTEM_PROMPT, translation_prompt
from combiner.application.services.combination_tables import DEFAULT_LOCALE, STATIC_TRANSLATIONS, SUPPORTED_LOCALES


_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def identity_translations(word: str) -> Dict[str, str]:
    return {locale: word for locale in SUPPORTED_LOCALES}


def complete_translations(word: str, partial: Mapping[str, object] | None) -> Dict[str, str]:
    """Fill every supported locale, reusing the canonical label where missing."""
    full = identity_translations(word)
    for locale in SUPPORTED_LOCALES:
        if locale == DEFAULT_LOCALE:
            continue
        value = (partial or {}).get(locale)
        if isinstance(value, str) and value.strip():
            full[locale] = value.strip()
    return full


def parse_translation_payload(raw: str) -> Dict[str, str]:
    match = _JSON_OBJECT_RE.search(str(raw or ""))
    if match is None:
        return {}
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return {}
    if not isinstance(parsed, dict):
        return {}
    return {str(key): str(value) for key, value in parsed.items() if isinstance(value, str)}


class TranslationResolver:
    """Best-effort per-locale labels for a finished word. Never raises."""

    def __init__(self, text_client=None, store=None, temperature: float = 0.3) -> None:
        self.text_client = text_client
        self.store = store
        self.temperature = temperature
        self._cache: dict[str, Dict[str, str]] = {}
        self._logger = logging.getLogger(__name__)

    @staticmethod
    def static_translations(word: str) -> Dict[str, str] | None:
        preset = STATIC_TRANSLATIONS.get(str(word or "").strip().lower())
        if preset is None:
            return None
        return complete_translations(word, preset)

    def _stored(self, word: str) -> Dict[str, str] | None:
        if self.store is None:
            return None
        try:
            payload = self.store.get(f"translations:{word}")
        except Exception:
            self._logger.warning("Translation cache read failed", exc_info=True)
            return None
        if not payload:
            return None
        return complete_translations(word, payload)

    def _persist(self, word: str, translations: Dict[str, str]) -> None:
        if self.store is None:
            return
        try:
            self.store.set(f"translations:{word}", dict(translations))
        except Exception:
            self._logger.warning("Translation cache write failed", exc_info=True)

    async def resolve(self, word: str) -> Dict[str, str]:
        word = str(word or "").strip()
        if not word:
            return identity_translations(word)
        if word in self._cache:
            return dict(self._cache[word])

        try:
            translations = self.static_translations(word) or self._stored(word)
            if translations is None and self.text_client is not None:
                raw = await self.text_client.complete(
                    system=TRANSLATION_SYSTEM_PROMPT,
                    prompt=translation_prompt(word),
                    temperature=self.temperature,
                    model=getattr(self.text_client, "lookup_model", None),
                )
                parsed = parse_translation_payload(raw)
                if parsed:
                    translations = complete_translations(word, parsed)
                    self._persist(word, translations)
        except Exception as exc:
            self._logger.warning("Translation lookup failed; reusing canonical label", extra={"word": word, "error": str(exc)})
            return identity_translations(word)

        if translations is None:
            return identity_translations(word)
        self._cache[word] = translations
        return dict(translations)
