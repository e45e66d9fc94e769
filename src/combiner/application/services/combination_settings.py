from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass(frozen=True)
class CombinationSettings:
    rate_limit_max_requests: int = 25
    rate_limit_window_ms: int = 60_000
    cooldown_ms: int = 2_000
    release_delay_s: float = 2.0
    min_word_length: int = 3
    max_word_length: int = 15
    word_temperature: float = 0.8
    word_max_tokens: int = 10
    ledger_max_attempts: int = 3

    def __post_init__(self) -> None:
        # Clamp rather than reject; values usually come from the environment.
        object.__setattr__(self, "rate_limit_max_requests", max(1, int(self.rate_limit_max_requests)))
        object.__setattr__(self, "rate_limit_window_ms", max(1, int(self.rate_limit_window_ms)))
        object.__setattr__(self, "cooldown_ms", max(0, int(self.cooldown_ms)))
        object.__setattr__(self, "release_delay_s", max(0.0, float(self.release_delay_s)))
        object.__setattr__(self, "min_word_length", max(1, int(self.min_word_length)))
        object.__setattr__(self, "max_word_length", max(self.min_word_length, int(self.max_word_length)))
        object.__setattr__(self, "word_temperature", min(2.0, max(0.0, float(self.word_temperature))))
        object.__setattr__(self, "word_max_tokens", max(1, int(self.word_max_tokens)))
        object.__setattr__(self, "ledger_max_attempts", max(1, int(self.ledger_max_attempts)))

    @classmethod
    def from_env(cls) -> "CombinationSettings":
        return cls(
            rate_limit_max_requests=_env_int("COMBINER_RATE_LIMIT_MAX_REQUESTS", 25),
            rate_limit_window_ms=_env_int("COMBINER_RATE_LIMIT_WINDOW_MS", 60_000),
            cooldown_ms=_env_int("COMBINER_COOLDOWN_MS", 2_000),
            release_delay_s=_env_float("COMBINER_RELEASE_DELAY_S", 2.0),
            min_word_length=_env_int("COMBINER_MIN_WORD_LENGTH", 3),
            max_word_length=_env_int("COMBINER_MAX_WORD_LENGTH", 15),
            word_temperature=_env_float("COMBINER_WORD_TEMPERATURE", 0.8),
            word_max_tokens=_env_int("COMBINER_WORD_MAX_TOKENS", 10),
            ledger_max_attempts=_env_int("COMBINER_LEDGER_MAX_ATTEMPTS", 3),
        )
