from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple

from combiner.domain.models.entity import Entity


def epoch_ms() -> int:
    return int(time.time() * 1000)


class CooldownGuard:
    """Per-entity and global cooldowns plus the one-run-at-a-time lock."""

    def __init__(
        self,
        cooldown_ms: int = 2_000,
        release_delay_s: float = 2.0,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        self.cooldown_ms = max(0, int(cooldown_ms))
        self.release_delay_s = max(0.0, float(release_delay_s))
        self._clock = clock
        self.last_global_combination_at: Optional[int] = None
        self._in_progress = False
        self._release_at: Optional[int] = None
        self._logger = logging.getLogger(__name__)

    @property
    def in_progress(self) -> bool:
        if self._in_progress and self._release_at is not None and self.now() >= self._release_at:
            self.release()
        return self._in_progress

    def now(self) -> int:
        return int(self._clock())

    def _cooling(self, stamp: Optional[int], now: int) -> bool:
        return stamp is not None and now - int(stamp) < self.cooldown_ms

    def can_combine(self, first: Entity, second: Entity) -> bool:
        now = self.now()
        if self._cooling(first.last_combined_at, now):
            return False
        if self._cooling(second.last_combined_at, now):
            return False
        if self._cooling(self.last_global_combination_at, now):
            return False
        return True

    def begin_attempt(self, first: Entity, second: Entity) -> Optional[Tuple[Entity, Entity]]:
        """Take the lock and stamp both entities, or return None to ignore the attempt."""
        if self.in_progress:
            self._logger.debug("Combination ignored: another resolution is in progress")
            return None
        if not self.can_combine(first, second):
            self._logger.debug(
                "Combination ignored: cooldown active",
                extra={"first": first.name, "second": second.name},
            )
            return None

        now = self.now()
        self._in_progress = True
        self._release_at = None
        self.last_global_combination_at = now
        return first.stamped(now), second.stamped(now)

    def release(self) -> None:
        self._in_progress = False
        self._release_at = None

    def release_later(self) -> None:
        """Free the lock once ``release_delay_s`` has elapsed on the guard's clock."""
        delay_ms = int(self.release_delay_s * 1000)
        if delay_ms <= 0:
            self.release()
            return
        self._release_at = self.now() + delay_ms
