from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class SlidingWindowRateLimiter:
    """Caps permitted calls within a rolling window.

    Denial is immediate; callers fall back instead of waiting. Not safe for
    use from more than one event loop or process.
    """

    def __init__(
        self,
        max_requests: int = 25,
        window_ms: int = 60_000,
        clock: Callable[[], int] = monotonic_ms,
    ) -> None:
        self.max_requests = max(1, int(max_requests))
        self.window_ms = max(1, int(window_ms))
        self._clock = clock
        self._granted: Deque[int] = deque()

    def _purge(self, now: int) -> None:
        cutoff = now - self.window_ms
        while self._granted and self._granted[0] < cutoff:
            self._granted.popleft()

    def try_acquire(self) -> bool:
        now = int(self._clock())
        self._purge(now)
        if len(self._granted) < self.max_requests:
            self._granted.append(now)
            return True
        return False

    def remaining(self) -> int:
        self._purge(int(self._clock()))
        return self.max_requests - len(self._granted)
