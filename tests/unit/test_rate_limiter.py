import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from combiner.application.services.rate_limiter import SlidingWindowRateLimiter


class _ManualClock:
    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class SlidingWindowRateLimiterTests(unittest.TestCase):
    def test_grants_up_to_ceiling_then_denies(self) -> None:
        clock = _ManualClock(1_000)
        limiter = SlidingWindowRateLimiter(max_requests=3, window_ms=60_000, clock=clock)

        grants = [limiter.try_acquire() for _ in range(4)]

        self.assertEqual([True, True, True, False], grants)
        self.assertEqual(0, limiter.remaining())

    def test_old_timestamps_fall_out_of_window(self) -> None:
        clock = _ManualClock(0)
        limiter = SlidingWindowRateLimiter(max_requests=2, window_ms=1_000, clock=clock)
        self.assertTrue(limiter.try_acquire())
        clock.now = 500
        self.assertTrue(limiter.try_acquire())
        self.assertFalse(limiter.try_acquire())

        clock.now = 1_001
        self.assertTrue(limiter.try_acquire())
        self.assertFalse(limiter.try_acquire())

        clock.now = 1_501
        self.assertEqual(1, limiter.remaining())

    def test_denial_does_not_consume_a_slot(self) -> None:
        clock = _ManualClock(0)
        limiter = SlidingWindowRateLimiter(max_requests=1, window_ms=100, clock=clock)
        self.assertTrue(limiter.try_acquire())
        for _ in range(5):
            self.assertFalse(limiter.try_acquire())

        clock.now = 101
        self.assertTrue(limiter.try_acquire())

    def test_ceiling_is_at_least_one(self) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=0, window_ms=0, clock=_ManualClock(0))
        self.assertEqual(1, limiter.max_requests)
        self.assertEqual(1, limiter.window_ms)
        self.assertTrue(limiter.try_acquire())


if __name__ == "__main__":
    unittest.main()
