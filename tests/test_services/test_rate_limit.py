"""Tests for the sliding-window rate limiter."""

import pytest

from nextflix_api.services.base import RateLimitError
from nextflix_api.services.rate_limit import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_allows_requests_up_to_limit() -> None:
    limiter = SlidingWindowRateLimiter(limit=2, window=60, clock=FakeClock())

    limiter.hit("10.0.0.1")
    limiter.hit("10.0.0.1")

    with pytest.raises(RateLimitError) as exc_info:
        limiter.hit("10.0.0.1")

    assert exc_info.value.status_code == 429
    assert exc_info.value.retry_after == 60


def test_window_slides() -> None:
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(limit=2, window=60, clock=clock)

    limiter.hit("client")
    clock.now = 30.0
    limiter.hit("client")

    with pytest.raises(RateLimitError) as exc_info:
        limiter.hit("client")
    assert exc_info.value.retry_after == 30

    clock.now = 60.0
    limiter.hit("client")


def test_clients_are_limited_independently() -> None:
    limiter = SlidingWindowRateLimiter(limit=1, window=60, clock=FakeClock())

    limiter.hit("a")
    limiter.hit("b")

    with pytest.raises(RateLimitError):
        limiter.hit("a")


def test_zero_limit_disables() -> None:
    limiter = SlidingWindowRateLimiter(limit=0, window=60, clock=FakeClock())

    for _ in range(100):
        limiter.hit("client")


def test_reset_forgets_history() -> None:
    limiter = SlidingWindowRateLimiter(limit=1, window=60, clock=FakeClock())
    limiter.hit("client")

    limiter.reset()

    limiter.hit("client")


def test_idle_clients_are_forgotten() -> None:
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(limit=5, window=60, clock=clock)

    for n in range(10_000):
        limiter.hit(f"10.0.{n // 256}.{n % 256}")
    assert len(limiter) == 10_000

    clock.now = 3600.0
    limiter.hit("192.168.0.1")

    assert len(limiter) == 1


def test_active_clients_survive_sweep() -> None:
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(limit=2, window=60, clock=clock)

    limiter.hit("idle")
    clock.now = 30.0
    limiter.hit("active")
    clock.now = 70.0
    limiter.hit("active")

    assert len(limiter) == 1
    with pytest.raises(RateLimitError):
        limiter.hit("active")
