"""Tests for the response cache."""

import asyncio

import pytest

from nextflix_api.services.cache import ResponseCache, make_cache_key


class FakeClock:
    """Manually advanced time source."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(ttl=300, max_entries=3, clock=clock)


def counting(value: object):
    """Build a compute function that records how often it ran."""
    calls = []

    async def compute() -> object:
        calls.append(1)
        return value

    return compute, calls


class TestCacheKeys:
    """Tests for cache key derivation."""

    def test_key_ignores_argument_order(self) -> None:
        assert make_cache_key("search", query="matrix", page=1) == make_cache_key(
            "search", page=1, query="matrix"
        )

    def test_key_differs_by_parameter(self) -> None:
        assert make_cache_key("search", query="matrix", page=1) != make_cache_key(
            "search", query="matrix", page=2
        )

    def test_key_differs_by_operation(self) -> None:
        assert make_cache_key("popular", page=1) != make_cache_key("trending", page=1)

    def test_key_distinguishes_none_from_missing(self) -> None:
        assert make_cache_key("discover", page=1, year=None) != make_cache_key(
            "discover", page=1
        )

    def test_key_without_parameters(self) -> None:
        assert make_cache_key("genres") == "movies:genres"


class TestGetOrCompute:
    """Tests for read-through behaviour."""

    async def test_miss_computes_once(self, cache: ResponseCache) -> None:
        compute, calls = counting({"page": 1})

        result = await cache.get_or_compute("k", compute)

        assert result == {"page": 1}
        assert len(calls) == 1
        assert "k" in cache

    async def test_hit_returns_stored_value(self, cache: ResponseCache) -> None:
        value = {"page": 1}
        compute, calls = counting(value)

        first = await cache.get_or_compute("k", compute)
        second = await cache.get_or_compute("k", compute)

        assert first is value
        assert second is value
        assert len(calls) == 1
        assert cache.stats().hits == 1
        assert cache.stats().misses == 1

    async def test_entry_expires_after_ttl(self, cache: ResponseCache, clock: FakeClock) -> None:
        compute, calls = counting("value")

        await cache.get_or_compute("k", compute)
        clock.now = 299.0
        await cache.get_or_compute("k", compute)
        assert len(calls) == 1

        clock.now = 300.0
        await cache.get_or_compute("k", compute)
        assert len(calls) == 2

    async def test_failures_are_not_cached(self, cache: ResponseCache) -> None:
        calls = []

        async def flaky() -> str:
            calls.append(1)
            if len(calls) == 1:
                raise ValueError("upstream down")
            return "ok"

        with pytest.raises(ValueError, match="upstream down"):
            await cache.get_or_compute("k", flaky)
        assert "k" not in cache

        assert await cache.get_or_compute("k", flaky) == "ok"
        assert len(calls) == 2

    async def test_concurrent_misses_share_one_computation(self, cache: ResponseCache) -> None:
        release = asyncio.Event()
        calls = []

        async def slow() -> dict:
            calls.append(1)
            await release.wait()
            return {"page": 1}

        tasks = [asyncio.create_task(cache.get_or_compute("k", slow)) for _ in range(5)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks)

        assert len(calls) == 1
        assert all(result is results[0] for result in results)

    async def test_concurrent_failure_reaches_every_waiter(self, cache: ResponseCache) -> None:
        release = asyncio.Event()
        calls = []

        async def failing() -> None:
            calls.append(1)
            await release.wait()
            raise RuntimeError("boom")

        tasks = [asyncio.create_task(cache.get_or_compute("k", failing)) for _ in range(3)]
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert len(calls) == 1
        assert all(isinstance(result, RuntimeError) for result in results)
        assert "k" not in cache

    async def test_waiter_recomputes_when_leader_cancelled(self, cache: ResponseCache) -> None:
        never = asyncio.Event()

        async def slow() -> str:
            await never.wait()
            return "slow"

        async def fast() -> str:
            return "fast"

        leader = asyncio.create_task(cache.get_or_compute("k", slow))
        await asyncio.sleep(0)
        waiter = asyncio.create_task(cache.get_or_compute("k", fast))
        await asyncio.sleep(0)

        leader.cancel()
        with pytest.raises(asyncio.CancelledError):
            await leader

        assert await waiter == "fast"

    async def test_disabled_cache_always_computes(self, clock: FakeClock) -> None:
        cache = ResponseCache(ttl=0, max_entries=10, clock=clock)
        compute, calls = counting("value")

        await cache.get_or_compute("k", compute)
        await cache.get_or_compute("k", compute)

        assert not cache.enabled
        assert len(calls) == 2
        assert len(cache) == 0


class TestEviction:
    """Tests for the entry bound."""

    def test_least_recently_used_evicted(self, cache: ResponseCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        assert cache.get("a") == 1

        cache.set("d", 4)

        assert len(cache) == 3
        assert "b" not in cache
        assert "a" in cache
        assert "d" in cache

    def test_delete_and_clear(self, cache: ResponseCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)

        cache.delete("a")
        assert cache.get("a") is None

        cache.clear()
        assert len(cache) == 0
        assert cache.stats().hits == 0
