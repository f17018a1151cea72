"""Unit tests for ResultCache."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from cinemarathon.services.result_cache import ResultCache
from cinemarathon.shared.errors import ErrorCode, create_source_error
from cinemarathon.shared.result import Failure, Success


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResultCache:
    return ResultCache(default_ttl=60, sweep_interval=30, clock=clock)


class TestResultCache:
    """Test cases for ResultCache."""

    def test_set_and_get(self, cache):
        cache.set("detail:1", {"id": 1})

        assert cache.get("detail:1") == {"id": 1}
        assert cache.get_stats()["hits"] == 1

    def test_miss(self, cache):
        assert cache.get("missing") is None
        assert cache.get_stats()["misses"] == 1

    def test_entry_lives_through_its_ttl(self, cache, clock):
        cache.set("key", "value")

        clock.now += 60
        assert cache.get("key") == "value"

        clock.now += 0.5
        assert cache.get("key") is None
        assert len(cache) == 0

    def test_explicit_ttl_overrides_default(self, cache, clock):
        cache.set("key", "value", ttl=5)

        clock.now += 5.5
        assert cache.get("key") is None

    def test_overwrite_refreshes_entry(self, cache, clock):
        cache.set("key", "old")
        clock.now += 50
        cache.set("key", "new")
        clock.now += 50

        assert cache.get("key") == "new"

    def test_purge_expired(self, cache, clock):
        cache.set("a", 1, ttl=10)
        cache.set("b", 2, ttl=100)
        clock.now += 20

        assert cache.purge_expired() == 1
        assert len(cache) == 1

    def test_clear_resets_stats(self, cache):
        cache.set("a", 1)
        cache.get("a")
        cache.clear()

        assert cache.get_stats() == {"hits": 0, "misses": 0, "size": 0, "hit_rate": 0.0}

    @pytest.mark.parametrize("kwargs", [{"default_ttl": 0}, {"sweep_interval": -1}])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            ResultCache(**kwargs)


class TestFetchThrough:
    """Test cases for ResultCache.fetch_through."""

    async def test_success_is_cached(self, cache):
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            return Success([1, 2, 3])

        first = await cache.fetch_through("popular:page=1", loader)
        second = await cache.fetch_through("popular:page=1", loader)

        assert first == second == Success([1, 2, 3])
        assert calls == 1

    async def test_failure_is_not_cached(self, cache):
        calls = 0
        error = create_source_error("tmdb", "fetch_detail", "down", ErrorCode.NETWORK_ERROR)

        async def loader():
            nonlocal calls
            calls += 1
            return Failure(error)

        assert isinstance(await cache.fetch_through("detail:1", loader), Failure)
        assert isinstance(await cache.fetch_through("detail:1", loader), Failure)
        assert calls == 2
        assert len(cache) == 0

    async def test_expired_entry_is_reloaded(self, cache, clock):
        values = iter(["first", "second"])

        async def loader():
            return Success(next(values))

        await cache.fetch_through("key", loader)
        clock.now += 61

        assert await cache.fetch_through("key", loader) == Success("second")


class TestSweeper:
    """Test cases for the background sweeper."""

    async def test_context_manager_starts_and_stops_sweeper(self):
        cache = ResultCache(default_ttl=60, sweep_interval=0.01)

        async with cache:
            assert cache.sweeper_running

        assert not cache.sweeper_running

    async def test_sweeper_purges_expired_entries(self, clock):
        cache = ResultCache(default_ttl=1, sweep_interval=0.01, clock=clock)
        cache.set("key", "value")
        clock.now += 5

        cache.start_sweeper()
        await asyncio.sleep(0.05)
        await cache.stop_sweeper()

        assert len(cache) == 0

    async def test_stop_without_start_is_noop(self, cache):
        await cache.stop_sweeper()

        assert not cache.sweeper_running


class TestConcurrentAccess:
    """Test cases for access from worker threads and event-loop tasks."""

    def test_worker_threads_never_see_partial_entries(self):
        cache = ResultCache(default_ttl=60)

        def worker(worker_id: int) -> int:
            reads = 0
            for i in range(300):
                key = f"detail:{i % 25}"
                cache.set(key, {"key": key, "payload": (worker_id,) * 8})
                value = cache.get(key)
                if value is not None:
                    assert value["key"] == key
                    assert len(value["payload"]) == 8
                    assert len(set(value["payload"])) == 1
                    reads += 1
                if i % 50 == 0:
                    cache.purge_expired()
            return reads

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(worker, worker_id) for worker_id in range(8)]
            reads = [future.result() for future in futures]

        assert sum(reads) == 8 * 300
        assert len(cache) == 25
        for i in range(25):
            assert cache.get(f"detail:{i}")["key"] == f"detail:{i}"

    async def test_loop_tasks_and_threads_share_the_cache(self):
        cache = ResultCache(default_ttl=60)

        def write_batch(offset: int) -> None:
            for i in range(200):
                cache.set(f"video_search:{offset + i}", (offset, i))

        async def read_batch(offset: int) -> list[tuple[int, int]]:
            found = []
            for i in range(200):
                value = cache.get(f"video_search:{offset + i}")
                if value is not None:
                    assert value == (offset, i)
                    found.append(value)
                await asyncio.sleep(0)
            return found

        results = await asyncio.gather(
            asyncio.to_thread(write_batch, 0),
            asyncio.to_thread(write_batch, 1000),
            read_batch(0),
            read_batch(1000),
            asyncio.to_thread(cache.purge_expired),
        )

        for found, offset in ((results[2], 0), (results[3], 1000)):
            assert all(value[0] == offset for value in found)
        assert len(cache) == 400
        assert cache.get_stats()["size"] == 400
