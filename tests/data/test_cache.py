"""Tests for the session dataset cache."""

import asyncio

import pytest

from src.data.cache import DatasetCache


class TestDatasetCache:
    async def test_loads_once_and_reuses(self):
        cache = DatasetCache()
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            return {"t1": 1.0}

        first = await cache.get_or_load("income", loader)
        second = await cache.get_or_load("income", loader)

        assert first == second == {"t1": 1.0}
        assert calls == 1
        assert "income" in cache
        assert len(cache) == 1

    async def test_concurrent_callers_share_one_load(self):
        cache = DatasetCache()
        calls = 0
        release = asyncio.Event()

        async def loader():
            nonlocal calls
            calls += 1
            await release.wait()
            return "payload"

        pending = [asyncio.ensure_future(cache.get_or_load("health", loader)) for _ in range(5)]
        await asyncio.sleep(0)
        assert "health" not in cache  # still in flight

        release.set()
        results = await asyncio.gather(*pending)

        assert results == ["payload"] * 5
        assert calls == 1

    async def test_failure_is_not_cached(self):
        cache = DatasetCache()

        async def failing():
            raise RuntimeError("upstream down")

        async def working():
            return "ok"

        with pytest.raises(RuntimeError):
            await cache.get_or_load("value", failing)
        assert "value" not in cache
        assert len(cache) == 0

        assert await cache.get_or_load("value", working) == "ok"

    async def test_keys_are_independent(self):
        cache = DatasetCache()

        async def load_a():
            return "a"

        async def load_b():
            return "b"

        assert await cache.get_or_load("a", load_a) == "a"
        assert await cache.get_or_load("b", load_b) == "b"
        assert len(cache) == 2
