"""Tests for the single-slot collection cache."""

import asyncio

import pytest

from folio.api.services.cache import CollectionCache


class CountingLoader:
    """Loader returning successive versions of a collection."""

    def __init__(self, delay: float = 0.0):
        self.calls = 0
        self.delay = delay

    async def __call__(self) -> list[str]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return [f"v{self.calls}"]


class TestCollectionCache:
    """Tests for CollectionCache."""

    @pytest.mark.asyncio
    async def test_get_loads_once(self) -> None:
        """The loader runs on the first miss only."""
        loader = CountingLoader()
        cache: CollectionCache[str] = CollectionCache(loader, name="tags")

        assert await cache.get() == ["v1"]
        assert await cache.get() == ["v1"]
        assert loader.calls == 1

    @pytest.mark.asyncio
    async def test_concurrent_misses_load_once(self) -> None:
        """Readers racing on an empty cache trigger a single load."""
        loader = CountingLoader(delay=0.01)
        cache: CollectionCache[str] = CollectionCache(loader)

        results = await asyncio.gather(*(cache.get() for _ in range(10)))

        assert loader.calls == 1
        assert all(result == ["v1"] for result in results)

    @pytest.mark.asyncio
    async def test_refresh_reloads_eagerly(self) -> None:
        loader = CountingLoader()
        cache: CollectionCache[str] = CollectionCache(loader)
        await cache.get()

        assert await cache.refresh() == ["v2"]
        assert cache.snapshot == ("v2",)
        assert loader.calls == 2

    @pytest.mark.asyncio
    async def test_failed_refresh_leaves_cache_empty(self) -> None:
        """A failing loader empties the cache so the next read retries."""
        calls = 0

        async def flaky() -> list[str]:
            nonlocal calls
            calls += 1
            if calls == 2:
                raise RuntimeError("database unavailable")
            return ["tag"]

        cache: CollectionCache[str] = CollectionCache(flaky)
        await cache.get()

        with pytest.raises(RuntimeError):
            await cache.refresh()
        assert cache.snapshot == ()

        assert await cache.get() == ["tag"]
        assert calls == 3

    @pytest.mark.asyncio
    async def test_returned_list_is_a_copy(self) -> None:
        cache: CollectionCache[str] = CollectionCache(CountingLoader())
        result = await cache.get()
        result.append("mutated")
        assert await cache.get() == ["v1"]

    @pytest.mark.asyncio
    async def test_clear(self) -> None:
        loader = CountingLoader()
        cache: CollectionCache[str] = CollectionCache(loader)
        await cache.get()
        cache.clear()
        assert await cache.get() == ["v2"]
