"""Single-slot cache for small collections such as tags and topics.

The whole collection is held as an immutable tuple and swapped in one
assignment, so readers see either the previous list or the new one.
Population runs under an ``asyncio.Lock``; concurrent misses trigger one
load, not one per request.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectionCache(Generic[T]):
    """Whole-collection cache refreshed eagerly after every write."""

    def __init__(self, loader: Callable[[], Awaitable[list[T]]], name: str = "collection"):
        """Initialize cache.

        Args:
            loader: Coroutine function returning the full collection
            name: Label used in log messages
        """
        self._loader = loader
        self._name = name
        self._snapshot: tuple[T, ...] = ()
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> tuple[T, ...]:
        return self._snapshot

    async def get(self) -> list[T]:
        """Serve the cached collection, loading it if the cache is empty."""
        snapshot = self._snapshot
        if snapshot:
            return list(snapshot)

        async with self._lock:
            # Another task may have loaded it while we waited
            if not self._snapshot:
                self._snapshot = tuple(await self._loader())
                logger.debug(f"{self._name} cache loaded ({len(self._snapshot)} items)")
            return list(self._snapshot)

    async def refresh(self) -> list[T]:
        """Drop the cached collection and load it again immediately.

        If loading fails the cache stays empty and the next ``get`` retries.
        """
        async with self._lock:
            self._snapshot = ()
            self._snapshot = tuple(await self._loader())
            logger.debug(f"{self._name} cache refreshed ({len(self._snapshot)} items)")
            return list(self._snapshot)

    def clear(self) -> None:
        self._snapshot = ()
