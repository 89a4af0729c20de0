"""
Summary: Keyed single-flight coordinator for backend fetches.
Why: Concurrent requesters of one key share a single in-flight call.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Track at most one running task per key.

    Waiters attach through :func:`asyncio.shield`, so a cancelled waiter
    never cancels the shared fetch other callers are awaiting.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task[T]] = {}

    def in_flight(self, key: str) -> bool:
        task = self._tasks.get(key)
        return task is not None and not task.done()

    def keys(self) -> list[str]:
        return [key for key, task in self._tasks.items() if not task.done()]

    def start(self, key: str, factory: Callable[[], Awaitable[T]]) -> asyncio.Task[T]:
        """Return the running task for ``key``, starting ``factory()`` if none is running."""

        task = self._tasks.get(key)
        if task is not None and not task.done():
            return task

        task = asyncio.ensure_future(factory())
        self._tasks[key] = task
        task.add_done_callback(lambda done, key=key: self._release(key, done))
        return task

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """Await the shared result for ``key``."""

        return await asyncio.shield(self.start(key, factory))

    def forget(self, key: str) -> None:
        """Detach ``key`` without cancelling its task; the next request starts anew."""

        _ = self._tasks.pop(key, None)

    def forget_all(self) -> None:
        self._tasks.clear()

    def _release(self, key: str, task: asyncio.Task[T]) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]


__all__ = ["SingleFlight"]
