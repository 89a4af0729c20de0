"""
Summary: Keyed debouncer holding at most one pending timer per key.
Why: Bursts of change signals collapse into one refresh timed from the last signal.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from gitnova.platform.logging import logger

from .ports import TimerFactory, TimerHandle


def loop_timer_factory(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Schedule ``callback`` on the running event loop."""

    return asyncio.get_running_loop().call_later(delay, callback)


@dataclass(slots=True, eq=False)
class _Pending:
    delay: float
    handle: TimerHandle | None = None


class Debouncer:
    """Last-call-wins timers keyed by name."""

    def __init__(self, timer_factory: TimerFactory | None = None) -> None:
        self._timer_factory: TimerFactory = timer_factory or loop_timer_factory
        self._pending: dict[str, _Pending] = {}

    def schedule(self, key: str, delay: float, callback: Callable[[], None]) -> None:
        """(Re)arm the timer for ``key``; an earlier pending timer is cancelled."""

        if delay < 0:
            raise ValueError("delay must not be negative")
        _ = self.cancel(key)

        pending = _Pending(delay=delay)

        def fire() -> None:
            if self._pending.get(key) is not pending:
                return
            del self._pending[key]
            try:
                callback()
            except Exception:
                logger.exception("Scheduled callback for '%s' failed", key)

        self._pending[key] = pending
        pending.handle = self._timer_factory(delay, fire)

    def cancel(self, key: str) -> bool:
        """Cancel the pending timer for ``key``; return whether one existed."""

        pending = self._pending.pop(key, None)
        if pending is None:
            return False
        if pending.handle is not None:
            pending.handle.cancel()
        return True

    def cancel_all(self) -> None:
        for key in list(self._pending):
            _ = self.cancel(key)

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    def pending_keys(self) -> list[str]:
        return list(self._pending)


__all__ = ["Debouncer", "loop_timer_factory"]
