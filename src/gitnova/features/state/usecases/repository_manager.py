"""
Summary: State cache owning the active repository and its domain refreshers.
Why: Many consumers read one bounded-staleness view of a slow, shell-backed repository.
"""

from __future__ import annotations

import asyncio
import re
import time
from collections.abc import Awaitable, Callable
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Any, final

from gitnova.config import settings
from gitnova.features.events import (
    CacheInvalidated,
    CacheUpdated,
    ErrorOccurred,
    EventHub,
    RepositoryChanged,
    RepositoryDetected,
)
from gitnova.platform.logging import logger
from gitnova.shared import Branch, OperationState, RepositoryState

from .debounce import Debouncer
from .ports import Clock, GitGatewayPort, TimerFactory
from .single_flight import SingleFlight
from .ttl_cache import CacheEntry, TtlCache


class RefreshDomain(str, Enum):
    """Independently refreshable categories of repository data."""

    STATUS = "status"
    BRANCHES = "branches"
    REMOTES = "remotes"


STATUS_KEY = "status"
CURRENT_BRANCH_KEY = "current_branch"
LOCAL_BRANCHES_KEY = "local_branches"
REMOTE_BRANCHES_KEY = "remote_branches"
REMOTES_KEY = "remotes"


class RepositoryActivationError(RuntimeError):
    """Raised when a path cannot become the active repository."""


@final
class RepositoryManager:
    """TTL cache plus status, branches and remotes refreshers for one repository.

    Refresh failures are logged and leave earlier cache entries untouched;
    they never propagate to callers. Results of a refresh started before a
    repository switch are discarded.
    """

    def __init__(
        self,
        gateway: GitGatewayPort,
        hub: EventHub,
        *,
        default_ttl: float | None = None,
        clock: Clock = time.monotonic,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self._gateway = gateway
        self._hub = hub
        self._clock = clock
        self._cache = TtlCache(
            default_ttl=settings.DEFAULT_CACHE_TTL_SECONDS if default_ttl is None else default_ttl,
            clock=clock,
        )
        self._flights: SingleFlight[None] = SingleFlight()
        self._debouncer = Debouncer(timer_factory)
        self._background: set[asyncio.Task[None]] = set()
        self._state: RepositoryState | None = None
        self._generation = 0

    # Repository identity ---------------------------------------------------------

    async def set_active_repository(self, path: Path | str) -> RepositoryState:
        """Validate ``path`` and make it the active repository.

        Clears every cache entry and emits ``RepositoryDetected``.

        Raises:
            RepositoryActivationError: If the backend rejects the path. The
                previous repository stays active in that case.
        """
        requested = Path(path)
        logger.info("Setting active repository: %s", requested)
        try:
            root = await self._gateway.open_repository(requested)
        except Exception as exc:
            logger.error("Failed to set active repository %s: %s", requested, exc)
            raise RepositoryActivationError(f"Failed to set active repository: {requested}") from exc

        name = root.name or str(root)
        self._generation += 1
        self._state = RepositoryState(path=root, name=name, last_updated=self._clock())
        self._cache.clear()
        self._flights.forget_all()

        logger.info("Active repository set: %s", name, extra={"repository": str(root)})
        self._hub.emit(RepositoryDetected(path=root, name=name))
        return self._state

    def get_active_repository(self) -> RepositoryState | None:
        return self._state

    def get_current_branch(self) -> Branch | None:
        return None if self._state is None else self._state.current_branch

    def is_dirty(self) -> bool:
        return self._state is not None and self._state.is_dirty

    def is_rebasing(self) -> bool:
        return self._state is not None and self._state.is_rebasing

    def is_merging(self) -> bool:
        return self._state is not None and self._state.is_merging

    # Cache access -------------------------------------------------------------------

    def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` when absent or expired.

        ``None`` means "unknown"; it never stands for an empty result.
        """
        return self._cache.get(key)

    def get_entry(self, key: str) -> CacheEntry[Any] | None:
        return self._cache.get_entry(key)

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Overwrite ``key`` with a fresh entry and broadcast the write."""

        _ = self._cache.set(key, value, ttl)
        self._hub.emit(CacheUpdated(key=key))

    def invalidate(self, key: str | re.Pattern[str]) -> list[str]:
        """Remove ``key``, or every key ``key`` matches when it is a compiled pattern.

        Always emits ``CacheInvalidated``, even when nothing matched.

        Returns:
            list[str]: Keys that were removed.
        """
        if isinstance(key, re.Pattern):
            label = key.pattern
            removed = self._cache.delete_matching(key)
        else:
            label = key
            removed = [key] if self._cache.delete(key) else []

        logger.debug(
            "Invalidated %d key(s)",
            len(removed),
            extra={"cache_event": "cache.invalidate", "cache_key": label},
        )
        self._hub.emit(CacheInvalidated(key=label, removed=tuple(removed)))
        return removed

    # Refresh ------------------------------------------------------------------------

    async def refresh(self, key: str | RefreshDomain | None = None) -> None:
        """Refresh one domain, or all three concurrently when ``key`` is omitted.

        A refresh requested while the same domain is already refreshing
        awaits that refresh instead of starting another backend call.
        """
        if key is None:
            _ = await asyncio.gather(*(self._refresh_domain(domain) for domain in RefreshDomain))
            return

        try:
            domain = RefreshDomain(key)
        except ValueError:
            logger.warning("Ignoring refresh for unknown key: %s", key)
            return
        await self._refresh_domain(domain)

    def schedule_refresh(self, key: str, delay: float) -> None:
        """Refresh ``key`` after ``delay`` seconds; a later call for the same key replaces this one."""

        self._debouncer.schedule(key, delay, lambda: self._spawn_refresh(key))
        logger.debug(
            "Scheduled refresh",
            extra={"cache_event": "refresh.scheduled", "cache_key": key, "delay_seconds": delay},
        )

    def cancel_refresh(self, key: str) -> bool:
        """Cancel a scheduled refresh; a refresh already running is not interrupted."""

        cancelled = self._debouncer.cancel(key)
        if cancelled:
            logger.debug("Cancelled refresh for key: %s", key)
        return cancelled

    def has_pending_refresh(self, key: str) -> bool:
        return self._debouncer.is_pending(key)

    async def drain(self) -> None:
        """Wait for refreshes started by fired timers."""

        while self._background:
            _ = await asyncio.gather(*list(self._background), return_exceptions=True)

    def dispose(self) -> None:
        logger.info("Repository manager disposing")
        self._debouncer.cancel_all()
        self._flights.forget_all()
        self._cache.clear()
        self._generation += 1
        self._state = None

    # Internals ----------------------------------------------------------------------

    def _spawn_refresh(self, key: str) -> None:
        task = asyncio.ensure_future(self._run_scheduled(key))
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _run_scheduled(self, key: str) -> None:
        try:
            await self.refresh(key)
        except Exception:
            logger.exception("Scheduled refresh for '%s' failed", key)

    async def _refresh_domain(self, domain: RefreshDomain) -> None:
        refreshers: dict[RefreshDomain, Callable[[int], Awaitable[None]]] = {
            RefreshDomain.STATUS: self._refresh_status,
            RefreshDomain.BRANCHES: self._refresh_branches,
            RefreshDomain.REMOTES: self._refresh_remotes,
        }
        if self._state is None:
            logger.debug("No active repository; skipping %s refresh", domain.value)
            return

        generation = self._generation
        await self._flights.run(domain.value, lambda: refreshers[domain](generation))

    def _is_current(self, generation: int) -> bool:
        return self._state is not None and generation == self._generation

    def _store(self, key: str, value: Any) -> None:
        _ = self._cache.set(key, value)
        self._hub.emit(CacheUpdated(key=key))

    def _report_failure(self, domain: RefreshDomain, exc: BaseException, generation: int) -> None:
        logger.error(
            "Failed to refresh %s: %s",
            domain.value,
            exc,
            extra={"cache_event": "refresh.error", "cache_key": domain.value},
        )
        if self._is_current(generation):
            self._hub.emit(ErrorOccurred(source=domain.value, message=str(exc)))

    def _log_complete(self, domain: RefreshDomain, started: float) -> None:
        logger.debug(
            "Refreshed %s",
            domain.value,
            extra={
                "cache_event": "refresh.complete",
                "cache_key": domain.value,
                "duration_ms": (self._clock() - started) * 1000,
            },
        )

    async def _refresh_status(self, generation: int) -> None:
        started = self._clock()
        status_result, branch_result, operation_result = await asyncio.gather(
            self._gateway.get_status(),
            self._gateway.get_current_branch(),
            self._gateway.get_operation_state(),
            return_exceptions=True,
        )

        if isinstance(status_result, BaseException):
            self._report_failure(RefreshDomain.STATUS, status_result, generation)
            if self._is_current(generation):
                assert self._state is not None
                self._hub.emit(RepositoryChanged(repository=self._state, succeeded=False))
            return

        if not self._is_current(generation):
            logger.debug("Discarding status fetched for a previous repository")
            return
        assert self._state is not None

        current_branch = self._state.current_branch
        if isinstance(branch_result, BaseException):
            logger.warning("Could not resolve current branch: %s", branch_result)
        else:
            current_branch = branch_result

        operation = OperationState(
            is_rebasing=self._state.is_rebasing, is_merging=self._state.is_merging
        )
        if isinstance(operation_result, BaseException):
            logger.warning("Could not read rebase/merge state: %s", operation_result)
        else:
            operation = operation_result

        self._state = replace(
            self._state,
            status=status_result,
            current_branch=current_branch,
            is_dirty=not status_result.is_clean,
            is_rebasing=operation.is_rebasing,
            is_merging=operation.is_merging,
            last_updated=self._clock(),
        )
        self._store(STATUS_KEY, status_result)
        if current_branch is None:
            _ = self._cache.delete(CURRENT_BRANCH_KEY)
        else:
            self._store(CURRENT_BRANCH_KEY, current_branch)

        self._log_complete(RefreshDomain.STATUS, started)
        self._hub.emit(RepositoryChanged(repository=self._state, succeeded=True))

    async def _refresh_branches(self, generation: int) -> None:
        started = self._clock()
        try:
            local_branches, remote_branches = await asyncio.gather(
                self._gateway.get_local_branches(),
                self._gateway.get_remote_branches(),
            )
        except Exception as exc:
            self._report_failure(RefreshDomain.BRANCHES, exc, generation)
            return

        if not self._is_current(generation):
            logger.debug("Discarding branches fetched for a previous repository")
            return
        assert self._state is not None

        self._store(LOCAL_BRANCHES_KEY, tuple(local_branches))
        self._store(REMOTE_BRANCHES_KEY, tuple(remote_branches))

        if self._state.current_branch is None:
            current = next((b for b in local_branches if b.is_current), None)
            if current is not None:
                self._state = replace(self._state, current_branch=current)

        self._log_complete(RefreshDomain.BRANCHES, started)

    async def _refresh_remotes(self, generation: int) -> None:
        started = self._clock()
        try:
            remotes = await self._gateway.get_remotes()
        except Exception as exc:
            self._report_failure(RefreshDomain.REMOTES, exc, generation)
            return

        if not self._is_current(generation):
            logger.debug("Discarding remotes fetched for a previous repository")
            return
        assert self._state is not None

        self._state = replace(self._state, remotes=tuple(remotes))
        self._store(REMOTES_KEY, tuple(remotes))
        self._log_complete(RefreshDomain.REMOTES, started)


__all__ = [
    "CURRENT_BRANCH_KEY",
    "LOCAL_BRANCHES_KEY",
    "REMOTES_KEY",
    "REMOTE_BRANCHES_KEY",
    "RefreshDomain",
    "RepositoryActivationError",
    "RepositoryManager",
    "STATUS_KEY",
]
