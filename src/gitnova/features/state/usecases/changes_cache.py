"""
Summary: Short-lived status cache behind the changes view with optimistic patches.
Why: Staging clicks update the view immediately instead of waiting for a full status read.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from enum import Enum
from typing import final

from gitnova.config import settings
from gitnova.features.events import (
    BranchSwitched,
    CacheInvalidated,
    CacheUpdated,
    CommitCreated,
    Event,
    EventHub,
    MergeCompleted,
    PullCompleted,
    RebaseCompleted,
    RepositoryChanged,
    RepositoryDetected,
    StashApplied,
    StashCreated,
    StashDropped,
    Subscription,
)
from gitnova.platform.logging import logger
from gitnova.shared import FileStatus, StatusFile, StatusSnapshot

from .debounce import Debouncer
from .ports import Clock, GitGatewayPort, TimerFactory
from .ttl_cache import CacheEntry

CHANGES_STATUS_KEY = "changes.status"

_Transition = Callable[[StatusFile], tuple[StatusFile, ...]]

# Repository events after which the view schedules a debounced refresh.
REFRESH_TRIGGERS: tuple[type[Event], ...] = (
    CommitCreated,
    RepositoryChanged,
    StashCreated,
    StashApplied,
    StashDropped,
    BranchSwitched,
    MergeCompleted,
    PullCompleted,
    RebaseCompleted,
)


class SlotState(str, Enum):
    EMPTY = "empty"
    IN_FLIGHT = "in_flight"
    FRESH = "fresh"
    STALE = "stale"


def staged(file: StatusFile) -> StatusFile:
    """Predict ``file`` after ``git add``."""

    if file.is_untracked:
        return file.with_statuses(index_status=FileStatus.ADDED, worktree_status=FileStatus.UNMODIFIED)
    if file.is_conflicted:
        return file.with_statuses(index_status=FileStatus.MODIFIED, worktree_status=FileStatus.UNMODIFIED)
    if file.worktree_status is FileStatus.DELETED:
        return file.with_statuses(index_status=FileStatus.DELETED, worktree_status=FileStatus.UNMODIFIED)
    if file.index_status is FileStatus.UNMODIFIED:
        return file.with_statuses(index_status=FileStatus.MODIFIED, worktree_status=FileStatus.UNMODIFIED)
    return file.with_statuses(worktree_status=FileStatus.UNMODIFIED)


def unstaged(file: StatusFile) -> StatusFile | None:
    """Predict ``file`` after ``git reset``; ``None`` when it would no longer be listed."""

    index = file.index_status
    if index in (FileStatus.UNMODIFIED, FileStatus.UNTRACKED):
        return file
    if index in (FileStatus.ADDED, FileStatus.RENAMED, FileStatus.COPIED):
        if index is FileStatus.ADDED and file.worktree_status is FileStatus.DELETED:
            return None
        return StatusFile(file.path, FileStatus.UNTRACKED, FileStatus.UNTRACKED)

    worktree = file.worktree_status
    if worktree is FileStatus.UNMODIFIED:
        worktree = index if index in (FileStatus.MODIFIED, FileStatus.DELETED) else FileStatus.MODIFIED
    return file.with_statuses(index_status=FileStatus.UNMODIFIED, worktree_status=worktree)


def unstaged_files(file: StatusFile) -> tuple[StatusFile, ...]:
    """Entries listed for ``file`` after ``git reset``.

    A renamed entry splits in two: the new path is untracked and the source
    shows as deleted in the worktree.
    """
    result = unstaged(file)
    if result is None:
        return ()
    if file.index_status is FileStatus.RENAMED and file.original_path:
        return (result, StatusFile(file.original_path, worktree_status=FileStatus.DELETED))
    return (result,)


@final
class ChangesViewCache:
    """One-slot status cache with single-flight fetches and local patching.

    A fetch that finishes after :meth:`invalidate` still writes its result;
    only :meth:`reset` (a repository switch) discards in-flight results.
    """

    def __init__(
        self,
        gateway: GitGatewayPort,
        hub: EventHub,
        *,
        ttl: float | None = None,
        debounce: float | None = None,
        clock: Clock = time.monotonic,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self._gateway = gateway
        self._hub = hub
        self._ttl = settings.STATUS_VIEW_TTL_SECONDS if ttl is None else ttl
        self._debounce = settings.REFRESH_DEBOUNCE_SECONDS if debounce is None else debounce
        if self._ttl <= 0:
            raise ValueError("ttl must be positive")
        if self._debounce < 0:
            raise ValueError("debounce must not be negative")
        self._clock = clock
        self._debouncer = Debouncer(timer_factory)
        self._entry: CacheEntry[StatusSnapshot] | None = None
        self._pending: asyncio.Task[StatusSnapshot] | None = None
        self._epoch = 0
        self._subscriptions: list[Subscription] = []
        self._reset_subscription: Subscription | None = hub.subscribe(
            RepositoryDetected, self._on_repository_detected
        )

    @property
    def state(self) -> SlotState:
        if self._pending is not None and not self._pending.done():
            return SlotState.IN_FLIGHT
        if self._entry is None:
            return SlotState.EMPTY
        if self._entry.is_expired(self._clock()):
            return SlotState.STALE
        return SlotState.FRESH

    def peek(self) -> StatusSnapshot | None:
        """Return the snapshot if it is still fresh, without fetching."""

        entry = self._entry
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry.value

    async def get_status(self) -> StatusSnapshot:
        """Return the cached snapshot, fetching once for all concurrent callers when stale.

        Raises:
            Exception: Whatever the gateway raised when no fresh snapshot exists.
        """
        entry = self._entry
        if entry is not None and not entry.is_expired(self._clock()):
            logger.debug("Cache hit", extra={"cache_event": "cache.hit", "cache_key": CHANGES_STATUS_KEY})
            return entry.value

        if self._pending is None or self._pending.done():
            logger.debug("Cache miss", extra={"cache_event": "cache.miss", "cache_key": CHANGES_STATUS_KEY})
            self._pending = asyncio.ensure_future(self._fetch(self._epoch))
        return await asyncio.shield(self._pending)

    def after_stage(self, path: str) -> bool:
        """Patch the snapshot as if ``path`` had just been staged.

        Returns:
            bool: ``False`` when there is no snapshot or ``path`` is not in it.
        """
        return self._patch(path, lambda file: (staged(file),))

    def after_unstage(self, path: str) -> bool:
        """Patch the snapshot as if ``path`` had just been unstaged."""

        return self._patch(path, unstaged_files)

    def invalidate(self) -> None:
        """Drop the snapshot so the next read fetches; an in-flight fetch keeps running."""

        self._entry = None
        self._pending = None
        logger.debug(
            "Invalidated changes view",
            extra={"cache_event": "cache.invalidate", "cache_key": CHANGES_STATUS_KEY},
        )
        self._hub.emit(CacheInvalidated(key=CHANGES_STATUS_KEY))

    def reset(self) -> None:
        """Invalidate and discard results of fetches started before this call."""

        self._epoch += 1
        _ = self._debouncer.cancel(CHANGES_STATUS_KEY)
        self.invalidate()

    def schedule_refresh(self, delay: float | None = None) -> None:
        """Invalidate after ``delay`` seconds of quiet; each call restarts the wait."""

        wait = self._debounce if delay is None else delay
        self._debouncer.schedule(CHANGES_STATUS_KEY, wait, self.invalidate)
        logger.debug(
            "Scheduled refresh",
            extra={"cache_event": "refresh.scheduled", "cache_key": CHANGES_STATUS_KEY, "delay_seconds": wait},
        )

    def cancel_refresh(self) -> bool:
        return self._debouncer.cancel(CHANGES_STATUS_KEY)

    def has_pending_refresh(self) -> bool:
        return self._debouncer.is_pending(CHANGES_STATUS_KEY)

    def attach(self) -> None:
        """Debounce a refresh after repository events.

        Repository switches reset the view from construction on, attached or not.
        """
        if self._subscriptions:
            return
        for event_type in REFRESH_TRIGGERS:
            self._subscriptions.append(self._hub.subscribe(event_type, self._on_repository_event))
        logger.debug("Changes view attached to %d event type(s)", len(self._subscriptions))

    def dispose(self) -> None:
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()
        if self._reset_subscription is not None:
            self._reset_subscription.dispose()
            self._reset_subscription = None
        self._debouncer.cancel_all()

    def _on_repository_detected(self, _event: RepositoryDetected) -> None:
        self.reset()

    def _on_repository_event(self, _event: Event) -> None:
        self.schedule_refresh()

    async def _fetch(self, epoch: int) -> StatusSnapshot:
        task = asyncio.current_task()
        started = self._clock()
        logger.debug("Fetching status", extra={"cache_event": "refresh.start", "cache_key": CHANGES_STATUS_KEY})
        try:
            status = await self._gateway.get_status()
        except Exception as exc:
            logger.error(
                "Failed to fetch status: %s",
                exc,
                extra={"cache_event": "refresh.error", "cache_key": CHANGES_STATUS_KEY},
            )
            raise
        finally:
            if self._pending is task:
                self._pending = None

        if epoch != self._epoch:
            logger.debug("Discarding status fetched for a previous repository")
            return status

        self._store(status)
        logger.debug(
            "Fetched status",
            extra={
                "cache_event": "refresh.complete",
                "cache_key": CHANGES_STATUS_KEY,
                "duration_ms": (self._clock() - started) * 1000,
            },
        )
        return status

    def _store(self, snapshot: StatusSnapshot) -> None:
        self._entry = CacheEntry(value=snapshot, created_at=self._clock(), ttl=self._ttl)
        logger.debug("Cached value", extra={"cache_event": "cache.write", "cache_key": CHANGES_STATUS_KEY})
        self._hub.emit(CacheUpdated(key=CHANGES_STATUS_KEY))

    def _patch(self, path: str, transition: _Transition) -> bool:
        entry = self._entry
        if entry is None:
            logger.debug("No status snapshot to patch for %s", path)
            return False

        snapshot = entry.value
        current = snapshot.find(path)
        if current is None:
            logger.debug("Path not in status snapshot: %s", path)
            return False

        updated = transition(current)
        replaced = {file.path for file in updated}
        files: list[StatusFile] = []
        for file in snapshot.files:
            if file.path == path:
                files.extend(updated)
            elif file.path not in replaced:
                files.append(file)
        patched = StatusSnapshot.from_files(files)
        # Patches apply to an expired snapshot too and restart its lifetime.
        self._store(patched)
        return True


__all__ = [
    "CHANGES_STATUS_KEY",
    "ChangesViewCache",
    "REFRESH_TRIGGERS",
    "SlotState",
    "staged",
    "unstaged",
    "unstaged_files",
]
