"""Application service composing the event hub, state cache and changes view.

This layer constructs one hub, one repository manager and one changes-view
cache per session and wires them together so UIs never build them by hand.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, final

from gitnova.config import settings
from gitnova.features.events import EventHub
from gitnova.features.state import (
    LOCAL_BRANCHES_KEY,
    REMOTE_BRANCHES_KEY,
    REMOTES_KEY,
    ChangesViewCache,
    Clock,
    GitGatewayPort,
    RefreshDomain,
    RepositoryManager,
    TimerFactory,
)
from gitnova.platform.git import GitCliGateway
from gitnova.platform.logging import logger
from gitnova.shared import Branch, Remote, RepositoryState, StatusSnapshot


@dataclass(frozen=True)
class StateServices:
    """Collaborators sharing one event hub.

    Attributes:
        hub: Event hub every component publishes to.
        gateway: Backend used by both caches.
        manager: Repository-wide state cache.
        changes: Short-lived status cache behind the changes view.
    """

    hub: EventHub
    gateway: GitGatewayPort
    manager: RepositoryManager
    changes: ChangesViewCache

    def dispose(self) -> None:
        self.changes.dispose()
        self.manager.dispose()
        self.hub.dispose()


def build_state_services(
    *,
    gateway: GitGatewayPort | None = None,
    hub: EventHub | None = None,
    auto_refresh: bool | None = None,
    clock: Clock | None = None,
    timer_factory: TimerFactory | None = None,
) -> StateServices:
    """Construct and wire the caches around a single hub and gateway.

    Args:
        gateway: Backend adapter; defaults to :class:`GitCliGateway`.
        hub: Event hub; a new one is created when omitted.
        auto_refresh: Attach the changes view to repository events. Defaults
            to the configured ``auto_refresh`` setting.
        clock: Monotonic clock override for both caches.
        timer_factory: Timer override for both debouncers.
    """

    gateway = gateway or GitCliGateway()
    hub = hub or EventHub()
    clock = clock or time.monotonic

    manager = RepositoryManager(gateway, hub, clock=clock, timer_factory=timer_factory)
    changes = ChangesViewCache(gateway, hub, clock=clock, timer_factory=timer_factory)

    attach = settings.AUTO_REFRESH if auto_refresh is None else auto_refresh
    if attach:
        changes.attach()
    logger.debug("State services built (auto_refresh=%s)", attach)
    return StateServices(hub=hub, gateway=gateway, manager=manager, changes=changes)


@final
class RepositoryStateService:
    """Use cases the CLI runs against the active repository.

    Staging goes through the gateway and then patches the changes view so
    the next render reflects it without another status read.
    """

    def __init__(
        self,
        *,
        services_factory: Callable[[], StateServices] | None = None,
    ) -> None:
        self._services: StateServices = (services_factory or build_state_services)()

    @property
    def services(self) -> StateServices:
        return self._services

    async def open(self, path: Path, *domains: RefreshDomain) -> RepositoryState:
        """Activate the repository at ``path`` and refresh ``domains`` concurrently."""

        manager = self._services.manager
        state = await manager.set_active_repository(path)
        if domains:
            _ = await asyncio.gather(*(manager.refresh(domain) for domain in domains))
        return manager.get_active_repository() or state

    async def status(self) -> StatusSnapshot:
        return await self._services.changes.get_status()

    async def branches(self) -> tuple[tuple[Branch, ...], tuple[Branch, ...]]:
        manager = self._services.manager
        local = manager.get(LOCAL_BRANCHES_KEY)
        remote = manager.get(REMOTE_BRANCHES_KEY)
        if local is None or remote is None:
            await manager.refresh(RefreshDomain.BRANCHES)
            local = manager.get(LOCAL_BRANCHES_KEY)
            remote = manager.get(REMOTE_BRANCHES_KEY)
        return tuple(local or ()), tuple(remote or ())

    async def remotes(self) -> tuple[Remote, ...]:
        manager = self._services.manager
        remotes = manager.get(REMOTES_KEY)
        if remotes is None:
            await manager.refresh(RefreshDomain.REMOTES)
            remotes = manager.get(REMOTES_KEY)
        return tuple(remotes or ())

    async def stage(self, paths: Sequence[str]) -> StatusSnapshot:
        """Stage ``paths`` and return the optimistically patched status."""

        changes = self._services.changes
        _ = await changes.get_status()
        await self._services.gateway.stage(paths)
        self._apply(paths, changes.after_stage)
        return await changes.get_status()

    async def unstage(self, paths: Sequence[str]) -> StatusSnapshot:
        """Unstage ``paths`` and return the optimistically patched status."""

        changes = self._services.changes
        _ = await changes.get_status()
        await self._services.gateway.unstage(paths)
        self._apply(paths, changes.after_unstage)
        return await changes.get_status()

    def close(self) -> None:
        self._services.dispose()

    def _apply(self, paths: Sequence[str], patch: Callable[[str], bool]) -> None:
        """Patch each path, or drop the view when any path is not a listed entry.

        Directories and pathspecs change entries the snapshot cannot match by
        name, so the next read fetches instead.
        """
        missed = [path for path in paths if not patch(path)]
        if missed:
            logger.debug("No optimistic update for %s; refetching status", ", ".join(missed))
            self._services.changes.invalidate()


__all__ = ["RepositoryStateService", "StateServices", "build_state_services"]
