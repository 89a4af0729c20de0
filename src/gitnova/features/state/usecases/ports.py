"""
Summary: Ports defining the state cache's external dependencies.
Why: Decouple caches from the git backend and the event loop so tests stay deterministic.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from gitnova.shared import Branch, OperationState, Remote, StatusSnapshot

Clock = Callable[[], float]


@runtime_checkable
class GitGatewayPort(Protocol):
    """Port for the backend that queries and mutates a git repository.

    Every coroutine may raise; callers in the cache layer catch failures at
    their refresher boundary.
    """

    async def open_repository(self, path: Path) -> Path:
        """Validate ``path`` and target it; return the repository root."""
        ...

    async def get_status(self) -> StatusSnapshot:
        """Return the current working-tree status."""
        ...

    async def get_current_branch(self) -> Branch | None:
        """Return the checked-out branch, or ``None`` on a detached HEAD."""
        ...

    async def get_local_branches(self) -> list[Branch]:
        """Return local branches."""
        ...

    async def get_remote_branches(self) -> list[Branch]:
        """Return remote-tracking branches."""
        ...

    async def get_remotes(self) -> list[Remote]:
        """Return configured remotes."""
        ...

    async def get_operation_state(self) -> OperationState:
        """Report whether a rebase or merge is in progress."""
        ...

    async def stage(self, paths: Sequence[str]) -> None:
        """Add ``paths`` to the index."""
        ...

    async def unstage(self, paths: Sequence[str]) -> None:
        """Remove ``paths`` from the index, keeping worktree changes."""
        ...


class TimerHandle(Protocol):
    """Cancellable pending callback."""

    def cancel(self) -> None:
        ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]
"""Schedule ``callback`` after ``delay`` seconds and return its handle."""


__all__ = ["Clock", "GitGatewayPort", "TimerFactory", "TimerHandle"]
