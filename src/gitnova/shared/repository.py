"""Where: src/gitnova/shared/repository.py
What: Snapshot of the active repository as seen by the state cache.
Why: Consumers receive one immutable value per update instead of live state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .refs import Branch, Remote
from .status import StatusSnapshot


@dataclass(slots=True, frozen=True)
class OperationState:
    """Multi-step git operations currently in progress."""

    is_rebasing: bool = False
    is_merging: bool = False


@dataclass(slots=True, frozen=True)
class RepositoryState:
    """Everything the cache knows about the active repository.

    A new instance replaces the previous one on every update; ``status``
    stays ``None`` until the first successful status refresh.
    """

    path: Path
    name: str
    current_branch: Branch | None = None
    status: StatusSnapshot | None = None
    remotes: tuple[Remote, ...] = field(default_factory=tuple)
    is_dirty: bool = False
    is_rebasing: bool = False
    is_merging: bool = False
    last_updated: float = 0.0


__all__ = ["OperationState", "RepositoryState"]
