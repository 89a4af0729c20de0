"""
Summary: Closed set of repository events, each payload class bound to one tag.
Why: Handlers subscribe by payload class so a tag can never carry a foreign payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar

from gitnova.shared import RepositoryState


class EventType(str, Enum):
    """Wire-stable tags naming every event the hub can carry."""

    REPOSITORY_CHANGED = "repository.changed"
    REPOSITORY_DETECTED = "repository.detected"

    CACHE_INVALIDATED = "cache.invalidated"
    CACHE_UPDATED = "cache.updated"

    BRANCH_CREATED = "branch.created"
    BRANCH_DELETED = "branch.deleted"
    BRANCH_SWITCHED = "branch.switched"

    COMMIT_CREATED = "commit.created"
    COMMIT_AMENDED = "commit.amended"

    STASH_CREATED = "stash.created"
    STASH_APPLIED = "stash.applied"
    STASH_DROPPED = "stash.dropped"

    DIFF_CHANGED = "diff.changed"

    REBASE_STARTED = "rebase.started"
    REBASE_COMPLETED = "rebase.completed"
    REBASE_ABORTED = "rebase.aborted"

    MERGE_STARTED = "merge.started"
    MERGE_COMPLETED = "merge.completed"
    MERGE_CONFLICT = "merge.conflict"

    REMOTE_UPDATED = "remote.updated"
    PUSH_COMPLETED = "push.completed"
    PULL_COMPLETED = "pull.completed"

    ERROR_OCCURRED = "error.occurred"


@dataclass(slots=True, frozen=True)
class Event:
    """Base class for hub payloads; concrete subclasses set ``TAG``."""

    TAG: ClassVar[EventType]


# Repository lifecycle ---------------------------------------------------------


@dataclass(slots=True, frozen=True)
class RepositoryDetected(Event):
    TAG: ClassVar[EventType] = EventType.REPOSITORY_DETECTED

    path: Path
    name: str


@dataclass(slots=True, frozen=True)
class RepositoryChanged(Event):
    """Emitted after every status refresh attempt.

    ``succeeded`` is False when the refresh failed and ``repository`` still
    carries the previous status; receiving the event only means the state
    may have changed.
    """

    TAG: ClassVar[EventType] = EventType.REPOSITORY_CHANGED

    repository: RepositoryState
    succeeded: bool = True


# Cache ------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class CacheInvalidated(Event):
    """``key`` is the cache key or the pattern text that was cleared."""

    TAG: ClassVar[EventType] = EventType.CACHE_INVALIDATED

    key: str
    removed: tuple[str, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class CacheUpdated(Event):
    TAG: ClassVar[EventType] = EventType.CACHE_UPDATED

    key: str


# Branches ---------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class BranchCreated(Event):
    TAG: ClassVar[EventType] = EventType.BRANCH_CREATED

    branch: str


@dataclass(slots=True, frozen=True)
class BranchDeleted(Event):
    TAG: ClassVar[EventType] = EventType.BRANCH_DELETED

    branch: str


@dataclass(slots=True, frozen=True)
class BranchSwitched(Event):
    TAG: ClassVar[EventType] = EventType.BRANCH_SWITCHED

    branch: str
    previous: str | None = None


# Commits ----------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class CommitCreated(Event):
    TAG: ClassVar[EventType] = EventType.COMMIT_CREATED

    commit: str
    message: str = ""


@dataclass(slots=True, frozen=True)
class CommitAmended(Event):
    TAG: ClassVar[EventType] = EventType.COMMIT_AMENDED

    commit: str
    message: str = ""


# Stashes ----------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class StashCreated(Event):
    TAG: ClassVar[EventType] = EventType.STASH_CREATED

    stash: str


@dataclass(slots=True, frozen=True)
class StashApplied(Event):
    TAG: ClassVar[EventType] = EventType.STASH_APPLIED

    stash: str
    dropped: bool = False


@dataclass(slots=True, frozen=True)
class StashDropped(Event):
    TAG: ClassVar[EventType] = EventType.STASH_DROPPED

    stash: str


# Diffs ------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class DiffChanged(Event):
    TAG: ClassVar[EventType] = EventType.DIFF_CHANGED

    paths: tuple[str, ...] = field(default_factory=tuple)


# Rebase / merge ---------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class RebaseStarted(Event):
    TAG: ClassVar[EventType] = EventType.REBASE_STARTED

    onto: str


@dataclass(slots=True, frozen=True)
class RebaseCompleted(Event):
    TAG: ClassVar[EventType] = EventType.REBASE_COMPLETED

    onto: str


@dataclass(slots=True, frozen=True)
class RebaseAborted(Event):
    TAG: ClassVar[EventType] = EventType.REBASE_ABORTED

    onto: str | None = None


@dataclass(slots=True, frozen=True)
class MergeStarted(Event):
    TAG: ClassVar[EventType] = EventType.MERGE_STARTED

    source: str


@dataclass(slots=True, frozen=True)
class MergeCompleted(Event):
    TAG: ClassVar[EventType] = EventType.MERGE_COMPLETED

    source: str


@dataclass(slots=True, frozen=True)
class MergeConflict(Event):
    TAG: ClassVar[EventType] = EventType.MERGE_CONFLICT

    source: str
    conflicted_paths: tuple[str, ...] = field(default_factory=tuple)


# Remotes ----------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class RemoteUpdated(Event):
    TAG: ClassVar[EventType] = EventType.REMOTE_UPDATED

    remote: str


@dataclass(slots=True, frozen=True)
class PushCompleted(Event):
    TAG: ClassVar[EventType] = EventType.PUSH_COMPLETED

    remote: str
    branch: str


@dataclass(slots=True, frozen=True)
class PullCompleted(Event):
    TAG: ClassVar[EventType] = EventType.PULL_COMPLETED

    remote: str
    branch: str


# Errors -----------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class ErrorOccurred(Event):
    """A background operation failed; ``source`` names the failing domain."""

    TAG: ClassVar[EventType] = EventType.ERROR_OCCURRED

    source: str
    message: str


__all__ = [
    "BranchCreated",
    "BranchDeleted",
    "BranchSwitched",
    "CacheInvalidated",
    "CacheUpdated",
    "CommitAmended",
    "CommitCreated",
    "DiffChanged",
    "ErrorOccurred",
    "Event",
    "EventType",
    "MergeCompleted",
    "MergeConflict",
    "MergeStarted",
    "PullCompleted",
    "PushCompleted",
    "RebaseAborted",
    "RebaseCompleted",
    "RebaseStarted",
    "RemoteUpdated",
    "RepositoryChanged",
    "RepositoryDetected",
    "StashApplied",
    "StashCreated",
    "StashDropped",
]
