"""
Summary: Public surface of the repository event hub.
Why: Consumers import events and the hub from one place.
"""

from .domain.events import (
    BranchCreated,
    BranchDeleted,
    BranchSwitched,
    CacheInvalidated,
    CacheUpdated,
    CommitAmended,
    CommitCreated,
    DiffChanged,
    ErrorOccurred,
    Event,
    EventType,
    MergeCompleted,
    MergeConflict,
    MergeStarted,
    PullCompleted,
    PushCompleted,
    RebaseAborted,
    RebaseCompleted,
    RebaseStarted,
    RemoteUpdated,
    RepositoryChanged,
    RepositoryDetected,
    StashApplied,
    StashCreated,
    StashDropped,
)
from .usecases.event_hub import EventHub, Subscription, event_tag

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
    "EventHub",
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
    "Subscription",
    "event_tag",
]
