"""
Summary: Public surface of the repository state caches.
Why: Services and the CLI wire caches without reaching into usecase modules.
"""

from .usecases.changes_cache import (
    CHANGES_STATUS_KEY,
    REFRESH_TRIGGERS,
    ChangesViewCache,
    SlotState,
    staged,
    unstaged,
    unstaged_files,
)
from .usecases.debounce import Debouncer, loop_timer_factory
from .usecases.ports import Clock, GitGatewayPort, TimerFactory, TimerHandle
from .usecases.repository_manager import (
    CURRENT_BRANCH_KEY,
    LOCAL_BRANCHES_KEY,
    REMOTE_BRANCHES_KEY,
    REMOTES_KEY,
    STATUS_KEY,
    RefreshDomain,
    RepositoryActivationError,
    RepositoryManager,
)
from .usecases.single_flight import SingleFlight
from .usecases.ttl_cache import CacheEntry, TtlCache

__all__ = [
    "CHANGES_STATUS_KEY",
    "CURRENT_BRANCH_KEY",
    "CacheEntry",
    "ChangesViewCache",
    "Clock",
    "Debouncer",
    "GitGatewayPort",
    "LOCAL_BRANCHES_KEY",
    "REFRESH_TRIGGERS",
    "REMOTES_KEY",
    "REMOTE_BRANCHES_KEY",
    "RefreshDomain",
    "RepositoryActivationError",
    "RepositoryManager",
    "STATUS_KEY",
    "SingleFlight",
    "SlotState",
    "TimerFactory",
    "TimerHandle",
    "TtlCache",
    "loop_timer_factory",
    "staged",
    "unstaged",
    "unstaged_files",
]
