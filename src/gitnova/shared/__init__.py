# Where: gitnova.shared.__init__
# What: Provide a concise import surface for shared value types.
# Why: Gateways, caches and views agree on one set of immutable models.

"""Shared repository models exposed at the package level."""

from .refs import Branch, CommitRef, Remote
from .repository import OperationState, RepositoryState
from .status import FileStatus, StatusFile, StatusSnapshot

__all__ = [
    "Branch",
    "CommitRef",
    "FileStatus",
    "OperationState",
    "Remote",
    "RepositoryState",
    "StatusFile",
    "StatusSnapshot",
]
