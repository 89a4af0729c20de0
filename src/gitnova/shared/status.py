"""Where: src/gitnova/shared/status.py
What: Immutable working-tree status values shared by gateways, caches and views.
Why: Keep status partitions derivable from one authoritative file list.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum


class FileStatus(str, Enum):
    """Single-letter porcelain status codes for the index or the worktree."""

    UNMODIFIED = " "
    MODIFIED = "M"
    ADDED = "A"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    UNMERGED = "U"
    UNTRACKED = "?"

    @staticmethod
    def from_code(code: str) -> "FileStatus":
        """Translate a porcelain status letter, treating unknown letters as modified."""

        if code in {"", "."}:
            return FileStatus.UNMODIFIED
        for status in FileStatus:
            if status.value == code:
                return status
        # Type changes ("T") and other exotic codes read as plain modifications.
        return FileStatus.MODIFIED


@dataclass(slots=True, frozen=True)
class StatusFile:
    """One changed path with its index and worktree state."""

    path: str
    index_status: FileStatus = FileStatus.UNMODIFIED
    worktree_status: FileStatus = FileStatus.UNMODIFIED
    original_path: str | None = None

    @property
    def is_staged(self) -> bool:
        return self.index_status not in (FileStatus.UNMODIFIED, FileStatus.UNTRACKED)

    @property
    def is_unstaged(self) -> bool:
        return self.worktree_status not in (FileStatus.UNMODIFIED, FileStatus.UNTRACKED)

    @property
    def is_untracked(self) -> bool:
        return FileStatus.UNTRACKED in (self.index_status, self.worktree_status)

    @property
    def is_conflicted(self) -> bool:
        return FileStatus.UNMERGED in (self.index_status, self.worktree_status)

    def with_statuses(
        self,
        *,
        index_status: FileStatus | None = None,
        worktree_status: FileStatus | None = None,
    ) -> "StatusFile":
        """Return a copy with the given statuses replaced."""

        return replace(
            self,
            index_status=self.index_status if index_status is None else index_status,
            worktree_status=self.worktree_status if worktree_status is None else worktree_status,
        )


@dataclass(slots=True, frozen=True)
class StatusSnapshot:
    """Working-tree status with the partitions consumers render.

    ``staged``, ``unstaged``, ``untracked`` and ``conflicted`` are derived
    from ``files``; build snapshots through :meth:`from_files` so the
    partitions never drift from the file list.
    """

    files: tuple[StatusFile, ...] = ()
    staged: tuple[StatusFile, ...] = ()
    unstaged: tuple[StatusFile, ...] = ()
    untracked: tuple[StatusFile, ...] = ()
    conflicted: tuple[StatusFile, ...] = ()

    @classmethod
    def from_files(cls, files: Iterable[StatusFile]) -> "StatusSnapshot":
        """Derive every partition from ``files``."""

        ordered = tuple(files)
        return cls(
            files=ordered,
            staged=tuple(f for f in ordered if f.is_staged),
            unstaged=tuple(f for f in ordered if f.is_unstaged),
            untracked=tuple(f for f in ordered if f.is_untracked),
            conflicted=tuple(f for f in ordered if f.is_conflicted),
        )

    @property
    def is_clean(self) -> bool:
        return not self.files

    def find(self, path: str) -> StatusFile | None:
        """Return the entry recorded for ``path`` if present."""

        return next((f for f in self.files if f.path == path), None)

    def replace_file(self, updated: StatusFile) -> "StatusSnapshot":
        """Return a new snapshot with the entry for ``updated.path`` swapped."""

        return StatusSnapshot.from_files(
            updated if f.path == updated.path else f for f in self.files
        )

    def without(self, path: str) -> "StatusSnapshot":
        return StatusSnapshot.from_files(f for f in self.files if f.path != path)


__all__ = ["FileStatus", "StatusFile", "StatusSnapshot"]
