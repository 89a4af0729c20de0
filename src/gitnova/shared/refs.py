"""Branch, commit and remote reference values."""

from __future__ import annotations

from dataclasses import dataclass


SHORT_HASH_LENGTH = 7


@dataclass(slots=True, frozen=True)
class CommitRef:
    """Commit pointed to by a ref."""

    hash: str

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]


@dataclass(slots=True, frozen=True)
class Branch:
    """A local or remote-tracking branch."""

    name: str
    commit: CommitRef
    is_current: bool = False
    is_remote: bool = False
    remote_name: str | None = None
    upstream: str | None = None
    ahead: int = 0
    behind: int = 0

    @property
    def full_name(self) -> str:
        """Return ``remote/name`` for remote branches and ``name`` otherwise."""

        if self.is_remote and self.remote_name:
            return f"{self.remote_name}/{self.name}"
        return self.name


@dataclass(slots=True, frozen=True)
class Remote:
    """A configured remote with its fetch and push URLs."""

    name: str
    fetch_url: str
    push_url: str


__all__ = ["Branch", "CommitRef", "Remote", "SHORT_HASH_LENGTH"]
