"""Exceptions raised by the git command-line adapter."""

from __future__ import annotations

from collections.abc import Sequence


class GitError(RuntimeError):
    """A git invocation failed, timed out, or could not be started."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.command = tuple(command)
        self.exit_code = exit_code
        self.stderr = stderr

    def __str__(self) -> str:
        detail = self.stderr.strip().splitlines()
        if detail:
            return f"{self.message}: {detail[-1]}"
        return self.message


__all__ = ["GitError"]
