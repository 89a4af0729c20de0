"""Where: src/gitnova/platform/git/runner.py
What: Asyncio subprocess runner for the git executable.
Why: Decouple process management from the gateway so tests can script git output.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from gitnova.config import settings
from gitnova.platform.logging import logger

from .errors import GitError


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Captured outcome of one git invocation."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Protocol for objects able to run git with arguments in a directory."""

    async def run(self, args: Sequence[str], *, cwd: Path) -> CommandResult:
        ...


class AsyncGitRunner:
    """Run git through ``asyncio.create_subprocess_exec`` with a per-call timeout."""

    def __init__(self, executable: str | None = None, timeout: float | None = None) -> None:
        self._executable = executable or settings.GIT_EXECUTABLE or "git"
        self._timeout = settings.GIT_TIMEOUT_SECONDS if timeout is None else timeout
        self._env = {**os.environ, "GIT_OPTIONAL_LOCKS": "0", "LC_ALL": "C"}

    async def run(self, args: Sequence[str], *, cwd: Path) -> CommandResult:
        command = (self._executable, *args)
        logger.debug("Running: %s (cwd=%s)", " ".join(command), cwd)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=cwd,
                env=self._env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise GitError(f"Unable to start {self._executable}: {exc}", command=command) from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), self._timeout)
        except TimeoutError as exc:
            process.kill()
            _ = await process.wait()
            raise GitError(
                f"git {' '.join(args)} timed out after {self._timeout:.1f}s",
                command=command,
            ) from exc

        return CommandResult(
            command=command,
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )


__all__ = ["AsyncGitRunner", "CommandResult", "CommandRunner"]
