"""Where: src/gitnova/platform/git/cli_gateway.py
What: Git backend gateway built on the git command-line interface.
Why: The state cache talks to a port; this adapter is the production implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from gitnova.platform.logging import logger
from gitnova.shared import Branch, CommitRef, OperationState, Remote, StatusSnapshot

from .errors import GitError
from .parsers import BRANCH_FORMAT, parse_branches, parse_porcelain_status, parse_remotes
from .runner import AsyncGitRunner, CommandResult, CommandRunner


class GitCliGateway:
    """Query and mutate one repository by running git commands.

    The gateway targets nothing until :meth:`open_repository` succeeds.
    """

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self._runner: CommandRunner = runner or AsyncGitRunner()
        self._root: Path | None = None
        self._git_dir: Path | None = None

    @property
    def root(self) -> Path | None:
        return self._root

    async def open_repository(self, path: Path) -> Path:
        target = Path(path).expanduser()
        if not target.is_dir():
            raise GitError(f"Not a directory: {target}")

        result = await self._runner.run(
            ["rev-parse", "--show-toplevel", "--absolute-git-dir"], cwd=target
        )
        _raise_for_status(result, f"Not a git repository: {target}")

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if len(lines) < 2:
            raise GitError(f"Unexpected rev-parse output for {target}", command=result.command)

        self._root = Path(lines[0]).resolve()
        self._git_dir = Path(lines[1]).resolve()
        logger.debug("Opened repository %s (git dir %s)", self._root, self._git_dir)
        return self._root

    async def get_status(self) -> StatusSnapshot:
        result = await self._git(
            "status", "--porcelain=v1", "-z", "--untracked-files=all", message="Failed to read status"
        )
        return parse_porcelain_status(result.stdout)

    async def get_current_branch(self) -> Branch | None:
        head = await self._git("symbolic-ref", "-q", "--short", "HEAD", ok_codes=(0, 1))
        if head.returncode != 0:
            return None
        name = head.stdout.strip()

        for branch in await self.get_local_branches():
            if branch.name == name:
                return branch

        # An unborn branch has no ref yet, so for-each-ref cannot list it.
        commit = await self._git("rev-parse", "--verify", "-q", "HEAD", ok_codes=(0, 1))
        return Branch(name=name, commit=CommitRef(hash=commit.stdout.strip()), is_current=True)

    async def get_local_branches(self) -> list[Branch]:
        result = await self._git(
            "for-each-ref", f"--format={BRANCH_FORMAT}", "refs/heads", message="Failed to list branches"
        )
        return parse_branches(result.stdout, remote=False)

    async def get_remote_branches(self) -> list[Branch]:
        result = await self._git(
            "for-each-ref",
            f"--format={BRANCH_FORMAT}",
            "refs/remotes",
            message="Failed to list remote branches",
        )
        return parse_branches(result.stdout, remote=True)

    async def get_remotes(self) -> list[Remote]:
        result = await self._git("remote", "-v", message="Failed to list remotes")
        return parse_remotes(result.stdout)

    async def get_operation_state(self) -> OperationState:
        git_dir = self._require_git_dir()
        return OperationState(
            is_rebasing=(git_dir / "rebase-merge").exists() or (git_dir / "rebase-apply").exists(),
            is_merging=(git_dir / "MERGE_HEAD").exists(),
        )

    async def stage(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        _ = await self._git("add", "--", *paths, message="Failed to stage files")
        logger.info("Staged %d path(s)", len(paths))

    async def unstage(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        head = await self._git("rev-parse", "--verify", "-q", "HEAD", ok_codes=(0, 1))
        if head.returncode == 0:
            _ = await self._git("reset", "-q", "HEAD", "--", *paths, message="Failed to unstage files")
        else:
            # Nothing to reset to before the first commit.
            _ = await self._git(
                "rm", "--cached", "-r", "-q", "--", *paths, message="Failed to unstage files"
            )
        logger.info("Unstaged %d path(s)", len(paths))

    def _require_root(self) -> Path:
        if self._root is None:
            raise GitError("No repository is open")
        return self._root

    def _require_git_dir(self) -> Path:
        _ = self._require_root()
        assert self._git_dir is not None
        return self._git_dir

    async def _git(
        self,
        *args: str,
        ok_codes: tuple[int, ...] = (0,),
        message: str | None = None,
    ) -> CommandResult:
        result = await self._runner.run(args, cwd=self._require_root())
        if result.returncode not in ok_codes:
            _raise_for_status(result, message or f"git {args[0]} failed")
        return result


def _raise_for_status(result: CommandResult, message: str) -> None:
    if result.ok:
        return
    raise GitError(
        message,
        command=result.command,
        exit_code=result.returncode,
        stderr=result.stderr,
    )


__all__ = ["GitCliGateway"]
