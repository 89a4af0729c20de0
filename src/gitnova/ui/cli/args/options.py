"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class StatusArgs:
    """Command line arguments for the ``status`` subcommand."""

    command: Literal["status"]
    repo: Path
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class BranchesArgs:
    """Command line arguments for the ``branches`` subcommand."""

    command: Literal["branches"]
    repo: Path
    verbose: bool
    quiet: bool
    show_remote: bool


@final
@dataclass(slots=True)
class RemotesArgs:
    """Command line arguments for the ``remotes`` subcommand."""

    command: Literal["remotes"]
    repo: Path
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class StageArgs:
    """Command line arguments for the ``stage`` and ``unstage`` subcommands."""

    command: Literal["stage", "unstage"]
    repo: Path
    verbose: bool
    quiet: bool
    paths: tuple[str, ...]


CLIArgs = StatusArgs | BranchesArgs | RemotesArgs | StageArgs

__all__ = ["BranchesArgs", "CLIArgs", "RemotesArgs", "StageArgs", "StatusArgs"]
