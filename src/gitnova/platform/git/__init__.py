"""Git command-line adapter exports."""

from .cli_gateway import GitCliGateway
from .errors import GitError
from .parsers import parse_branches, parse_porcelain_status, parse_remotes, parse_track
from .runner import AsyncGitRunner, CommandResult, CommandRunner

__all__ = [
    "AsyncGitRunner",
    "CommandResult",
    "CommandRunner",
    "GitCliGateway",
    "GitError",
    "parse_branches",
    "parse_porcelain_status",
    "parse_remotes",
    "parse_track",
]
