"""Command execution package for CLI."""

from gitnova.ui.cli.commands.executor import CommandExecutor
from gitnova.ui.cli.commands.refs import BranchesCommand, RemotesCommand
from gitnova.ui.cli.commands.staging import StageCommand
from gitnova.ui.cli.commands.status import StatusCommand

__all__ = [
    "BranchesCommand",
    "CommandExecutor",
    "RemotesCommand",
    "StageCommand",
    "StatusCommand",
]
