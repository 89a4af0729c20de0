"""Command line argument handling package."""

from gitnova.ui.cli.args.parser import ArgumentParser
from gitnova.ui.cli.args.options import BranchesArgs, CLIArgs, RemotesArgs, StageArgs, StatusArgs

__all__ = ["ArgumentParser", "BranchesArgs", "CLIArgs", "RemotesArgs", "StageArgs", "StatusArgs"]
