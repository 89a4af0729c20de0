"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from gitnova.config.config import Config
from gitnova.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from gitnova.ui.cli.args.options import BranchesArgs, CLIArgs, RemotesArgs, StageArgs, StatusArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="gitnova",
            description="gitnova - Inspect and stage changes through a cached repository view.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "-C",
            "--repo",
            type=str,
            default=".",
            help="Path inside the repository to operate on (defaults to the current directory)",
            metavar="PATH",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show cache and refresh diagnostics",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        _ = subparsers.add_parser("status", help="Show staged, unstaged and untracked changes")

        branches_parser = subparsers.add_parser("branches", help="List branches")
        _ = branches_parser.add_argument(
            "-a",
            "--all",
            action="store_true",
            help="Include remote-tracking branches",
        )

        _ = subparsers.add_parser("remotes", help="List configured remotes")

        for name, help_text in (
            ("stage", "Add paths to the index"),
            ("unstage", "Remove paths from the index, keeping worktree changes"),
        ):
            staging_parser = subparsers.add_parser(name, help=help_text)
            _ = staging_parser.add_argument(
                "paths",
                nargs="+",
                help="Repository-relative paths",
                metavar="PATH",
            )

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If the repository path does not exist.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(parsed_args.quiet)
        is_verbose = bool(parsed_args.verbose)

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.WARNING

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        repo = Path(parsed_args.repo).expanduser()
        if not repo.is_dir():
            logger.error("Repository path does not exist or is not a directory: %s", repo)
            sys.exit(1)
        repo = repo.resolve()

        command: str = parsed_args.command

        if command == "status":
            return StatusArgs(command="status", repo=repo, verbose=is_verbose, quiet=is_quiet)

        if command == "branches":
            return BranchesArgs(
                command="branches",
                repo=repo,
                verbose=is_verbose,
                quiet=is_quiet,
                show_remote=bool(parsed_args.all),
            )

        if command == "remotes":
            return RemotesArgs(command="remotes", repo=repo, verbose=is_verbose, quiet=is_quiet)

        if command in {"stage", "unstage"}:
            return StageArgs(
                command="stage" if command == "stage" else "unstage",
                repo=repo,
                verbose=is_verbose,
                quiet=is_quiet,
                paths=tuple(parsed_args.paths),
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)
