"""Command line interface for gitnova."""

import sys
from typing import Any, final

from gitnova.config.config import ConfigError
from gitnova.features.state import RepositoryActivationError
from gitnova.platform.git import GitError
from gitnova.platform.logging import logger
from gitnova.ui.cli.args import ArgumentParser
from gitnova.ui.cli.args.options import BranchesArgs, CLIArgs, RemotesArgs, StageArgs, StatusArgs
from gitnova.ui.cli.commands import (
    BranchesCommand,
    CommandExecutor,
    RemotesCommand,
    StageCommand,
    StatusCommand,
)


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            exit_code = CommandProcessor.build_command(args).execute()
            if exit_code:
                sys.exit(exit_code)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except RepositoryActivationError as e:
            logger.error("%s", e.__cause__ or e)
            sys.exit(1)
        except (GitError, ConfigError) as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)

    @staticmethod
    def build_command(args: CLIArgs) -> CommandExecutor[Any]:
        """Return the executor handling ``args``."""

        if isinstance(args, StatusArgs):
            return StatusCommand(args)
        if isinstance(args, BranchesArgs):
            return BranchesCommand(args)
        if isinstance(args, RemotesArgs):
            return RemotesCommand(args)
        assert isinstance(args, StageArgs)
        return StageCommand(args)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Note that underlying
        command processing may call ``sys.exit(...)`` on errors, so this
        return is only reached when processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0
