"""src/gitnova/ui/cli/commands/refs.py
What: List branches and remotes of the active repository.
Why: Read through the state cache so repeated lookups share one backend call.
"""

from typing_extensions import override

from gitnova.ui.cli.args.options import BranchesArgs, RemotesArgs
from gitnova.ui.cli.commands.executor import CommandExecutor


class BranchesCommand(CommandExecutor[BranchesArgs]):
    """Command for the ``branches`` subcommand."""

    @override
    async def run(self) -> int:
        _ = await self.service.open(self.args.repo)
        local, remote = await self.service.branches()
        self.refs_display.show_branches(
            local,
            remote if self.args.show_remote else (),
            quiet=self.args.quiet,
        )
        return 0


class RemotesCommand(CommandExecutor[RemotesArgs]):
    """Command for the ``remotes`` subcommand."""

    @override
    async def run(self) -> int:
        _ = await self.service.open(self.args.repo)
        self.refs_display.show_remotes(await self.service.remotes(), quiet=self.args.quiet)
        return 0
