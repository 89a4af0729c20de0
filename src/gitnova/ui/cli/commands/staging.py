"""src/gitnova/ui/cli/commands/staging.py
What: Stage or unstage paths and print the optimistically patched status.
Why: The patched view is shown without waiting for another status read.
"""

from typing_extensions import override

from gitnova.ui.cli.args.options import StageArgs
from gitnova.ui.cli.commands.executor import CommandExecutor


class StageCommand(CommandExecutor[StageArgs]):
    """Command for the ``stage`` and ``unstage`` subcommands."""

    @override
    async def run(self) -> int:
        _ = await self.service.open(self.args.repo)
        if self.args.command == "stage":
            status = await self.service.stage(self.args.paths)
        else:
            status = await self.service.unstage(self.args.paths)
        self.status_display.show_status(status, quiet=self.args.quiet)
        return 0
