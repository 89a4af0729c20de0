"""src/gitnova/ui/cli/commands/status.py
What: Show the working-tree status of the active repository.
Why: One status refresh feeds both the branch header and the change groups.
"""

from typing_extensions import override

from gitnova.features.state import RefreshDomain
from gitnova.ui.cli.args.options import StatusArgs
from gitnova.ui.cli.commands.executor import CommandExecutor


class StatusCommand(CommandExecutor[StatusArgs]):
    """Command for the ``status`` subcommand."""

    @override
    async def run(self) -> int:
        state = await self.service.open(self.args.repo, RefreshDomain.STATUS)
        # A failed status refresh leaves ``status`` unset; reading through the
        # changes view surfaces the backend error.
        status = state.status if state.status is not None else await self.service.status()

        self.status_display.show_header(state, quiet=self.args.quiet)
        self.status_display.show_status(status, quiet=self.args.quiet)
        return 0
