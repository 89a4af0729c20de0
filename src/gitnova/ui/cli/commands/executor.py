"""src/gitnova/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Every command opens the repository through the same service and closes it afterwards.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Generic, TypeVar

from gitnova.application.services.state_service import RepositoryStateService
from gitnova.ui.cli.args.options import CLIArgs
from gitnova.ui.cli.display.refs import RefsDisplay
from gitnova.ui.cli.display.status import StatusDisplay

A = TypeVar("A", bound=CLIArgs)


class CommandExecutor(ABC, Generic[A]):
    """Base class for command execution."""

    args: A
    service: RepositoryStateService
    status_display: StatusDisplay
    refs_display: RefsDisplay

    def __init__(
        self,
        args: A,
        *,
        service_factory: Callable[[], RepositoryStateService] | None = None,
    ) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            service_factory: Override for the application service (tests).
        """
        self.args = args
        self.service = (service_factory or RepositoryStateService)()
        self.status_display = StatusDisplay()
        self.refs_display = RefsDisplay()

    def execute(self) -> int:
        """Run the command on a fresh event loop and return the exit code."""

        return asyncio.run(self._execute())

    async def _execute(self) -> int:
        try:
            return await self.run()
        finally:
            self.service.close()

    @abstractmethod
    async def run(self) -> int:
        """Execute the command.

        Returns:
            int: Process exit code.
        """
        pass
