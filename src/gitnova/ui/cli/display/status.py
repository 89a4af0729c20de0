"""src/gitnova/ui/cli/display/status.py
What: Render working-tree status groups as Rich tables.
Why: Show staged, unstaged, untracked and conflicted paths the way the changes view groups them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import final

from rich.console import Console
from rich.table import Table

from gitnova.shared import FileStatus, RepositoryState, StatusFile, StatusSnapshot

_STATUS_LABELS: dict[FileStatus, tuple[str, str]] = {
    FileStatus.MODIFIED: ("modified", "yellow"),
    FileStatus.ADDED: ("added", "green"),
    FileStatus.DELETED: ("deleted", "red"),
    FileStatus.RENAMED: ("renamed", "cyan"),
    FileStatus.COPIED: ("copied", "cyan"),
    FileStatus.UNMERGED: ("conflict", "bold red"),
    FileStatus.UNTRACKED: ("untracked", "bright_black"),
}


def describe(status: FileStatus) -> str:
    """Return Rich markup naming ``status``."""

    label, style = _STATUS_LABELS.get(status, ("unchanged", "dim"))
    return f"[{style}]{label}[/{style}]"


@final
class StatusDisplay:
    """Handles status display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_header(self, state: RepositoryState | None, *, quiet: bool = False) -> None:
        if quiet or state is None:
            return

        branch = state.current_branch
        if branch is None:
            head = "[yellow]detached HEAD[/yellow]"
        else:
            head = f"[bold]{branch.name}[/bold]"
            if branch.upstream:
                head += f" → {branch.upstream}"
            if branch.ahead or branch.behind:
                head += f" [dim](↑{branch.ahead} ↓{branch.behind})[/dim]"

        flags: list[str] = []
        if state.is_rebasing:
            flags.append("[magenta]rebasing[/magenta]")
        if state.is_merging:
            flags.append("[magenta]merging[/magenta]")
        suffix = f"  {' '.join(flags)}" if flags else ""
        self.console.print(f"[bold cyan]{state.name}[/bold cyan] on {head}{suffix}")

    def show_status(self, status: StatusSnapshot, *, quiet: bool = False) -> None:
        """Display ``status`` grouped like the changes view."""

        if quiet:
            return

        if status.is_clean:
            self.console.print("[green]Working tree clean[/green]")
            return

        self._show_group("Merge conflicts", status.conflicted, lambda f: f.worktree_status)
        self._show_group(
            "Staged changes",
            [f for f in status.staged if not f.is_conflicted],
            lambda f: f.index_status,
        )
        self._show_group(
            "Changes",
            [f for f in status.unstaged if not f.is_conflicted],
            lambda f: f.worktree_status,
        )
        self._show_group("Untracked files", status.untracked, lambda f: FileStatus.UNTRACKED)

    def _show_group(
        self,
        title: str,
        files: Sequence[StatusFile],
        pick: Callable[[StatusFile], FileStatus],
    ) -> None:
        if not files:
            return

        caption = f"{title} ({len(files)})"
        # Tables shrink to their rows; keep the caption on one line.
        table = Table(title=caption, title_justify="left", show_header=False, box=None, min_width=len(caption))
        table.add_column("Status", no_wrap=True)
        table.add_column("Path")
        for file in files:
            table.add_row(describe(pick(file)), _format_path(file))
        self.console.print(table)


def _format_path(file: StatusFile) -> str:
    if file.original_path:
        return f"{file.original_path} → {file.path}"
    return file.path


__all__ = ["StatusDisplay", "describe"]
