"""Rich tables for branches and remotes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console
from rich.table import Table

from gitnova.shared import Branch, Remote


@final
class RefsDisplay:
    """Handles branch and remote listings in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_branches(
        self,
        local: Sequence[Branch],
        remote: Sequence[Branch] = (),
        *,
        quiet: bool = False,
    ) -> None:
        if quiet:
            return

        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("", width=1)
        table.add_column("Branch")
        table.add_column("Commit", style="dim")
        table.add_column("Upstream")
        table.add_column("Ahead/Behind", justify="right")

        for branch in local:
            table.add_row(
                "[green]*[/green]" if branch.is_current else "",
                f"[bold green]{branch.name}[/bold green]" if branch.is_current else branch.name,
                branch.commit.short_hash,
                branch.upstream or "",
                _format_track(branch),
            )
        for branch in remote:
            table.add_row("", f"[red]{branch.full_name}[/red]", branch.commit.short_hash, "", "")

        if not local and not remote:
            self.console.print("[dim]No branches[/dim]")
            return
        self.console.print(table)

    def show_remotes(self, remotes: Sequence[Remote], *, quiet: bool = False) -> None:
        if quiet:
            return
        if not remotes:
            self.console.print("[dim]No remotes configured[/dim]")
            return

        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Remote")
        table.add_column("Fetch URL")
        table.add_column("Push URL")
        for remote in remotes:
            push = remote.push_url if remote.push_url != remote.fetch_url else "[dim]same[/dim]"
            table.add_row(f"[cyan]{remote.name}[/cyan]", remote.fetch_url, push)
        self.console.print(table)


def _format_track(branch: Branch) -> str:
    if not branch.ahead and not branch.behind:
        return ""
    return f"↑{branch.ahead} ↓{branch.behind}"


__all__ = ["RefsDisplay"]
