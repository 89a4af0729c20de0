"""Tests for command execution."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from fakes import FakeGateway, make_status
from gitnova.application.services.state_service import RepositoryStateService, build_state_services
from gitnova.ui.cli.args.options import BranchesArgs, RemotesArgs, StageArgs, StatusArgs
from gitnova.ui.cli.commands import (
    BranchesCommand,
    CommandExecutor,
    RemotesCommand,
    StageCommand,
    StatusCommand,
)
from gitnova.ui.cli.display import RefsDisplay, StatusDisplay

REPO = Path("/repos/demo")


def _attach(command: CommandExecutor[Any]) -> Console:
    """Point both displays at one recording console."""

    console = Console(record=True, width=120, color_system=None)
    command.status_display = StatusDisplay(console)
    command.refs_display = RefsDisplay(console)
    return console


def _factory(gateway: FakeGateway) -> Any:
    return lambda: RepositoryStateService(
        services_factory=lambda: build_state_services(gateway=gateway, auto_refresh=False)
    )


def test_status_command_prints_header_and_groups(gateway: FakeGateway) -> None:
    command = StatusCommand(
        StatusArgs(command="status", repo=REPO, verbose=False, quiet=False),
        service_factory=_factory(gateway),
    )
    console = _attach(command)

    assert command.execute() == 0

    output = console.export_text()
    assert "demo on main" in output
    assert "Changes (1)" in output
    assert "src/app.py" in output
    assert "Untracked files (1)" in output
    assert gateway.calls["get_status"] == 1


def test_status_command_quiet_prints_nothing(gateway: FakeGateway) -> None:
    command = StatusCommand(
        StatusArgs(command="status", repo=REPO, verbose=False, quiet=True),
        service_factory=_factory(gateway),
    )
    console = _attach(command)

    assert command.execute() == 0
    assert console.export_text() == ""


def test_status_command_surfaces_backend_failure(gateway: FakeGateway) -> None:
    gateway.failures["get_status"] = RuntimeError("fatal: index file corrupt")
    command = StatusCommand(
        StatusArgs(command="status", repo=REPO, verbose=False, quiet=False),
        service_factory=_factory(gateway),
    )
    _ = _attach(command)

    with pytest.raises(RuntimeError, match="index file corrupt"):
        _ = command.execute()


def test_branches_command_lists_remote_when_requested(gateway: FakeGateway) -> None:
    command = BranchesCommand(
        BranchesArgs(command="branches", repo=REPO, verbose=False, quiet=False, show_remote=True),
        service_factory=_factory(gateway),
    )
    console = _attach(command)

    assert command.execute() == 0

    output = console.export_text()
    assert "feature" in output
    assert "origin/main" in output


def test_remotes_command(gateway: FakeGateway) -> None:
    command = RemotesCommand(
        RemotesArgs(command="remotes", repo=REPO, verbose=False, quiet=False),
        service_factory=_factory(gateway),
    )
    console = _attach(command)

    assert command.execute() == 0
    assert "origin" in console.export_text()


def test_stage_command_shows_patched_status(gateway: FakeGateway) -> None:
    gateway.status = make_status((" M", "a.ts"))
    command = StageCommand(
        StageArgs(command="stage", repo=REPO, verbose=False, quiet=False, paths=("a.ts",)),
        service_factory=_factory(gateway),
    )
    console = _attach(command)

    assert command.execute() == 0

    assert gateway.staged_paths == ["a.ts"]
    assert "Staged changes (1)" in console.export_text()


def test_unstage_command(gateway: FakeGateway) -> None:
    gateway.status = make_status(("M ", "a.ts"))
    command = StageCommand(
        StageArgs(command="unstage", repo=REPO, verbose=False, quiet=False, paths=("a.ts",)),
        service_factory=_factory(gateway),
    )
    console = _attach(command)

    assert command.execute() == 0

    assert gateway.unstaged_paths == ["a.ts"]
    assert "Changes (1)" in console.export_text()
