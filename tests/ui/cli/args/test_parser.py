"""Tests for command line argument parser."""

import logging
from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from gitnova.config.config import Config
from gitnova.platform.logging import DEFAULT_LOG_FILE
from gitnova.ui.cli.args import ArgumentParser, BranchesArgs, RemotesArgs, StageArgs, StatusArgs


@pytest.fixture
def mock_setup_logger(mocker: MockerFixture) -> MagicMock:
    """Keep argument processing from touching real log files or config."""

    _ = mocker.patch.object(Config, "load", return_value=Config())
    return mocker.patch("gitnova.ui.cli.args.parser.setup_logger")


def test_create_parser() -> None:
    """Argument parser should expose expected subcommands and options."""

    parser = ArgumentParser.create_parser()

    status_args: Namespace = parser.parse_args(["status"])
    assert status_args.command == "status"
    assert status_args.repo == "."

    branch_args = parser.parse_args(["-C", "work", "--verbose", "branches", "--all"])
    assert branch_args.repo == "work"
    assert branch_args.verbose and branch_args.all

    stage_args = parser.parse_args(["stage", "a.py", "b.py"])
    assert stage_args.paths == ["a.py", "b.py"]


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.create_parser().parse_args([])


def test_stage_requires_paths() -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.create_parser().parse_args(["unstage"])


def test_verbose_and_quiet_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        _ = ArgumentParser.create_parser().parse_args(["--verbose", "--quiet", "status"])


def test_process_status_args(tmp_path: Path, mock_setup_logger: MagicMock) -> None:
    args = ArgumentParser.process_args(["-C", str(tmp_path), "status"])

    assert args == StatusArgs(command="status", repo=tmp_path.resolve(), verbose=False, quiet=False)
    mock_setup_logger.assert_called_once_with(log_file=DEFAULT_LOG_FILE, console_level=logging.WARNING)


def test_process_branches_args(tmp_path: Path, mock_setup_logger: MagicMock) -> None:
    args = ArgumentParser.process_args(["-C", str(tmp_path), "--verbose", "branches", "-a"])

    assert isinstance(args, BranchesArgs)
    assert args.show_remote
    assert mock_setup_logger.call_args.kwargs["console_level"] == logging.DEBUG


def test_process_remotes_args_quiet(tmp_path: Path, mock_setup_logger: MagicMock) -> None:
    args = ArgumentParser.process_args(["-C", str(tmp_path), "--quiet", "remotes"])

    assert isinstance(args, RemotesArgs)
    assert args.quiet
    assert mock_setup_logger.call_args.kwargs["console_level"] == logging.ERROR


@pytest.mark.parametrize("command", ["stage", "unstage"])
def test_process_staging_args(tmp_path: Path, mock_setup_logger: MagicMock, command: str) -> None:
    _ = mock_setup_logger
    args = ArgumentParser.process_args(["-C", str(tmp_path), command, "a.py", "docs/b.md"])

    assert args == StageArgs(
        command=command,  # type: ignore[arg-type]
        repo=tmp_path.resolve(),
        verbose=False,
        quiet=False,
        paths=("a.py", "docs/b.md"),
    )


def test_configured_log_file_is_used(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    log_file = tmp_path / "custom.log"
    _ = mocker.patch.object(Config, "load", return_value=Config(log_file=log_file))
    setup = mocker.patch("gitnova.ui.cli.args.parser.setup_logger")

    _ = ArgumentParser.process_args(["-C", str(tmp_path), "status"])

    assert setup.call_args.kwargs["log_file"] == log_file


def test_missing_repository_exits(tmp_path: Path, mock_setup_logger: MagicMock) -> None:
    _ = mock_setup_logger

    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.process_args(["-C", str(tmp_path / "missing"), "status"])

    assert excinfo.value.code == 1
