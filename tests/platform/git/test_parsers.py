"""Tests for git output parsers."""

from __future__ import annotations

import pytest

from gitnova.platform.git import parse_branches, parse_porcelain_status, parse_remotes, parse_track
from gitnova.shared import CommitRef, FileStatus, StatusFile


def _ref(*fields: str) -> str:
    return "\x00".join(fields) + "\x1e\n"


def test_parse_porcelain_status_partitions_entries() -> None:
    output = "\x00".join(
        [
            " M src/app.py",
            "M  README.md",
            "?? notes.txt",
            "R  new_name.py",
            "old_name.py",
            "UU conflict.txt",
            "!! build/",
            "",
        ]
    )

    snapshot = parse_porcelain_status(output)

    assert [f.path for f in snapshot.files] == [
        "src/app.py",
        "README.md",
        "notes.txt",
        "new_name.py",
        "conflict.txt",
    ]
    assert [f.path for f in snapshot.staged] == ["README.md", "new_name.py", "conflict.txt"]
    assert [f.path for f in snapshot.unstaged] == ["src/app.py", "conflict.txt"]
    assert [f.path for f in snapshot.untracked] == ["notes.txt"]
    assert [f.path for f in snapshot.conflicted] == ["conflict.txt"]

    renamed = snapshot.find("new_name.py")
    assert renamed == StatusFile(
        "new_name.py", FileStatus.RENAMED, FileStatus.UNMODIFIED, original_path="old_name.py"
    )


@pytest.mark.parametrize("code", ["DD", "AU", "UD", "UA", "DU", "AA", "UU"])
def test_unmerged_codes_mark_conflicts(code: str) -> None:
    snapshot = parse_porcelain_status(f"{code} both.txt\x00")

    entry = snapshot.files[0]
    assert entry.index_status is FileStatus.UNMERGED
    assert entry.worktree_status is FileStatus.UNMERGED


def test_parse_porcelain_status_keeps_spaces_in_paths() -> None:
    snapshot = parse_porcelain_status(" M docs/release notes.md\x00")

    assert snapshot.files[0].path == "docs/release notes.md"


def test_empty_status_is_clean() -> None:
    assert parse_porcelain_status("").is_clean


@pytest.mark.parametrize(
    ("track", "expected"),
    [
        ("", (0, 0)),
        ("ahead 2", (2, 0)),
        ("behind 5", (0, 5)),
        ("ahead 1, behind 3", (1, 3)),
        ("gone", (0, 0)),
    ],
)
def test_parse_track(track: str, expected: tuple[int, int]) -> None:
    assert parse_track(track) == expected


def test_parse_local_branches() -> None:
    output = _ref(
        "refs/heads/main", "main", "a" * 40, "*", "origin/main", "ahead 1, behind 2", ""
    ) + _ref("refs/heads/topic", "topic", "b" * 40, " ", "", "", "")

    main, topic = parse_branches(output, remote=False)

    assert main.name == "main"
    assert main.is_current
    assert main.commit == CommitRef(hash="a" * 40)
    assert main.upstream == "origin/main"
    assert (main.ahead, main.behind) == (1, 2)
    assert not topic.is_current
    assert topic.upstream is None
    assert topic.remote_name is None


def test_parse_remote_branches_skips_head_alias() -> None:
    output = (
        _ref("refs/remotes/origin/HEAD", "origin", "c" * 40, " ", "", "", "refs/remotes/origin/main")
        + _ref("refs/remotes/origin/main", "origin/main", "c" * 40, " ", "", "", "")
        + _ref("refs/remotes/upstream/feature/x", "upstream/feature/x", "d" * 40, " ", "", "", "")
    )

    branches = parse_branches(output, remote=True)

    assert [(b.remote_name, b.name) for b in branches] == [
        ("origin", "main"),
        ("upstream", "feature/x"),
    ]
    assert all(b.is_remote for b in branches)
    assert branches[1].full_name == "upstream/feature/x"


def test_parse_branches_ignores_malformed_records() -> None:
    assert parse_branches("garbage\x1e\n", remote=False) == []


def test_parse_remotes_merges_fetch_and_push() -> None:
    output = (
        "origin\tgit@example.com:demo.git (fetch)\n"
        "origin\tgit@example.com:demo.git (push)\n"
        "mirror\thttps://mirror.example.com/demo.git (fetch)\n"
        "mirror\tssh://push.example.com/demo.git (push)\n"
    )

    origin, mirror = parse_remotes(output)

    assert origin.name == "origin"
    assert origin.fetch_url == origin.push_url == "git@example.com:demo.git"
    assert mirror.fetch_url == "https://mirror.example.com/demo.git"
    assert mirror.push_url == "ssh://push.example.com/demo.git"


def test_parse_remotes_with_fetch_only() -> None:
    (remote,) = parse_remotes("local\t../other (fetch)\n")

    assert remote.push_url == "../other"
