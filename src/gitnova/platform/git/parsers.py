"""Where: src/gitnova/platform/git/parsers.py
What: Pure parsers for machine-readable git output.
Why: Keep subprocess handling apart from text parsing so both are testable.
"""

from __future__ import annotations

import re

from gitnova.shared import Branch, CommitRef, FileStatus, Remote, StatusFile, StatusSnapshot

FIELD_SEPARATOR = "\x00"
RECORD_SEPARATOR = "\x1e"

# ``for-each-ref`` format; git expands %00 and %1e to the separators above.
BRANCH_FORMAT = "%00".join(
    (
        "%(refname)",
        "%(refname:short)",
        "%(objectname)",
        "%(HEAD)",
        "%(upstream:short)",
        "%(upstream:track,nobracket)",
        "%(symref)",
    )
) + "%1e"

_TRACK_RE = re.compile(r"(ahead|behind) (\d+)")
_REMOTE_LINE_RE = re.compile(r"^(\S+)\s+(\S+)\s+\((fetch|push)\)$")


def parse_porcelain_status(output: str) -> StatusSnapshot:
    """Parse ``git status --porcelain=v1 -z`` output.

    Rename and copy records are followed by an extra token holding the
    source path; the first path is the destination.
    """

    files: list[StatusFile] = []
    tokens = output.split(FIELD_SEPARATOR)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        code = token[:2]
        if code == "!!":
            continue

        original_path: str | None = None
        if "R" in code or "C" in code:
            if index < len(tokens) and tokens[index]:
                original_path = tokens[index]
            index += 1

        if code == "??":
            index_status = worktree_status = FileStatus.UNTRACKED
        else:
            index_status = FileStatus.from_code(code[0])
            worktree_status = FileStatus.from_code(code[1])
            # Any of DD, AU, UD, UA, DU, AA, UU marks an unmerged path.
            if code in {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}:
                index_status = worktree_status = FileStatus.UNMERGED

        files.append(
            StatusFile(
                path=token[3:],
                index_status=index_status,
                worktree_status=worktree_status,
                original_path=original_path,
            )
        )

    return StatusSnapshot.from_files(files)


def parse_track(track: str) -> tuple[int, int]:
    """Return ``(ahead, behind)`` from ``%(upstream:track,nobracket)``."""

    ahead = behind = 0
    for direction, count in _TRACK_RE.findall(track):
        if direction == "ahead":
            ahead = int(count)
        else:
            behind = int(count)
    return ahead, behind


def parse_branches(output: str, *, remote: bool) -> list[Branch]:
    """Parse ``git for-each-ref`` output produced with :data:`BRANCH_FORMAT`."""

    branches: list[Branch] = []
    for record in output.split(RECORD_SEPARATOR):
        record = record.strip("\n")
        if not record:
            continue
        fields = record.split(FIELD_SEPARATOR)
        if len(fields) < 7:
            continue
        refname, short_name, objectname, head, upstream, track, symref = fields[:7]

        # ``refs/remotes/origin/HEAD`` is a symbolic alias, not a branch.
        if symref or refname.endswith("/HEAD"):
            continue

        remote_name: str | None = None
        name = short_name
        if remote:
            remote_name, _, name = short_name.partition("/")
            if not name:
                continue

        ahead, behind = parse_track(track)
        branches.append(
            Branch(
                name=name,
                commit=CommitRef(hash=objectname),
                is_current=head.strip() == "*",
                is_remote=remote,
                remote_name=remote_name,
                upstream=upstream or None,
                ahead=ahead,
                behind=behind,
            )
        )
    return branches


def parse_remotes(output: str) -> list[Remote]:
    """Parse ``git remote -v`` output, merging fetch and push lines per remote."""

    urls: dict[str, dict[str, str]] = {}
    for line in output.splitlines():
        match = _REMOTE_LINE_RE.match(line.strip())
        if match is None:
            continue
        name, url, kind = match.groups()
        urls.setdefault(name, {})[kind] = url

    return [
        Remote(
            name=name,
            fetch_url=kinds.get("fetch", kinds.get("push", "")),
            push_url=kinds.get("push", kinds.get("fetch", "")),
        )
        for name, kinds in urls.items()
    ]


__all__ = [
    "BRANCH_FORMAT",
    "parse_branches",
    "parse_porcelain_status",
    "parse_remotes",
    "parse_track",
]
