"""Parsers for `git status --porcelain --branch` output."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from .models import (
    AheadBehind,
    BranchHeader,
    FileCounts,
    FileLine,
    HeaderLine,
    PorcelainStatus,
)

HEADER_SENTINEL = "##"
DIVERGENCE_SEPARATOR = "..."
RENAME_SEPARATOR = " -> "
# two status characters and the separator before the path
MIN_LINE_WIDTH = 3

_INITIAL_COMMIT_RE = re.compile(r"(?:Initial commit|No commits yet) on (?P<branch>.+)")
_AHEAD_RE = re.compile(r"ahead (\d+)")
_BEHIND_RE = re.compile(r"behind (\d+)")


def tokenize_line(line: str) -> HeaderLine | FileLine | None:
    """Split one porcelain line into a header or a file entry.

    Returns None for lines too short to carry both status characters.
    """
    line = line.rstrip("\r\n")
    if len(line) < MIN_LINE_WIDTH:
        return None
    if line.startswith(HEADER_SENTINEL):
        return HeaderLine(text=line[len(HEADER_SENTINEL) :].strip())
    rest = line[MIN_LINE_WIDTH:].strip()
    if RENAME_SEPARATOR in rest:
        orig, path = rest.split(RENAME_SEPARATOR, 1)
        return FileLine(index=line[0], worktree=line[1], path=path, orig_path=orig)
    return FileLine(index=line[0], worktree=line[1], path=rest)


def parse_divergence(text: str) -> AheadBehind:
    """Pull the counts out of `[ahead N, behind M]`; missing counts are 0."""
    ahead = _AHEAD_RE.search(text)
    behind = _BEHIND_RE.search(text)
    return AheadBehind(
        ahead=int(ahead.group(1)) if ahead else 0,
        behind=int(behind.group(1)) if behind else 0,
    )


def parse_initial_commit(text: str) -> BranchHeader | None:
    match = _INITIAL_COMMIT_RE.search(text)
    if not match:
        return None
    return BranchHeader(branch=match.group("branch").strip())


def parse_detached(text: str) -> BranchHeader | None:
    if "no branch" not in text:
        return None
    return BranchHeader(branch="", detached=True)


def parse_tracking(text: str) -> BranchHeader | None:
    """`local...remote [ahead N, behind M]`."""
    if DIVERGENCE_SEPARATOR not in text:
        return None
    local, upstream = text.split(DIVERGENCE_SEPARATOR, 1)
    tokens = upstream.split()
    if not tokens:
        return BranchHeader(branch=local)
    ab = AheadBehind(0, 0)
    if len(tokens) > 1:
        ab = parse_divergence(" ".join(tokens[1:]))
    return BranchHeader(branch=local, remote=tokens[0], ahead=ab.ahead, behind=ab.behind)


HEADER_RULES: tuple[Callable[[str], BranchHeader | None], ...] = (
    parse_initial_commit,
    parse_detached,
    parse_tracking,
)


def parse_branch_header(text: str) -> BranchHeader:
    """Apply the header rules in priority order; anything else is a bare branch name."""
    for rule in HEADER_RULES:
        header = rule(text)
        if header is not None:
            return header
    return BranchHeader(branch=text)


def classify_file(index: str, worktree: str) -> FileCounts:
    """Bucket one entry by its two status characters.

    `??` is untracked and nothing else. For everything else a modified or
    deleted worktree side counts as changed, and independently the entry is a
    conflict or (with a non-blank index side) staged, so `MM` counts twice.
    """
    if index == "?" and worktree == "?":
        return FileCounts(untracked=1)
    changed = 1 if worktree in ("M", "D") else 0
    conflicted = (
        index == "U"
        or worktree == "U"
        or (index == "A" and worktree == "A")
        or (index == "D" and worktree == "D")
    )
    if conflicted:
        return FileCounts(changed=changed, conflicts=1)
    if index != " ":
        return FileCounts(changed=changed, staged=1)
    return FileCounts(changed=changed)


def parse_porcelain(lines: Iterable[str]) -> PorcelainStatus:
    header: BranchHeader | None = None
    counts = FileCounts()
    for raw in lines:
        token = tokenize_line(raw)
        if token is None:
            continue
        if isinstance(token, HeaderLine):
            header = parse_branch_header(token.text)
        else:
            counts = counts + classify_file(token.index, token.worktree)
    return PorcelainStatus(header=header, counts=counts)


def count_log_entries(text: str) -> int:
    """Number of entries in a reflog file such as `logs/refs/stash`."""
    return sum(1 for line in text.splitlines() if line.strip())
