"""Assemble a Status from repository queries."""

from collections.abc import Callable
from pathlib import Path

from gitprompt.git_ops import GitRepositoryQuery, RepositoryQuery
from gitprompt.locator import DEFAULT_MAX_DEPTH, GIT_MARKER, find_marker_dir
from gitprompt.models import Status
from gitprompt.parsers import parse_porcelain

DETACHED_HASH_PREFIX = ":"


def resolve_detached_label(query: RepositoryQuery) -> str:
    """Name a detached HEAD: exact tag, else `:<short hash>`, else empty."""
    tag = query.tag_at_head()
    if tag:
        return tag
    short = query.short_hash()
    if short:
        return f"{DETACHED_HASH_PREFIX}{short}"
    return ""


def build_status(query: RepositoryQuery) -> Status | None:
    """Run the queries and combine them; None when there is no branch to show."""
    parsed = parse_porcelain(query.status().splitlines())
    header = parsed.header
    if header is None:
        return None

    branch = header.branch
    if header.detached:
        branch = resolve_detached_label(query)
    if not branch:
        return None

    counts = parsed.counts
    return Status(
        branch=branch,
        remote=header.remote,
        ahead=header.ahead,
        behind=header.behind,
        untracked=counts.untracked,
        changed=counts.changed,
        conflicts=counts.conflicts,
        staged=counts.staged,
        stashed=query.stash_count(),
    )


def load_status(
    cwd: Path,
    marker: str = GIT_MARKER,
    max_depth: int = DEFAULT_MAX_DEPTH,
    query_factory: Callable[[Path, Path], RepositoryQuery] = GitRepositoryQuery,
) -> Status | None:
    """Status of the repository enclosing `cwd`, or None outside a repository."""
    git_dir = find_marker_dir(cwd, marker, max_depth=max_depth)
    if git_dir is None:
        return None
    return build_status(query_factory(cwd, git_dir))
