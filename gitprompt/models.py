"""Data models for gitprompt."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AheadBehind:
    """Commit counts ahead/behind the upstream."""

    ahead: int
    behind: int


@dataclass(frozen=True)
class BranchHeader:
    """Branch metadata from the `## ...` line of porcelain status."""

    branch: str
    remote: str = ""
    ahead: int = 0
    behind: int = 0
    detached: bool = False


@dataclass(frozen=True)
class HeaderLine:
    """A `##` line with the sentinel stripped."""

    text: str


@dataclass(frozen=True)
class FileLine:
    """One `XY PATH` entry of porcelain status."""

    index: str
    worktree: str
    path: str
    orig_path: str | None = None


@dataclass(frozen=True)
class FileCounts:
    """File buckets accumulated over porcelain entries."""

    untracked: int = 0
    changed: int = 0
    conflicts: int = 0
    staged: int = 0

    def __add__(self, other: FileCounts) -> FileCounts:
        return FileCounts(
            untracked=self.untracked + other.untracked,
            changed=self.changed + other.changed,
            conflicts=self.conflicts + other.conflicts,
            staged=self.staged + other.staged,
        )


@dataclass(frozen=True)
class PorcelainStatus:
    """Everything porcelain status tells us; the stash count comes from elsewhere."""

    header: BranchHeader | None
    counts: FileCounts


@dataclass(frozen=True)
class Status:
    """Repository status shown in the prompt, built fresh for every render."""

    branch: str
    remote: str = ""
    ahead: int = 0
    behind: int = 0
    untracked: int = 0
    changed: int = 0
    conflicts: int = 0
    staged: int = 0
    stashed: int = 0

    @property
    def clean(self) -> bool:
        """True when nothing is changed, staged, conflicted or untracked (stashes don't count)."""
        return (
            self.changed == 0
            and self.staged == 0
            and self.conflicts == 0
            and self.untracked == 0
        )

    @property
    def has_divergence(self) -> bool:
        return self.ahead > 0 or self.behind > 0

    @property
    def has_counts(self) -> bool:
        return any(
            (self.staged, self.changed, self.conflicts, self.untracked, self.stashed)
        )
