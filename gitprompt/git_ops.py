"""Git subprocess operations."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from gitprompt.parsers import count_log_entries

STASH_LOG = Path("logs") / "refs" / "stash"
STATUS_ARGS = ("--no-optional-locks", "status", "--porcelain", "--branch", "-uall")


class GitError(Exception):
    """Git command failed."""

    def __init__(self, cmd: Sequence[str], stderr: str) -> None:
        self.cmd = cmd
        self.stderr = stderr
        super().__init__(f"git {' '.join(cmd)}: {stderr}")


def run(args: Sequence[str], cwd: Path | None = None) -> str:
    """Run a git command and return stdout."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.CalledProcessError as exc:
        raise GitError(args, (exc.stderr or "").strip()) from exc
    except OSError as exc:
        raise GitError(args, str(exc)) from exc
    return result.stdout


def try_run(args: Sequence[str], cwd: Path | None = None) -> str | None:
    """Run a git command, returning None on failure."""
    try:
        return run(args, cwd=cwd)
    except GitError:
        return None


class RepositoryQuery(Protocol):
    """The four questions a prompt render asks a repository."""

    def status(self) -> str: ...

    def tag_at_head(self) -> str: ...

    def short_hash(self) -> str: ...

    def stash_count(self) -> int: ...


class GitRepositoryQuery:
    """Answers by running git in `cwd`; failures read as empty output."""

    def __init__(self, cwd: Path, git_dir: Path) -> None:
        self.cwd = cwd
        self.git_dir = git_dir

    def status(self) -> str:
        return try_run(STATUS_ARGS, cwd=self.cwd) or ""

    def tag_at_head(self) -> str:
        return _first_line(try_run(["describe", "--exact-match"], cwd=self.cwd))

    def short_hash(self) -> str:
        return _first_line(try_run(["rev-parse", "--short", "HEAD"], cwd=self.cwd))

    def stash_count(self) -> int:
        try:
            text = (self.git_dir / STASH_LOG).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return 0
        return count_log_entries(text)


@dataclass(frozen=True)
class CannedRepositoryQuery:
    """Answers from fixed text, for tests and `gitprompt parse`."""

    status_text: str = ""
    tag: str = ""
    head_hash: str = ""
    stashes: int = 0

    def status(self) -> str:
        return self.status_text

    def tag_at_head(self) -> str:
        return _first_line(self.tag)

    def short_hash(self) -> str:
        return _first_line(self.head_hash)

    def stash_count(self) -> int:
        return self.stashes


def _first_line(output: str | None) -> str:
    if not output:
        return ""
    lines = output.strip().splitlines()
    return lines[0].strip() if lines else ""
