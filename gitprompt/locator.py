"""Find the repository that encloses a directory."""

from __future__ import annotations

from pathlib import Path

GIT_MARKER = ".git"
DEFAULT_MAX_DEPTH = 128


def find_marker_dir(
    start_path: Path | str,
    marker_name: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Path | None:
    """Return `<ancestor>/<marker_name>` for the nearest ancestor that has it.

    The search starts at `start_path` itself and walks up one parent at a
    time. It stops at the filesystem root (the parent of a path equal to the
    path) or after `max_depth` steps, whichever comes first.
    """
    path = Path(start_path).absolute()
    for _ in range(max_depth):
        candidate = path / marker_name
        if candidate.is_dir():
            return candidate
        parent = path.parent
        if parent == path:
            return None
        path = parent
    return None


def find_git_dir(start_path: Path | str, max_depth: int = DEFAULT_MAX_DEPTH) -> Path | None:
    return find_marker_dir(start_path, GIT_MARKER, max_depth=max_depth)
