from __future__ import annotations

from gitprompt.models import AheadBehind, BranchHeader, FileCounts, FileLine, HeaderLine
from gitprompt.parsers import (
    classify_file,
    count_log_entries,
    parse_branch_header,
    parse_detached,
    parse_divergence,
    parse_initial_commit,
    parse_porcelain,
    parse_tracking,
    tokenize_line,
)


def test_tokenize_header_strips_sentinel() -> None:
    assert tokenize_line("## main...origin/main\n") == HeaderLine(text="main...origin/main")


def test_tokenize_file_line() -> None:
    assert tokenize_line(" M README.md") == FileLine(index=" ", worktree="M", path="README.md")


def test_tokenize_rename_keeps_both_paths() -> None:
    token = tokenize_line("R  old_name.txt -> new_name.txt")
    assert token == FileLine(index="R", worktree=" ", path="new_name.txt", orig_path="old_name.txt")


def test_tokenize_ignores_short_lines() -> None:
    assert tokenize_line("") is None
    assert tokenize_line("M") is None
    assert tokenize_line("##") is None


def test_tracking_header_with_divergence() -> None:
    header = parse_branch_header("main...origin/main [ahead 2, behind 1]")
    assert header == BranchHeader(branch="main", remote="origin/main", ahead=2, behind=1)


def test_tracking_header_without_divergence() -> None:
    header = parse_branch_header("feature/x...origin/feature/x")
    assert header == BranchHeader(branch="feature/x", remote="origin/feature/x")


def test_tracking_header_gone_upstream() -> None:
    header = parse_branch_header("main...origin/main [gone]")
    assert header == BranchHeader(branch="main", remote="origin/main")


def test_local_only_header() -> None:
    assert parse_branch_header("main") == BranchHeader(branch="main")


def test_initial_commit_headers() -> None:
    assert parse_branch_header("Initial commit on master") == BranchHeader(branch="master")
    assert parse_branch_header("No commits yet on main") == BranchHeader(branch="main")


def test_detached_header() -> None:
    header = parse_branch_header("HEAD (no branch)")
    assert header.detached is True
    assert header.branch == ""


def test_rules_return_none_when_shape_does_not_match() -> None:
    assert parse_initial_commit("main...origin/main") is None
    assert parse_detached("main") is None
    assert parse_tracking("main") is None


def test_parse_divergence() -> None:
    assert parse_divergence("[ahead 3]") == AheadBehind(ahead=3, behind=0)
    assert parse_divergence("[behind 12]") == AheadBehind(ahead=0, behind=12)
    assert parse_divergence("") == AheadBehind(ahead=0, behind=0)


def test_classify_untracked_is_terminal() -> None:
    assert classify_file("?", "?") == FileCounts(untracked=1)


def test_classify_conflict_before_staged() -> None:
    assert classify_file("U", "U") == FileCounts(conflicts=1)
    assert classify_file("A", "A") == FileCounts(conflicts=1)


def test_classify_counts_changed_and_staged_together() -> None:
    assert classify_file("M", "M") == FileCounts(changed=1, staged=1)
    assert classify_file("D", "D") == FileCounts(changed=1, conflicts=1)


def test_classify_simple_cases() -> None:
    assert classify_file(" ", "M") == FileCounts(changed=1)
    assert classify_file(" ", "D") == FileCounts(changed=1)
    assert classify_file("A", " ") == FileCounts(staged=1)
    assert classify_file("R", " ") == FileCounts(staged=1)


def test_parse_porcelain_full_output() -> None:
    raw = "\n".join(
        [
            "## main...origin/main [ahead 1]",
            "M  staged.py",
            " M changed.py",
            "UU conflict.txt",
            "?? newfile.txt",
            "?? other/newer.txt",
            "x",
        ]
    )
    parsed = parse_porcelain(raw.splitlines())
    assert parsed.header == BranchHeader(branch="main", remote="origin/main", ahead=1)
    assert parsed.counts == FileCounts(untracked=2, changed=1, conflicts=1, staged=1)


def test_parse_porcelain_without_header() -> None:
    parsed = parse_porcelain(["?? a.txt"])
    assert parsed.header is None
    assert parsed.counts == FileCounts(untracked=1)


def test_count_log_entries() -> None:
    assert count_log_entries("") == 0
    assert count_log_entries("a\nb\n") == 2
    assert count_log_entries("a\n\nb") == 2
