from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from rich.table import Table
from rich.text import Text

from .models import Status

ANSI_NORMAL = "\x1b[37;0m"
ANSI_CLEAN = "\x1b[1;37;40m"
ANSI_DIRTY = "\x1b[31;1m"
ANSI_STATUS = "\x1b[34;1m"
ANSI_DIVERGENCE = "\x1b[1;35m"

COUNT_FIELDS = ("staged", "changed", "conflicts", "untracked", "stashed")


@dataclass(frozen=True)
class Palette:
    normal: str = ANSI_NORMAL
    clean: str = ANSI_CLEAN
    dirty: str = ANSI_DIRTY
    status: str = ANSI_STATUS
    divergence: str = ANSI_DIVERGENCE


@dataclass(frozen=True)
class Glyphs:
    ahead: str = "↑"
    behind: str = "↓"
    staged: str = "●"
    conflicts: str = "✖"
    changed: str = "✚"
    untracked: str = "…"
    stashed: str = "⌂"


@dataclass(frozen=True)
class Theme:
    palette: Palette = field(default_factory=Palette)
    glyphs: Glyphs = field(default_factory=Glyphs)


DEFAULT_THEME = Theme()


def _format_divergence(status: Status, glyphs: Glyphs) -> str:
    parts = []
    if status.ahead > 0:
        parts.append(f"{glyphs.ahead}{status.ahead}")
    if status.behind > 0:
        parts.append(f"{glyphs.behind}{status.behind}")
    return " ".join(parts)


def _format_counts(status: Status, glyphs: Glyphs) -> str:
    parts = []
    for name in COUNT_FIELDS:
        count = getattr(status, name)
        if count > 0:
            parts.append(f"{getattr(glyphs, name)}{count}")
    return " ".join(parts)


def render_prompt(status: Status, theme: Theme = DEFAULT_THEME) -> str:
    """Render `(branch ↑1) [●2 …1] ` with the theme's escape sequences."""
    palette = theme.palette
    branch_color = palette.clean if status.clean else palette.dirty

    prompt = f"({branch_color}{status.branch}{palette.normal}"
    if status.has_divergence:
        divergence = _format_divergence(status, theme.glyphs)
        prompt += f" {palette.divergence}{divergence}{palette.normal}"
    prompt += ") "

    if status.has_counts:
        counts = _format_counts(status, theme.glyphs)
        prompt += f"[{palette.status}{counts}{palette.normal}] "
    return prompt


def render_status_table(status: Status, repo_path: Path, theme: Theme = DEFAULT_THEME) -> Table:
    table = Table(title=str(repo_path), show_header=False, box=None)
    table.add_column("field", style="bold")
    table.add_column("value")

    branch_style = "green" if status.clean else "red"
    table.add_row("branch", Text(status.branch, style=branch_style))
    table.add_row("upstream", status.remote or "-")
    if status.remote:
        table.add_row(
            "divergence",
            f"{theme.glyphs.ahead}{status.ahead} {theme.glyphs.behind}{status.behind}",
        )
    for name in COUNT_FIELDS:
        count = getattr(status, name)
        label = Text(f"{getattr(theme.glyphs, name)}{count}")
        if count:
            label.stylize("bold")
        table.add_row(name, label)
    table.add_row("clean", "yes" if status.clean else "no")
    return table
