from __future__ import annotations

from pathlib import Path

from . import services
from .locator import find_marker_dir
from .models import Status
from .settings import Settings
from .ui import render_prompt

PLACEHOLDER = "{git_enhanced}"


def substitute(template: str, fragment: str) -> str:
    return template.replace(PLACEHOLDER, fragment)


class App:
    def __init__(self, cwd: Path, settings: Settings | None = None) -> None:
        self.cwd = cwd
        self.settings = settings or Settings()

    def git_dir(self) -> Path | None:
        return find_marker_dir(self.cwd, self.settings.marker, max_depth=self.settings.max_depth)

    def status(self) -> Status | None:
        return services.load_status(
            self.cwd,
            marker=self.settings.marker,
            max_depth=self.settings.max_depth,
        )

    def fragment(self) -> str:
        status = self.status()
        if status is None:
            return ""
        return render_prompt(status, self.settings.theme)

    def filter_prompt(self, template: str) -> str:
        """Fill the placeholder in `template` for the current directory."""
        return substitute(template, self.fragment())
