"""Settings file loading for gitprompt."""

import json
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import cast

from gitprompt.locator import DEFAULT_MAX_DEPTH, GIT_MARKER
from gitprompt.ui import DEFAULT_THEME, Glyphs, Palette, Theme

SETTINGS_ENV = "GITPROMPT_SETTINGS"
_TOP_LEVEL_KEYS = {"colors", "symbols", "marker", "max_depth"}


class SettingsError(Exception):
    """Settings file is unreadable or has the wrong shape."""


@dataclass(frozen=True)
class Settings:
    theme: Theme = field(default_factory=lambda: DEFAULT_THEME)
    marker: str = GIT_MARKER
    max_depth: int = DEFAULT_MAX_DEPTH

    def to_dict(self) -> dict[str, object]:
        return {
            "colors": asdict(self.theme.palette),
            "symbols": asdict(self.theme.glyphs),
            "marker": self.marker,
            "max_depth": self.max_depth,
        }


def default_settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "gitprompt" / "settings.json"


def _load_raw(path: Path) -> dict[str, object]:
    if not path.is_file():
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid JSON in {path}") from exc
    except UnicodeDecodeError as exc:
        raise SettingsError(f"{path} is not valid UTF-8") from exc
    except OSError as exc:
        raise SettingsError(f"Cannot read {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise SettingsError(f"Invalid settings format in {path}")
    return raw


def _expect_string_dict(value: object, section: str, allowed: set[str]) -> dict[str, str]:
    if not isinstance(value, dict):
        raise SettingsError(f"Invalid {section} section in settings.")
    unknown = set(value) - allowed
    if unknown:
        raise SettingsError(f"Unknown {section} keys: {', '.join(sorted(unknown))}")
    for key, item in value.items():
        if not isinstance(item, str):
            raise SettingsError(f"Invalid value for {section}.{key}: expected a string.")
    return cast(dict[str, str], value)


def _field_names(cls: type) -> set[str]:
    return {f.name for f in fields(cls)}


def parse_settings(raw: dict[str, object]) -> Settings:
    unknown = set(raw) - _TOP_LEVEL_KEYS
    if unknown:
        raise SettingsError(f"Unknown settings keys: {', '.join(sorted(unknown))}")

    palette = DEFAULT_THEME.palette
    colors_raw = raw.get("colors")
    if colors_raw is not None:
        palette = replace(palette, **_expect_string_dict(colors_raw, "colors", _field_names(Palette)))

    glyphs = DEFAULT_THEME.glyphs
    symbols_raw = raw.get("symbols")
    if symbols_raw is not None:
        glyphs = replace(glyphs, **_expect_string_dict(symbols_raw, "symbols", _field_names(Glyphs)))

    marker = raw.get("marker", GIT_MARKER)
    if not isinstance(marker, str) or not marker.strip():
        raise SettingsError("Invalid marker: expected a non-empty string.")

    max_depth = raw.get("max_depth", DEFAULT_MAX_DEPTH)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise SettingsError("Invalid max_depth: expected a positive integer.")

    return Settings(theme=Theme(palette=palette, glyphs=glyphs), marker=marker, max_depth=max_depth)


def load_settings(path: Path | None = None) -> Settings:
    """Read settings from `path` (or the default location); a missing file means defaults."""
    return parse_settings(_load_raw(path or default_settings_path()))
