"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the screen chrome and tiles.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the frame renderer."""

    name: str
    reset: str
    border: str
    selected: str
    breadcrumb: str
    tile_dir: str
    tile_file: str
    tile_info: str
    hint: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[38;2;42;187;174m",
    selected="\033[1;38;2;218;219;131m",
    breadcrumb="\033[1;38;5;252m",
    tile_dir="\033[1;34m",
    tile_file="\033[38;5;252m",
    tile_info="\033[38;5;109m",
    hint="\033[2;38;5;250m",
    status_error="\033[38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    border="\033[38;5;31m",
    selected="\033[1;38;5;45m",
    breadcrumb="\033[1;38;5;153m",
    tile_dir="\033[1;38;5;45m",
    tile_file="\033[38;5;252m",
    tile_info="\033[38;5;73m",
    hint="\033[2;38;5;110m",
    status_error="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    border="",
    selected="",
    breadcrumb="",
    tile_dir="",
    tile_file="",
    tile_info="",
    hint="",
    status_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
