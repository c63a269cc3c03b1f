"""Color palettes for the dashboard and how one is chosen.

Themes are ANSI palettes for the job table, detail tabs, overlays and status
bar. Highlight and column-picker colors can be overridden with hex values
from the config file.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class UITheme:
    """ANSI sequences per screen element; an empty string means no styling."""

    name: str
    normal: str
    divider: str
    reverse: str
    reset: str
    header: str
    header_sorted: str
    highlight: str
    column_show: str
    column_hide: str
    tab_active: str
    tab_inactive: str
    tree_dir: str
    tree_file: str
    tree_marker: str
    status_ok: str
    status_error: str
    rate_down: str
    rate_up: str
    help_heading: str
    help_key: str
    help_dim: str
    modal_title: str
    modal_border: str


DEFAULT_THEME = UITheme(
    name="default",
    normal="",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;252m",
    header_sorted="\033[1;38;5;81m",
    highlight="\033[38;2;0;0;0m\033[48;2;255;0;0m",
    column_show="\033[38;2;0;0;0m\033[48;2;0;255;0m",
    column_hide="\033[38;2;0;0;0m\033[48;2;0;0;255m",
    tab_active="\033[1;7m",
    tab_inactive="\033[2m",
    tree_dir="\033[1;38;5;75m",
    tree_file="\033[38;5;252m",
    tree_marker="\033[38;5;244m",
    status_ok="\033[38;5;42m",
    status_error="\033[1;38;5;203m",
    rate_down="\033[38;5;42m",
    rate_up="\033[38;5;214m",
    help_heading="\033[1;4;38;5;81m",
    help_key="\033[1;38;5;222m",
    help_dim="\033[38;5;245m",
    modal_title="\033[1;38;5;45m",
    modal_border="\033[38;5;45m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    normal="",
    divider="\033[38;5;24m",
    reverse="\033[7m",
    reset="\033[0m",
    header="\033[1;38;5;153m",
    header_sorted="\033[1;38;5;45m",
    highlight="\033[38;5;16m\033[48;5;39m",
    column_show="\033[38;5;16m\033[48;5;84m",
    column_hide="\033[38;5;16m\033[48;5;24m",
    tab_active="\033[1;38;5;16m\033[48;5;45m",
    tab_inactive="\033[2;38;5;110m",
    tree_dir="\033[1;38;5;38m",
    tree_file="\033[38;5;252m",
    tree_marker="\033[38;5;31m",
    status_ok="\033[38;5;84m",
    status_error="\033[1;38;5;209m",
    rate_down="\033[38;5;84m",
    rate_up="\033[38;5;215m",
    help_heading="\033[1;4;38;5;45m",
    help_key="\033[1;38;5;159m",
    help_dim="\033[38;5;67m",
    modal_title="\033[1;38;5;39m",
    modal_border="\033[38;5;39m",
)

PLAIN_THEME = UITheme(
    name="plain",
    normal="",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    header="",
    header_sorted="",
    highlight="\033[7m",
    column_show="",
    column_hide="",
    tab_active="\033[7m",
    tab_inactive="",
    tree_dir="",
    tree_file="",
    tree_marker="",
    status_ok="",
    status_error="",
    rate_down="",
    rate_up="",
    help_heading="",
    help_key="",
    help_dim="",
    modal_title="",
    modal_border="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Config keys paired by the palette slot they recolor.
COLOR_SLOTS: dict[str, tuple[str, str]] = {
    "highlight": ("fg_highlight", "bg_highlight"),
    "column_show": ("fg_column_show", "bg_column_show"),
    "column_hide": ("fg_column_hide", "bg_column_hide"),
}


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme`` (``plain`` is reached with ``--no-color``)."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Map a user-supplied name onto a known theme; unknown names mean default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def parse_hex_color(value: object) -> tuple[int, int, int] | None:
    """Parse ``#rgb`` or ``#rrggbb``; anything else is ``None``."""
    if not isinstance(value, str):
        return None
    match = _HEX_RE.match(value.strip())
    if match is None:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _sgr(rgb: tuple[int, int, int], background: bool) -> str:
    prefix = 48 if background else 38
    return f"\033[{prefix};2;{rgb[0]};{rgb[1]};{rgb[2]}m"


def apply_color_overrides(theme: UITheme, colors: Mapping[str, object]) -> UITheme:
    """Return ``theme`` with hex overrides from config applied.

    A slot is recolored when at least one of its fg/bg keys parses; the other
    half keeps the terminal default. ``fg_normal`` sets the base text color.
    """
    changes: dict[str, str] = {}
    normal = parse_hex_color(colors.get("fg_normal"))
    if normal is not None:
        changes["normal"] = _sgr(normal, background=False)
    for slot, (fg_key, bg_key) in COLOR_SLOTS.items():
        fg = parse_hex_color(colors.get(fg_key))
        bg = parse_hex_color(colors.get(bg_key))
        if fg is None and bg is None:
            continue
        sequence = ""
        if fg is not None:
            sequence += _sgr(fg, background=False)
        if bg is not None:
            sequence += _sgr(bg, background=True)
        changes[slot] = sequence
    if not changes:
        return theme
    return replace(theme, **changes)


def resolve_theme(
    name: str | None,
    *,
    no_color: bool = False,
    colors: Mapping[str, object] | None = None,
) -> UITheme:
    """Pick the palette for a session, then apply config color overrides."""
    if no_color:
        return PLAIN_THEME
    theme = _THEMES.get(normalize_theme_name(name), DEFAULT_THEME)
    if colors:
        theme = apply_color_overrides(theme, colors)
    return theme


__all__ = [
    "COLOR_SLOTS",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "UITheme",
    "apply_color_overrides",
    "available_theme_names",
    "normalize_theme_name",
    "parse_hex_color",
    "resolve_theme",
]
