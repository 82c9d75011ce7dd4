"""Frame composition for the tile-grid browser.

``build_frame`` turns a ``BrowserState`` into exactly ``lines`` screen rows:
an outer border, the breadcrumb bar, the centred tile grid, and a key-hint
or status bar. It never mutates state, so frames can be asserted in tests and
printed by ``--render``.
"""

from __future__ import annotations

import os
import sys

from .ansi import pad_ansi_line
from .listing import Entry
from .navigation import TILE_HEIGHT, TILE_HORIZONTAL_PADDING, TILE_WIDTH
from .runtime.controller import BrowserState
from .text_layout import justify_with_gaps, short_name, tile_lines
from .ui_theme import UITheme

KEY_HINTS: tuple[str, ...] = (
    "h/j/k/l - move",
    "⏎ - open/navigate",
    "⌫ - up",
    "q - quit",
)
TILE_TEXT_WIDTH = TILE_WIDTH - 2
TILE_BOX_WIDTH = TILE_WIDTH + TILE_HORIZONTAL_PADDING
TILE_NAME_ROW = 1
TILE_INFO_ROW = 3


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


def tile_box(entry: Entry, selected: bool, theme: UITheme) -> list[str]:
    """Return the bordered rows of one tile, each ``TILE_BOX_WIDTH`` wide."""
    border = theme.selected if selected else theme.border
    rows = [_styled(f"┌{'─' * TILE_WIDTH}┐", border, theme)]
    for idx, text in enumerate(tile_lines(entry, TILE_TEXT_WIDTH)):
        if selected:
            style = theme.selected
        elif idx == TILE_NAME_ROW:
            style = theme.tile_dir if entry.is_dir else theme.tile_file
        elif idx == TILE_INFO_ROW:
            style = theme.tile_info
        else:
            style = ""
        body = _styled(pad_ansi_line(text, TILE_TEXT_WIDTH), style, theme)
        side = _styled("│", border, theme)
        rows.append(f"{side} {body} {side}")
    rows.append(_styled(f"└{'─' * TILE_WIDTH}┘", border, theme))
    return rows


def _grid_rows(state: BrowserState, theme: UITheme) -> list[str]:
    blank_tile = [" " * TILE_BOX_WIDTH] * (TILE_HEIGHT + 2)
    out: list[str] = []
    for row_idx, cells in enumerate(state.visible_entries()):
        boxes = [
            blank_tile if entry is None else tile_box(entry, state.is_selected_cell(row_idx, col_idx), theme)
            for col_idx, entry in enumerate(cells)
        ]
        for line_idx in range(TILE_HEIGHT + 2):
            out.append("".join(box[line_idx] for box in boxes))
    return out


def _bottom_bar_text(state: BrowserState, width: int, theme: UITheme) -> str:
    if state.status_message:
        return _styled(state.status_message, theme.status_error, theme)
    if state.loading:
        return _styled(f"Loading {short_name(state.target_path, max(1, width - 8))}", theme.hint, theme)
    return _styled(justify_with_gaps(KEY_HINTS, width), theme.hint, theme)


def build_frame(state: BrowserState, columns: int, lines: int, theme: UITheme) -> list[str]:
    """Compose one full screen as a list of ``lines`` rows."""
    if columns <= 0 or lines <= 0:
        return []
    inner = max(0, columns - 2)

    def framed(text: str) -> str:
        side = _styled("│", theme.border, theme)
        body = pad_ansi_line(text, inner)
        if "\033" in body:
            body += theme.reset
        return f"{side}{body}{side}"

    def rule(left: str, right: str) -> str:
        return _styled(f"{left}{'─' * inner}{right}", theme.border, theme)

    breadcrumb = _styled(state.breadcrumb(inner), theme.breadcrumb, theme)
    top = [rule("┌", "┐"), framed(breadcrumb), rule("├", "┤")]
    bottom = [rule("├", "┤"), framed(" " + _bottom_bar_text(state, max(0, inner - 2), theme)), rule("└", "┘")]

    grid_rows = _grid_rows(state, theme)
    grid_width = state.grid.cols * TILE_BOX_WIDTH
    margin = " " * max(0, (inner - grid_width) // 2)
    middle_height = max(0, lines - len(top) - len(bottom))
    middle = [framed(margin + row) for row in grid_rows[:middle_height]]
    middle.extend(framed("") for _ in range(middle_height - len(middle)))

    frame = top + middle + bottom
    if len(frame) > lines:
        frame = frame[:lines]
    return frame


def render_frame(frame: list[str], fd: int | None = None) -> None:
    """Write ``frame`` over the whole terminal screen."""
    if fd is None:
        fd = sys.stdout.fileno()
    out = "\033[H\033[J" + "\r\n".join(frame) + "\033[0m"
    os.write(fd, out.encode("utf-8", errors="replace"))


def frame_as_text(frame: list[str]) -> str:
    """Join frame rows for non-interactive output."""
    return "\n".join(frame) + "\n"


__all__ = [
    "KEY_HINTS",
    "build_frame",
    "frame_as_text",
    "render_frame",
    "tile_box",
]
