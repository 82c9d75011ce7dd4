"""Cursor and viewport state machine for the tile grid.

The entry list is a flat sequence reshaped into rows of ``cols`` tiles.
``NavigationState`` only stores where the cursor sits inside the visible
viewport and how many grid rows are scrolled past; the caller supplies the
grid shape and entry count on every transition. All transitions return a new
state and never touch the entry list.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

TILE_WIDTH = 25
TILE_HEIGHT = 5
TILE_HORIZONTAL_PADDING = 2
TILE_VERTICAL_PADDING = 2
# Bar heights exclude the outer border row, which BORDER_SIZE counts.
TOP_BAR_HEIGHT = 2
BOTTOM_BAR_HEIGHT = 2
BORDER_SIZE = 1


@dataclass(frozen=True)
class GridShape:
    """Number of fully visible tile rows and columns."""

    rows: int = 1
    cols: int = 1


def grid_shape_for_terminal(
    columns: int,
    lines: int,
    *,
    tile_width: int = TILE_WIDTH,
    tile_height: int = TILE_HEIGHT,
    horizontal_padding: int = TILE_HORIZONTAL_PADDING,
    vertical_padding: int = TILE_VERTICAL_PADDING,
    top_bar_height: int = TOP_BAR_HEIGHT,
    bottom_bar_height: int = BOTTOM_BAR_HEIGHT,
    border_size: int = BORDER_SIZE,
) -> GridShape:
    """Compute how many tiles fit in a ``columns`` x ``lines`` terminal.

    Both dimensions are clamped to at least one so grid arithmetic never
    divides by zero on tiny terminals.
    """
    content_width = columns - 2 * border_size
    content_height = lines - 2 * border_size - top_bar_height - bottom_bar_height
    rows = content_height // (tile_height + vertical_padding)
    cols = content_width // (tile_width + horizontal_padding)
    return GridShape(rows=max(1, rows), cols=max(1, cols))


@dataclass(frozen=True)
class NavigationState:
    """Cursor position within the viewport plus the viewport scroll offset."""

    cursor_row: int = 0
    cursor_col: int = 0
    viewport_row_offset: int = 0

    def absolute_index(self, cols: int) -> int:
        """Index into the flat entry list of the selected cell."""
        return (self.viewport_row_offset + self.cursor_row) * cols + self.cursor_col

    def move_left(self, cols: int) -> NavigationState:
        if self.cursor_col > 0:
            return replace(self, cursor_col=self.cursor_col - 1)
        return replace(self, cursor_col=cols - 1)

    def move_right(self, cols: int) -> NavigationState:
        if self.cursor_col < cols - 1:
            return replace(self, cursor_col=self.cursor_col + 1)
        return replace(self, cursor_col=0)

    def move_down(self, rows: int, cols: int, entry_count: int) -> NavigationState:
        """Move one grid row down, scrolling at the viewport bottom.

        From any cell on the last populated row the cursor wraps to the very
        first entry. The check is per row, so on a partially filled last row
        the wrap fires regardless of the cursor column.
        """
        if entry_count <= 0:
            return self
        current_global_row = self.viewport_row_offset + self.cursor_row
        last_global_row = (entry_count - 1) // cols
        if current_global_row == last_global_row:
            return NavigationState()

        next_row = self.cursor_row + 1
        next_index = (self.viewport_row_offset + next_row) * cols + self.cursor_col
        if next_row < rows and next_index < entry_count:
            return replace(self, cursor_row=next_row)
        return replace(self, viewport_row_offset=self.viewport_row_offset + 1)

    def move_up(self, rows: int, cols: int, entry_count: int) -> NavigationState:
        """Move one grid row up, scrolling at the viewport top.

        Above the first row the cursor wraps to the last entry with its final
        page shown.
        """
        if entry_count <= 0:
            return self
        if self.cursor_row > 0:
            return replace(self, cursor_row=self.cursor_row - 1)
        if self.viewport_row_offset > 0:
            return replace(self, viewport_row_offset=self.viewport_row_offset - 1)

        last_index = entry_count - 1
        last_row = last_index // cols
        total_rows = last_row + 1
        offset = max(0, total_rows - rows)
        return NavigationState(
            cursor_row=last_row - offset,
            cursor_col=last_index % cols,
            viewport_row_offset=offset,
        )

    def reclamp(self, rows: int, cols: int, entry_count: int) -> NavigationState:
        """Restore bounds after the entry count or grid shape changed.

        The cursor is first pulled back inside a ``rows`` x ``cols`` viewport
        (keeping its absolute row). If it then points past the last entry it
        moves onto the last entry; the viewport only ever scrolls up for that.
        Applying this twice gives the same state as applying it once.
        """
        if entry_count <= 0:
            return NavigationState()

        cursor_col = min(max(0, self.cursor_col), cols - 1)
        cursor_row = max(0, self.cursor_row)
        offset = max(0, self.viewport_row_offset)
        if cursor_row >= rows:
            offset += cursor_row - rows + 1
            cursor_row = rows - 1

        index = (offset + cursor_row) * cols + cursor_col
        if index >= entry_count:
            last_index = entry_count - 1
            last_row = last_index // cols
            visible_row = last_row - offset
            if visible_row < 0:
                offset = last_row
                visible_row = 0
            cursor_row = visible_row
            cursor_col = last_index % cols

        return NavigationState(
            cursor_row=cursor_row,
            cursor_col=cursor_col,
            viewport_row_offset=offset,
        )


__all__ = [
    "GridShape",
    "NavigationState",
    "grid_shape_for_terminal",
    "TILE_HEIGHT",
    "TILE_WIDTH",
]
