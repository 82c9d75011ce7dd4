"""Browser controller: pure event handling over an explicit state value.

``handle_event`` takes the current ``BrowserState`` and one event and returns
the next state plus the commands the runtime must carry out (fetch a
listing, open a file, quit). Nothing here performs I/O, so whole sessions can
be replayed in tests by feeding events and inspecting the results.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from ..browse_path import child_browse_path, normalize_browse_path, parent_browse_path
from ..listing import Entry
from ..navigation import GridShape, NavigationState, grid_shape_for_terminal
from ..text_layout import path_breadcrumb, short_name

logger = logging.getLogger(__name__)

STATUS_NAME_WIDTH = 40


@dataclass(frozen=True)
class ListingRequest:
    """One directory listing job, tagged with the generation it belongs to."""

    path: str
    generation: int
    reset_cursor: bool = True


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Resized:
    columns: int
    lines: int


@dataclass(frozen=True)
class ListingLoaded:
    request: ListingRequest
    entries: tuple[Entry, ...]


@dataclass(frozen=True)
class ListingFailed:
    request: ListingRequest
    message: str


@dataclass(frozen=True)
class OpenFailed:
    path: str


@dataclass(frozen=True)
class FetchListing:
    request: ListingRequest


@dataclass(frozen=True)
class OpenFile:
    path: str


@dataclass(frozen=True)
class Quit:
    pass


Event = KeyPressed | Resized | ListingLoaded | ListingFailed | OpenFailed
Command = FetchListing | OpenFile | Quit


@dataclass(frozen=True)
class BrowserState:
    """Everything the browser shows and navigates.

    ``current_path`` is the directory whose ``entries`` are on screen.
    ``target_path`` differs from it while a directory change is in flight;
    listing results from any other ``generation`` are discarded.
    """

    current_path: str
    entries: tuple[Entry, ...] = ()
    grid: GridShape = field(default_factory=GridShape)
    nav: NavigationState = field(default_factory=NavigationState)
    target_path: str = ""
    generation: int = 0
    status_message: str = ""

    @property
    def loading(self) -> bool:
        return self.target_path != self.current_path

    @property
    def selected_index(self) -> int | None:
        """Absolute index of the selected entry, ``None`` on a blank cell."""
        if not self.entries:
            return None
        idx = self.nav.absolute_index(self.grid.cols)
        if idx >= len(self.entries):
            return None
        return idx

    @property
    def selected_entry(self) -> Entry | None:
        idx = self.selected_index
        return None if idx is None else self.entries[idx]

    @property
    def viewport_row_offset(self) -> int:
        return self.nav.viewport_row_offset

    def visible_entries(self) -> list[list[Entry | None]]:
        """Entries laid out as the ``rows`` x ``cols`` viewport grid."""
        grid: list[list[Entry | None]] = []
        for row in range(self.grid.rows):
            cells: list[Entry | None] = []
            for col in range(self.grid.cols):
                idx = (self.nav.viewport_row_offset + row) * self.grid.cols + col
                cells.append(self.entries[idx] if idx < len(self.entries) else None)
            grid.append(cells)
        return grid

    def is_selected_cell(self, row: int, col: int) -> bool:
        return row == self.nav.cursor_row and col == self.nav.cursor_col

    def breadcrumb(self, max_width: int) -> str:
        return path_breadcrumb(self.current_path, max_width)


def initial_browser_state(
    path: str,
    entries: Sequence[Entry],
    grid: GridShape | None = None,
) -> BrowserState:
    """Build the startup state for an already-listed directory."""
    normalized = normalize_browse_path(path)
    return BrowserState(
        current_path=normalized,
        target_path=normalized,
        entries=tuple(entries),
        grid=grid or GridShape(),
    )


def _move(state: BrowserState, step: Callable[[NavigationState], NavigationState]) -> BrowserState:
    if not state.entries:
        return state
    return replace(state, nav=step(state.nav))


def _change_directory(state: BrowserState, path: str) -> tuple[BrowserState, list[Command]]:
    generation = state.generation + 1
    request = ListingRequest(path=path, generation=generation, reset_cursor=True)
    logger.debug("Changing directory to %s (generation %d)", path, generation)
    return replace(state, target_path=path, generation=generation), [FetchListing(request)]


def _select(state: BrowserState) -> tuple[BrowserState, list[Command]]:
    entry = state.selected_entry
    if entry is None:
        return state, []
    if entry.is_dir:
        return _change_directory(state, child_browse_path(state.current_path, entry.name))
    return state, [OpenFile(entry.path)]


def _go_to_parent(state: BrowserState) -> tuple[BrowserState, list[Command]]:
    parent = parent_browse_path(state.current_path)
    if parent == state.current_path:
        return state, []
    return _change_directory(state, parent)


def _move_left(state: BrowserState) -> tuple[BrowserState, list[Command]]:
    return _move(state, lambda nav: nav.move_left(state.grid.cols)), []


def _move_right(state: BrowserState) -> tuple[BrowserState, list[Command]]:
    return _move(state, lambda nav: nav.move_right(state.grid.cols)), []


def _move_down(state: BrowserState) -> tuple[BrowserState, list[Command]]:
    grid = state.grid
    return _move(state, lambda nav: nav.move_down(grid.rows, grid.cols, len(state.entries))), []


def _move_up(state: BrowserState) -> tuple[BrowserState, list[Command]]:
    grid = state.grid
    return _move(state, lambda nav: nav.move_up(grid.rows, grid.cols, len(state.entries))), []


def _quit(state: BrowserState) -> tuple[BrowserState, list[Command]]:
    return state, [Quit()]


KEY_BINDINGS: dict[str, Callable[[BrowserState], tuple[BrowserState, list[Command]]]] = {
    "h": _move_left,
    "LEFT": _move_left,
    "j": _move_down,
    "DOWN": _move_down,
    "k": _move_up,
    "UP": _move_up,
    "l": _move_right,
    "RIGHT": _move_right,
    "ENTER": _select,
    "BACKSPACE": _go_to_parent,
    "q": _quit,
    "CTRL_C": _quit,
}


def _handle_key(state: BrowserState, key: str) -> tuple[BrowserState, list[Command]]:
    action = KEY_BINDINGS.get(key)
    if action is None:
        return state, []
    if state.status_message:
        state = replace(state, status_message="")
    return action(state)


def _handle_resize(state: BrowserState, event: Resized) -> tuple[BrowserState, list[Command]]:
    grid = grid_shape_for_terminal(event.columns, event.lines)
    if grid != state.grid:
        state = replace(state, grid=grid)
    request = ListingRequest(
        path=state.target_path,
        generation=state.generation,
        reset_cursor=state.loading,
    )
    return state, [FetchListing(request)]


def _handle_loaded(state: BrowserState, event: ListingLoaded) -> tuple[BrowserState, list[Command]]:
    request = event.request
    if request.generation != state.generation:
        logger.debug("Dropping stale listing of %s (generation %d)", request.path, request.generation)
        return state, []
    nav = state.nav
    # A second result for an already applied directory change keeps the cursor.
    if request.path != state.current_path or (request.reset_cursor and state.loading):
        nav = NavigationState()
    return (
        replace(
            state,
            current_path=request.path,
            target_path=request.path,
            entries=tuple(event.entries),
            nav=nav,
        ),
        [],
    )


def _handle_failed(state: BrowserState, event: ListingFailed) -> tuple[BrowserState, list[Command]]:
    request = event.request
    if request.generation != state.generation:
        return state, []
    logger.warning("Keeping %s after failed listing: %s", state.current_path, event.message)
    return (
        replace(
            state,
            target_path=state.current_path,
            generation=state.generation + 1,
            status_message=f"Cannot read directory: {event.message}",
        ),
        [],
    )


def _handle_open_failed(state: BrowserState, event: OpenFailed) -> tuple[BrowserState, list[Command]]:
    name = os.path.basename(event.path.rstrip(os.sep)) or event.path
    return replace(state, status_message=f"Cannot open {short_name(name, STATUS_NAME_WIDTH)}"), []


def handle_event(state: BrowserState, event: Event) -> tuple[BrowserState, list[Command]]:
    """Apply ``event`` and return the next state plus follow-up commands.

    Every event ends with one re-clamp, so the selection stays inside the
    entry list however the grid or the listing changed.
    """
    if isinstance(event, KeyPressed):
        next_state, commands = _handle_key(state, event.key)
    elif isinstance(event, Resized):
        next_state, commands = _handle_resize(state, event)
    elif isinstance(event, ListingLoaded):
        next_state, commands = _handle_loaded(state, event)
    elif isinstance(event, ListingFailed):
        next_state, commands = _handle_failed(state, event)
    elif isinstance(event, OpenFailed):
        next_state, commands = _handle_open_failed(state, event)
    else:
        raise TypeError(f"unsupported event: {event!r}")

    grid = next_state.grid
    nav = next_state.nav.reclamp(grid.rows, grid.cols, len(next_state.entries))
    if nav != next_state.nav:
        next_state = replace(next_state, nav=nav)
    return next_state, commands


__all__ = [
    "BrowserState",
    "Command",
    "Event",
    "FetchListing",
    "KeyPressed",
    "ListingFailed",
    "ListingLoaded",
    "ListingRequest",
    "OpenFailed",
    "OpenFile",
    "Quit",
    "Resized",
    "handle_event",
    "initial_browser_state",
]
