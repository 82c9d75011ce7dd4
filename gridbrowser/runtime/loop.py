"""Main interactive event loop for the terminal UI.

Turns terminal resizes, keys, and finished listings into controller events,
executes the commands the controller hands back, and repaints after every
state change. All browsing logic lives in ``controller.handle_event``.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..render import build_frame, render_frame
from ..terminal import TerminalController
from ..ui_theme import UITheme
from .controller import (
    BrowserState,
    Event,
    FetchListing,
    KeyPressed,
    OpenFailed,
    OpenFile,
    Quit,
    Resized,
    handle_event,
)
from .listing_scheduler import ListingScheduler

logger = logging.getLogger(__name__)

KEY_POLL_TIMEOUT_MS = 50


@dataclass(frozen=True)
class RuntimeLoopServices:
    """Injected collaborators used by ``run_main_loop``."""

    scheduler: ListingScheduler
    open_file: Callable[[str], bool]
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size
    render: Callable[[list[str]], None] = render_frame


def run_main_loop(
    state: BrowserState,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    services: RuntimeLoopServices,
) -> BrowserState:
    """Run the browser until a quit command; return the final state."""
    quit_requested = False
    dirty = True
    last_size: tuple[int, int] | None = None

    def dispatch(event: Event) -> None:
        nonlocal state, quit_requested, dirty
        next_state, commands = handle_event(state, event)
        if next_state is not state:
            state = next_state
            dirty = True
        for command in commands:
            if isinstance(command, Quit):
                quit_requested = True
            elif isinstance(command, FetchListing):
                services.scheduler.schedule(command.request)
            elif isinstance(command, OpenFile):
                if not services.open_file(command.path):
                    dispatch(OpenFailed(command.path))

    with terminal.raw_mode():
        while not quit_requested:
            term = services.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                dispatch(Resized(columns=term.columns, lines=term.lines))

            for result in services.scheduler.drain_results():
                dispatch(result)

            if dirty:
                services.render(build_frame(state, term.columns, term.lines, theme))
                dirty = False

            key = read_key(stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)
            if key:
                dispatch(KeyPressed(key))

    logger.debug("Quit in %s", state.current_path)
    return state
