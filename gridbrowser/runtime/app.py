"""Interactive browser bootstrap.

Wires the real terminal, listing worker, and file opener into the event
loop for one session.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from ..listing import Entry, list_entries
from ..opener import open_with_default_app
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .controller import initial_browser_state
from .listing_scheduler import ListingScheduler
from .loop import RuntimeLoopServices, run_main_loop


def run_browser(
    path: str,
    entries: Sequence[Entry],
    theme_name: str | None = None,
    no_color: bool = False,
) -> int:
    """Browse ``path`` interactively, starting from its pre-fetched ``entries``."""
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    services = RuntimeLoopServices(
        scheduler=ListingScheduler(list_entries),
        open_file=open_with_default_app,
    )
    run_main_loop(
        initial_browser_state(path, entries),
        terminal,
        stdin_fd,
        resolve_theme(theme_name, no_color=no_color),
        services,
    )
    return 0
