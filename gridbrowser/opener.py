"""Hand files to the host's default application.

Launching is fire-and-forget: the child process is not awaited and its
output is discarded so it cannot scribble over the TUI.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys

logger = logging.getLogger(__name__)


def default_open_command(path: str, platform: str | None = None) -> list[str] | None:
    """Return the launcher argv for ``path``, or ``None`` on Windows.

    Windows goes through ``os.startfile`` instead of a subprocess.
    """
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return ["open", path]
    if platform.startswith("win"):
        return None
    return ["xdg-open", path]


def open_with_default_app(path: str) -> bool:
    """Start the default handler for ``path``; return whether launch succeeded."""
    command = default_open_command(path)
    try:
        if command is None:
            os.startfile(path)  # type: ignore[attr-defined]
        else:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
    except OSError as exc:
        logger.warning("Failed to open %s: %s", path, exc)
        return False
    logger.debug("Opened %s with %s", path, command[0] if command else "startfile")
    return True


__all__ = ["default_open_command", "open_with_default_app"]
