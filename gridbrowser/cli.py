"""Command-line front door for gridbrowser.

Parses CLI options, resolves the start directory, and lists it once up front
so an unreadable start path fails before the terminal enters raw mode. Then
dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from pathlib import Path

from platformdirs import user_log_path

from .listing import DirectoryListingError, list_entries
from .navigation import grid_shape_for_terminal
from .render import build_frame, frame_as_text
from .runtime import run_browser
from .runtime.controller import initial_browser_state
from .ui_theme import available_theme_names, resolve_theme

APP_NAME = "gridbrowser"
DEFAULT_LOG_PATH = user_log_path(APP_NAME, appauthor=False) / f"{APP_NAME}.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _home_dir() -> Path:
    """Return the user's home directory, or the filesystem root if unknown."""
    try:
        return Path.home()
    except RuntimeError:
        return Path("/")


def _default_start_path() -> Path:
    """Current working directory, falling back to home when it is gone."""
    try:
        return Path.cwd()
    except OSError:
        return _home_dir()


def configure_logging(log_file: Path | None) -> None:
    """Send package logs to ``log_file`` at DEBUG level; no-op when ``None``."""
    if log_file is None:
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(APP_NAME)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def resolve_start_directory(path: Path) -> Path:
    """Return the absolute directory to browse for ``path``.

    A file argument browses its parent directory.
    """
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    resolved = path.resolve()
    return resolved if resolved.is_dir() else resolved.parent


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch gridbrowser on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used, then the home directory.
    """
    parser = argparse.ArgumentParser(
        description="Browse a directory as a grid of tiles in the terminal."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to browse. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output (also honours NO_COLOR).")
    parser.add_argument(
        "--log-file",
        nargs="?",
        type=Path,
        const=DEFAULT_LOG_PATH,
        default=None,
        help=f"Write debug logs to a file (default: {DEFAULT_LOG_PATH}).",
    )
    parser.add_argument("--render", action="store_true", help="Print one frame of the grid and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Frame width for --render output (default: terminal width).",
    )
    parser.add_argument(
        "--max-rows",
        type=_positive_int,
        default=None,
        help="Frame height for --render output (default: terminal height).",
    )
    args = parser.parse_args()

    configure_logging(args.log_file)
    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))

    if default_path is None:
        default_path = _default_start_path()
    directory = resolve_start_directory(Path(args.path or default_path))
    try:
        entries = list_entries(str(directory))
    except DirectoryListingError as exc:
        if exc.not_found:
            raise SystemExit(f"Path not found: {exc.path}") from exc
        if exc.permission_denied:
            raise SystemExit(f"Permission denied: {exc.path}") from exc
        raise SystemExit(f"Cannot read directory: {exc}") from exc

    if args.render:
        term = shutil.get_terminal_size((80, 24))
        columns = args.max_cols if args.max_cols is not None else max(1, term.columns)
        lines = args.max_rows if args.max_rows is not None else max(1, term.lines)
        state = initial_browser_state(str(directory), entries, grid_shape_for_terminal(columns, lines))
        frame = build_frame(state, columns, lines, resolve_theme(args.theme, no_color=no_color))
        sys.stdout.write(frame_as_text(frame))
        return

    run_browser(str(directory), entries, args.theme, no_color)


if __name__ == "__main__":
    main()
