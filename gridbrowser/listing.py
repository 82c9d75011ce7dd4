"""Directory enumeration into flat ``Entry`` lists.

Entries are returned in whatever order ``os.scandir`` yields them; the
browser never sorts. Failures to open the directory itself surface as
``DirectoryListingError`` so callers can tell startup failures from
recoverable mid-session ones.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One directory child as shown in a tile."""

    name: str
    path: str
    is_dir: bool
    size: int
    modified_at: datetime


class DirectoryListingError(Exception):
    """Raised when a directory cannot be enumerated."""

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"{path}: {error.strerror or error}")

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, FileNotFoundError)

    @property
    def permission_denied(self) -> bool:
        return isinstance(self.error, PermissionError)


def _entry_from_dir_entry(child: os.DirEntry[str], directory: str) -> Entry:
    try:
        is_dir = child.is_dir()
    except OSError:
        is_dir = False

    try:
        stat = child.stat()
    except OSError:
        # Dangling symlinks still get a tile, described by the link itself.
        try:
            stat = child.stat(follow_symlinks=False)
        except OSError:
            stat = None

    size = int(stat.st_size) if stat is not None else 0
    mtime = stat.st_mtime if stat is not None else 0.0
    return Entry(
        name=child.name,
        path=os.path.abspath(os.path.join(directory, child.name)),
        is_dir=is_dir,
        size=size,
        modified_at=datetime.fromtimestamp(mtime),
    )


def list_entries(path: str) -> list[Entry]:
    """Return the children of ``path`` as entries, in filesystem order.

    Raises ``DirectoryListingError`` when ``path`` is missing, unreadable, or
    not a directory.
    """
    try:
        with os.scandir(path) as children:
            entries = [_entry_from_dir_entry(child, path) for child in children]
    except OSError as exc:
        logger.warning("Cannot list %s: %s", path, exc)
        raise DirectoryListingError(path, exc) from exc
    logger.debug("Listed %d entries in %s", len(entries), path)
    return entries


__all__ = ["DirectoryListingError", "Entry", "list_entries"]
