"""Browse-path helpers.

The browser tracks its location as an absolute POSIX-style string. Only
three transitions exist: descend into a child, go to the parent, and
normalize an empty path to the root.
"""

from __future__ import annotations

ROOT_PATH = "/"
SEPARATOR = "/"


def normalize_browse_path(path: str) -> str:
    """Return ``path`` with trailing separators removed; empty becomes root."""
    stripped = path.rstrip(SEPARATOR)
    if not stripped:
        return ROOT_PATH
    return stripped


def is_root(path: str) -> bool:
    return normalize_browse_path(path) == ROOT_PATH


def parent_browse_path(path: str) -> str:
    """Drop the last segment of ``path``. The root is its own parent."""
    normalized = normalize_browse_path(path)
    if normalized == ROOT_PATH:
        return ROOT_PATH
    head, _sep, _tail = normalized.rpartition(SEPARATOR)
    return normalize_browse_path(head)


def child_browse_path(path: str, name: str) -> str:
    normalized = normalize_browse_path(path)
    if normalized == ROOT_PATH:
        return f"{ROOT_PATH}{name}"
    return f"{normalized}{SEPARATOR}{name}"


def browse_path_segments(path: str) -> list[str]:
    """Split a browse path into its named segments (root has none)."""
    normalized = normalize_browse_path(path)
    if normalized == ROOT_PATH:
        return []
    return normalized.lstrip(SEPARATOR).split(SEPARATOR)


__all__ = [
    "ROOT_PATH",
    "browse_path_segments",
    "child_browse_path",
    "is_root",
    "normalize_browse_path",
    "parent_browse_path",
]
