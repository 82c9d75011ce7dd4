"""Width-aware string shaping for tiles and the breadcrumb bar.

Every function measures terminal display width rather than ``len`` so CJK
and combining characters do not push tile borders out of alignment.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .ansi import char_display_width, display_width
from .browse_path import browse_path_segments, is_root

if TYPE_CHECKING:
    from .listing import Entry

CENTER_ELLIPSIS = "…"
SHORT_NAME_SUFFIX = "..."
DEFAULT_SHORT_NAME_WIDTH = 10
BREADCRUMB_ROOT = " /"
BREADCRUMB_SEPARATOR = " / "
BREADCRUMB_ELLIPSIS = " / ..."
DATE_FORMAT = "%Y-%m-%d"
DIRECTORY_SIZE_LABEL = "-"
SIZE_UNITS = "KMGTPE"


def _take_leading(text: str, budget: int) -> str:
    """Return the longest prefix of ``text`` whose width fits ``budget``."""
    width = 0
    end = 0
    for ch in text:
        w = char_display_width(ch)
        if width + w > budget:
            break
        width += w
        end += 1
    return text[:end]


def _take_trailing(text: str, budget: int) -> str:
    """Return the longest suffix of ``text`` whose width fits ``budget``."""
    width = 0
    start = len(text)
    for ch in reversed(text):
        w = char_display_width(ch)
        if width + w > budget:
            break
        width += w
        start -= 1
    return text[start:]


def center_truncate(text: str, width: int) -> str:
    """Replace the middle of ``text`` with ``…`` so it fits ``width`` columns.

    Head and tail each keep ``(width - 1) // 2`` columns, so an even width
    leaves one column unused. Characters are never split.
    """
    if display_width(text) <= width:
        return text
    if width <= 0:
        return ""
    keep = (width - 1) // 2
    return _take_leading(text, keep) + CENTER_ELLIPSIS + _take_trailing(text, keep)


def short_name(text: str, max_width: int = 0) -> str:
    """End-truncate ``text`` with a ``...`` suffix.

    A ``max_width`` of zero means :data:`DEFAULT_SHORT_NAME_WIDTH`.
    """
    if max_width == 0:
        max_width = DEFAULT_SHORT_NAME_WIDTH
    if display_width(text) <= max_width:
        return text
    allowed = max_width - display_width(SHORT_NAME_SUFFIX)
    return _take_leading(text, allowed) + SHORT_NAME_SUFFIX


def path_breadcrumb(path: str, max_width: int) -> str:
    """Render ``path`` as `` / a / b / c`` compacted to ``max_width`` columns.

    When the full breadcrumb is too wide, segments are packed greedily from
    both ends around a `` / ...`` marker. The side with less width so far
    grows first (left wins ties), so both the leading context and the leaf
    name stay visible.
    """
    if is_root(path):
        return BREADCRUMB_ROOT

    segments = [f"{BREADCRUMB_SEPARATOR}{part}" for part in browse_path_segments(path)]
    full = "".join(segments)
    if display_width(full) <= max_width:
        return full

    avail = max_width - display_width(BREADCRUMB_ELLIPSIS)
    if avail <= 0:
        return BREADCRUMB_ELLIPSIS

    left: list[str] = []
    right: list[str] = []
    left_width = 0
    right_width = 0
    i = 0
    j = len(segments) - 1
    while i <= j:
        if left_width <= right_width:
            seg_width = display_width(segments[i])
            if left_width + right_width + seg_width > avail:
                break
            left.append(segments[i])
            left_width += seg_width
            i += 1
        else:
            seg_width = display_width(segments[j])
            if left_width + right_width + seg_width > avail:
                break
            right.insert(0, segments[j])
            right_width += seg_width
            j -= 1

    return "".join(left) + BREADCRUMB_ELLIPSIS + "".join(right)


def justify_with_gaps(items: Sequence[str], total_width: int) -> str:
    """Spread ``items`` across ``total_width`` columns.

    Every gap gets at least one space; leftover spaces go one each to the
    leftmost gaps. Items wider than ``total_width`` overflow instead of failing.
    """
    if not items:
        return ""
    if len(items) == 1:
        return items[0]

    items_width = sum(display_width(item) for item in items)
    gaps = len(items) - 1
    space_remaining = max(gaps, total_width - items_width)
    per_gap, extra = divmod(space_remaining, gaps)

    out: list[str] = []
    for idx, item in enumerate(items):
        out.append(item)
        if idx < gaps:
            out.append(" " * (per_gap + (1 if idx < extra else 0)))
    return "".join(out)


def format_size(num_bytes: int) -> str:
    """Format a byte count with binary units, e.g. ``12.0 KB``."""
    unit = 1024
    if num_bytes < unit:
        return f"{num_bytes} B"
    divisor = unit
    exponent = 0
    remaining = num_bytes // unit
    while remaining >= unit:
        divisor *= unit
        exponent += 1
        remaining //= unit
    return f"{num_bytes / divisor:.1f} {SIZE_UNITS[exponent]}B"


def tile_lines(entry: Entry, width: int) -> list[str]:
    """Return the five text rows drawn inside one entry tile."""
    kind = "D" if entry.is_dir else "F"
    name = center_truncate(f"[{kind}] {entry.name}", width)
    size = DIRECTORY_SIZE_LABEL if entry.is_dir else format_size(entry.size)
    info = justify_with_gaps([entry.modified_at.strftime(DATE_FORMAT), size], width)
    return ["", name, "", info, ""]


__all__ = [
    "BREADCRUMB_ELLIPSIS",
    "BREADCRUMB_ROOT",
    "CENTER_ELLIPSIS",
    "DEFAULT_SHORT_NAME_WIDTH",
    "center_truncate",
    "format_size",
    "justify_with_gaps",
    "path_breadcrumb",
    "short_name",
    "tile_lines",
]
