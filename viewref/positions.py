"""
Position mapping between matched substrings and editor coordinates.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .types import Position


def position_of(text: str, substring: str) -> Optional[Position]:
    """
    Span of `substring` on the first line that contains it.

    Known weakness: lookup is by substring search, not by the offset of the
    original match. When the same literal appears on an earlier, unrelated
    line, that earlier line is reported. Link coordinates seen by editors
    depend on this behavior.

    Returns:
        Position, or None if the substring is empty or absent
    """
    if not substring:
        return None

    for line_no, line in enumerate(text.split("\n")):
        col = line.find(substring)
        if col >= 0:
            return Position(line=line_no, col_start=col, col_end=col + len(substring))
    return None


def offset_to_point(text: str, offset: int) -> Tuple[int, int]:
    """(line, column) of a character offset, both 0-based; offset is clamped to the text."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start


__all__ = ["position_of", "offset_to_point"]
