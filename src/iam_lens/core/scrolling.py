"""Scroll window arithmetic for lists and line-oriented documents."""

from __future__ import annotations

from typing import Tuple

from ..constants import MIN_VISIBLE_HEIGHT

# Rows the list screen spends outside the scrolling area.
_LIST_BORDER_ROWS = 4
_LIST_HEADER_ROWS = 8
_LIST_SEARCH_ROWS = 2
_LIST_STATUS_ROWS = 2
_LIST_HELP_ROWS = 1

# title(2) + tabs(2) + status(2) + help(1) + padding(2), plus the border.
_DETAIL_CHROME_ROWS = 9
_DETAIL_BORDER_ROWS = 4


def cursor_window(cursor: int, total: int, visible_height: int) -> Tuple[int, int]:
    """Half-open ``[start, end)`` window that keeps ``cursor`` visible.

    Scrolls by the smallest amount needed; the cursor is not centred.
    """
    start = 0
    if cursor >= visible_height:
        start = cursor - visible_height + 1
    end = min(total, start + visible_height)
    return start, end


def max_offset(total: int, visible_height: int) -> int:
    return max(0, total - visible_height)


def clamp_offset(offset: int, total: int, visible_height: int) -> int:
    return min(max(0, offset), max_offset(total, visible_height))


def centered_offset(line: int, visible_height: int, total: int) -> int:
    """Scroll offset that puts ``line`` in the middle of the viewport where possible."""
    return clamp_offset(line - visible_height // 2, total, visible_height)


def list_visible_height(height: int, filtering: bool = False) -> int:
    rows = (
        height
        - _LIST_BORDER_ROWS
        - _LIST_HEADER_ROWS
        - (_LIST_SEARCH_ROWS if filtering else 0)
        - _LIST_STATUS_ROWS
        - _LIST_HELP_ROWS
        - 1
    )
    return max(MIN_VISIBLE_HEIGHT, rows)


def detail_visible_height(height: int) -> int:
    return max(MIN_VISIBLE_HEIGHT, height - _DETAIL_CHROME_ROWS - _DETAIL_BORDER_ROWS)
