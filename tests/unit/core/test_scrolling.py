"""Tests for scroll window arithmetic."""

from __future__ import annotations

import pytest

from iam_lens.core.scrolling import (
    centered_offset,
    clamp_offset,
    cursor_window,
    detail_visible_height,
    list_visible_height,
)


def test_last_of_ten_with_height_five():
    assert cursor_window(9, 10, 5) == (5, 10)


def test_window_starts_at_zero_until_cursor_leaves_view():
    assert cursor_window(4, 10, 5) == (0, 5)
    assert cursor_window(5, 10, 5) == (1, 6)


def test_window_shorter_than_height():
    assert cursor_window(1, 3, 5) == (0, 3)


def test_empty_collection():
    assert cursor_window(0, 0, 5) == (0, 0)


@pytest.mark.parametrize("total", [1, 2, 5, 9, 30])
@pytest.mark.parametrize("height", [1, 3, 5, 10])
def test_cursor_always_visible(total, height):
    for cursor in range(total):
        start, end = cursor_window(cursor, total, height)
        assert start <= cursor < end
        assert end - start <= height


def test_centered_offset_centres_when_possible():
    assert centered_offset(50, 10, 100) == 45


def test_centered_offset_clamps_at_edges():
    assert centered_offset(2, 10, 100) == 0
    assert centered_offset(98, 10, 100) == 90
    assert centered_offset(3, 10, 4) == 0


def test_clamp_offset():
    assert clamp_offset(-3, 20, 5) == 0
    assert clamp_offset(7, 20, 5) == 7
    assert clamp_offset(40, 20, 5) == 15


def test_visible_heights_have_floor():
    assert list_visible_height(10) == 5
    assert detail_visible_height(10) == 5


def test_list_visible_height_shrinks_while_filtering():
    assert list_visible_height(40) == 24
    assert list_visible_height(40, filtering=True) == 22
    assert detail_visible_height(40) == 27
