"""Tests for lookahead scrolling and viewport containment."""

import random

import pytest

from tori.buffer import FileBuffer
from tori.config import ViewerConfig
from tori.navigation import CursorState, Direction, effective_lookahead, maintain_scroll
from tori.navigator import Navigator


def numbered_lines(count, width=0):
    return [f"Line {i}".ljust(width, ".") for i in range(1, count + 1)]


def make_navigator(lines, columns=80, rows=24, lookahead=6):
    return Navigator(FileBuffer(lines), columns, rows, ViewerConfig(lookahead=lookahead))


def assert_contained(nav):
    buf = nav.buffer
    assert buf.scroll_y <= buf.cursor_y <= buf.scroll_y + nav.screen_rows - 1
    assert buf.scroll_x <= buf.cursor_x <= buf.scroll_x + nav.screen_columns - 1
    assert buf.scroll_y >= 0
    assert buf.scroll_x >= 0


def test_no_scroll_until_lookahead_reached():
    nav = make_navigator(numbered_lines(100))
    assert nav.screen_rows == 23
    for _ in range(16):
        nav.move(Direction.DOWN)
    assert nav.buffer.scroll_y == 0

    # Line 17 + 6 lookahead reaches the first row past the window
    nav.move(Direction.DOWN)
    assert nav.buffer.cursor_y == 17
    assert nav.buffer.scroll_y == 1
    # Six lines remain visible below the cursor
    assert nav.buffer.scroll_y + nav.screen_rows - 1 - nav.buffer.cursor_y == 6


def test_scroll_down_one_line_at_a_time():
    nav = make_navigator(numbered_lines(100))
    for _ in range(17):
        nav.move(Direction.DOWN)
    for expected in range(2, 10):
        nav.move(Direction.DOWN)
        assert nav.buffer.scroll_y == expected


def test_scroll_stops_at_end_of_file():
    nav = make_navigator(numbered_lines(100))
    for _ in range(200):
        nav.move(Direction.DOWN)
    assert nav.buffer.cursor_y == 99
    # Last line sits on the last screen row
    assert nav.buffer.scroll_y == 99 - 23 + 1
    assert_contained(nav)


def test_scroll_up_keeps_lookahead_above():
    nav = make_navigator(numbered_lines(100))
    for _ in range(99):
        nav.move(Direction.DOWN)
    top = nav.buffer.scroll_y
    # Moving up inside the window leaves it alone
    while nav.buffer.cursor_y - 1 - 6 >= top:
        nav.move(Direction.UP)
        assert nav.buffer.scroll_y == top
    assert nav.buffer.cursor_y == top + 6

    nav.move(Direction.UP)
    assert nav.buffer.scroll_y == top - 1
    assert nav.buffer.scroll_y == nav.buffer.cursor_y - 6


def test_scroll_up_never_above_first_line():
    nav = make_navigator(numbered_lines(100))
    for _ in range(30):
        nav.move(Direction.DOWN)
    for _ in range(40):
        nav.move(Direction.UP)
    assert nav.buffer.cursor_y == 0
    assert nav.buffer.scroll_y == 0


def test_short_file_never_scrolls():
    nav = make_navigator(numbered_lines(5))
    for _ in range(10):
        nav.move(Direction.DOWN)
    assert nav.buffer.cursor_y == 4
    assert nav.buffer.scroll_y == 0


def test_file_slightly_shorter_than_screen():
    """Lookahead past the end must not push the scroll offset negative."""
    nav = make_navigator(numbered_lines(20))
    for _ in range(19):
        nav.move(Direction.DOWN)
        assert nav.buffer.scroll_y == 0
        assert_contained(nav)


def test_zero_lookahead_follows_cursor():
    nav = make_navigator(numbered_lines(50), rows=11, lookahead=0)
    assert nav.screen_rows == 10
    for _ in range(9):
        nav.move(Direction.DOWN)
    assert nav.buffer.scroll_y == 0
    nav.move(Direction.DOWN)
    assert nav.buffer.cursor_y == 10
    assert nav.buffer.scroll_y == 1
    assert_contained(nav)


def test_horizontal_scroll_follows_cursor():
    nav = make_navigator(["x" * 200], columns=20)
    assert nav.screen_columns == 18
    for _ in range(17):
        nav.move(Direction.RIGHT)
    assert nav.buffer.scroll_x == 0
    nav.move(Direction.RIGHT)
    assert nav.buffer.cursor_x == 18
    assert nav.buffer.scroll_x == 1

    for _ in range(18):
        nav.move(Direction.LEFT)
    assert nav.buffer.cursor_x == 0
    assert nav.buffer.scroll_x == 0


def test_vertical_move_onto_short_line_scrolls_left():
    nav = make_navigator(["x" * 200, "abc"], columns=20)
    for _ in range(50):
        nav.move(Direction.RIGHT)
    assert nav.buffer.scroll_x > 0
    nav.move(Direction.DOWN)
    assert nav.buffer.cursor_x == 3
    assert nav.buffer.scroll_x == 3
    assert_contained(nav)


def test_resize_restores_containment():
    """Shrinking the terminal re-establishes containment without a move."""
    nav = make_navigator(numbered_lines(100, width=100), columns=80, rows=24)
    for _ in range(20):
        nav.move(Direction.DOWN)
    for _ in range(60):
        nav.move(Direction.RIGHT)
    assert (nav.screen_columns, nav.screen_rows) == (76, 23)
    assert nav.buffer.scroll_y == 4
    assert nav.buffer.scroll_x == 0
    assert_contained(nav)

    nav.resize(40, 10)
    assert (nav.screen_columns, nav.screen_rows) == (36, 9)
    assert (nav.buffer.cursor_y, nav.buffer.cursor_x) == (20, 60)
    assert nav.buffer.scroll_y == 16
    assert nav.buffer.scroll_x == 25
    assert_contained(nav)


@pytest.mark.parametrize("rows", [2, 3, 4, 5, 8, 13, 24])
@pytest.mark.parametrize("columns", [3, 5, 12, 80])
def test_random_walk_stays_contained(rows, columns):
    """Containment holds for every reachable state, even on tiny screens."""
    rng = random.Random(rows * 1000 + columns)
    lines = ["w" * rng.randint(0, 120) for _ in range(150)]
    nav = make_navigator(lines, columns=columns, rows=rows)
    directions = list(Direction)
    for _ in range(1500):
        nav.move(rng.choice(directions))
        assert_contained(nav)


def test_random_resizes_stay_contained():
    rng = random.Random(42)
    lines = ["w" * rng.randint(0, 300) for _ in range(500)]
    nav = make_navigator(lines)
    directions = list(Direction)
    for i in range(2000):
        if i % 50 == 0:
            nav.resize(rng.randint(0, 200), rng.randint(0, 60))
            assert_contained(nav)
        nav.move(rng.choice(directions))
        assert_contained(nav)


def test_effective_lookahead_is_clamped_to_half_screen():
    assert effective_lookahead(6, 23) == 6
    assert effective_lookahead(6, 9) == 4
    assert effective_lookahead(6, 2) == 0
    assert effective_lookahead(6, 1) == 0
    assert effective_lookahead(0, 100) == 0


def test_maintain_scroll_leaves_contained_state_alone():
    buf = FileBuffer(numbered_lines(100))
    state = CursorState(cursor_x=3, cursor_y=50, desired_cursor_x=3, scroll_x=0, scroll_y=40)
    assert maintain_scroll(state, buf, 23, 70, 6) == state
