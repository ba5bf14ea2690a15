"""Pure cursor and scroll transitions.

Every function here takes a :class:`CursorState` plus whatever it needs to
know about the content (anything with ``line_count()`` and
``line_width(index)``) and returns a new state. Nothing is mutated, so the
navigation rules can be tested without a buffer or a terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol


class Direction(Enum):
    """Directions the cursor can move in."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class LineMetrics(Protocol):
    def line_count(self) -> int: ...

    def line_width(self, line_index: int) -> int: ...


@dataclass(frozen=True)
class CursorState:
    """Cursor and scroll offsets into a line buffer."""
    cursor_x: int = 0
    cursor_y: int = 0
    desired_cursor_x: int = 0  # Column kept across vertical moves
    scroll_x: int = 0
    scroll_y: int = 0


def _last_line(lines: LineMetrics) -> int:
    return max(lines.line_count() - 1, 0)


def project_to_desired(state: CursorState, lines: LineMetrics) -> CursorState:
    """Move cursor x to the desired column or the end of line, whichever is smaller."""
    cursor_x = min(state.desired_cursor_x, lines.line_width(state.cursor_y))
    return replace(state, cursor_x=cursor_x)


def move_vertical(state: CursorState, delta: int, lines: LineMetrics) -> CursorState:
    """Move ``delta`` lines, saturating at the first and last line.

    The desired column is left alone so that a later move onto a longer
    line restores it.
    """
    cursor_y = min(max(state.cursor_y + delta, 0), _last_line(lines))
    return project_to_desired(replace(state, cursor_y=cursor_y), lines)


def move_left(state: CursorState, lines: LineMetrics) -> CursorState:
    """Move one column left, wrapping to the end of the previous line."""
    if state.cursor_x == 0:
        if state.cursor_y == 0:
            # Top-left corner: nowhere to wrap to.
            return state
        moved = move_vertical(state, -1, lines)
        cursor_x = lines.line_width(moved.cursor_y)
    else:
        moved = state
        cursor_x = state.cursor_x - 1
    return replace(moved, cursor_x=cursor_x, desired_cursor_x=cursor_x)


def move_right(state: CursorState, lines: LineMetrics) -> CursorState:
    """Move one column right, wrapping to the start of the next line.

    The cursor may sit one past the last character; only a move from
    there wraps. On the last line the wrap returns to column 0 of the
    same line.
    """
    line_width = lines.line_width(state.cursor_y)
    if state.cursor_x >= line_width:
        wrapped = replace(state, scroll_x=0, cursor_x=0, desired_cursor_x=0)
        return move_vertical(wrapped, 1, lines)
    cursor_x = min(state.cursor_x + 1, line_width)
    return replace(state, cursor_x=cursor_x, desired_cursor_x=cursor_x)


def step(state: CursorState, direction: Direction, lines: LineMetrics) -> CursorState:
    """Apply a single cursor move, without touching the scroll offsets."""
    if direction is Direction.UP:
        return move_vertical(state, -1, lines)
    if direction is Direction.DOWN:
        return move_vertical(state, 1, lines)
    if direction is Direction.LEFT:
        return move_left(state, lines)
    if direction is Direction.RIGHT:
        return move_right(state, lines)
    raise ValueError(f"Unknown direction: {direction!r}")


def effective_lookahead(lookahead: int, screen_rows: int) -> int:
    """Clamp the lookahead so the scroll window can hold it on both sides."""
    return max(0, min(lookahead, (screen_rows - 1) // 2))


def maintain_scroll(
    state: CursorState,
    lines: LineMetrics,
    screen_rows: int,
    screen_columns: int,
    lookahead: int,
) -> CursorState:
    """Adjust scroll offsets so the cursor stays inside the viewport.

    Vertically the window only moves once the cursor comes within
    ``lookahead`` lines of its edge. Horizontally it follows the cursor
    exactly.
    """
    cy, cx = state.cursor_y, state.cursor_x
    sy, sx = state.scroll_y, state.scroll_x
    margin = effective_lookahead(lookahead, screen_rows)
    scroll_y, scroll_x = sy, sx

    # Scroll up if needed.
    if cy - margin < sy:
        scroll_y = max(cy - margin, 0)
    # Scroll down if needed.
    if cy + margin >= sy + screen_rows:
        bottom = min(cy + margin, _last_line(lines))
        scroll_y = max(bottom - screen_rows + 1, 0)
    # Scroll left if needed.
    if cx < sx:
        scroll_x = cx
    # Scroll right if needed.
    if cx >= sx + screen_columns:
        scroll_x = cx - screen_columns + 1

    return replace(state, scroll_x=scroll_x, scroll_y=scroll_y)
