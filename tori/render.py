"""Projection of buffer content onto the visible viewport."""

from dataclasses import dataclass

from .buffer import FileBuffer
from .constants import ViewerConstants
from .geometry import ViewportGeometry


@dataclass(frozen=True)
class Frame:
    """One screen's worth of output.

    ``lines`` has one entry per content row. ``cursor_x``/``cursor_y`` are
    screen coordinates. ``status`` goes in the reserved bottom row.
    """
    lines: list
    cursor_x: int
    cursor_y: int
    status: str = ""


def render_line(buffer: FileBuffer, geometry: ViewportGeometry, line_index: int) -> str:
    """Render one content line with its gutter, or the past-end glyph."""
    if not 0 <= line_index < buffer.line_count():
        text = ViewerConstants.PAST_END_GLYPH
    else:
        line = buffer.line(line_index)
        start = min(buffer.scroll_x, len(line))
        end = min(start + geometry.screen_columns, len(line))
        number = str(line_index + 1).rjust(geometry.gutter_width)
        text = number + ViewerConstants.GUTTER_SEPARATOR + line[start:end]
    return text[:geometry.columns]


def render_status(buffer: FileBuffer, geometry: ViewportGeometry) -> str:
    """Render the status line: file name left, line:column right."""
    width = geometry.columns
    position = f"{buffer.cursor_y + 1}:{buffer.cursor_x + 1}"
    name = buffer.name
    gap = width - len(name) - len(position)
    if gap < 1:
        return (name + " " + position)[:width]
    return name + " " * gap + position


def render_frame(buffer: FileBuffer, geometry: ViewportGeometry, show_status: bool = True) -> Frame:
    """Project buffer content and cursor onto the screen."""
    lines = [
        render_line(buffer, geometry, buffer.scroll_y + row)
        for row in range(geometry.screen_rows)
    ]
    # Offset cursor horizontally by the width of the line numbers
    cursor_x = buffer.cursor_x + geometry.content_left - buffer.scroll_x
    cursor_y = buffer.cursor_y - buffer.scroll_y
    status = render_status(buffer, geometry) if show_status else ""
    return Frame(lines=lines, cursor_x=cursor_x, cursor_y=cursor_y, status=status)
