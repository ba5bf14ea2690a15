"""Line buffer holding the content of the viewed file."""

from __future__ import annotations

import logging
import os
import re
from typing import Optional

from .constants import ViewerConstants
from .navigation import CursorState

logger = logging.getLogger(__name__)

# C0 controls, DEL and C1 controls; tabs are expanded before this applies
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def split_lines(text: str, tab_width: int = ViewerConstants.DEFAULT_TAB_WIDTH) -> list[str]:
    """Split file text into display lines.

    Lines end at '\\n' with an optional preceding '\\r'. A final newline
    does not start another line. Tabs are expanded and other control
    characters are shown as '?' so that every character occupies one
    screen column and nothing reaches the terminal as a control sequence.
    """
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    result = []
    for line in lines:
        if line.endswith('\r'):
            line = line[:-1]
        result.append(_CONTROL_CHARS.sub('?', line.expandtabs(tab_width)))
    return result


class FileBuffer:
    """A buffer that holds textual content plus cursor and scroll state.

    The content never changes after construction. The cursor and scroll
    fields are plain attributes; the navigator reads and writes them
    directly.
    """

    content: list[str]
    path: Optional[str]

    def __init__(self, content: Optional[list[str]] = None, path: Optional[str] = None):
        # An empty document is one empty line so there is always a cursor row
        self.content = list(content) if content else [""]
        self.path = path
        # Horizontal position of cursor within the content, zero is left
        self.cursor_x = 0
        # Column to return to when moving vertically
        self.desired_cursor_x = 0
        # Vertical position of cursor within the content, zero is top
        self.cursor_y = 0
        self.scroll_x = 0
        self.scroll_y = 0

    @classmethod
    def read_from_path(
        cls, path: str, tab_width: int = ViewerConstants.DEFAULT_TAB_WIDTH
    ) -> "FileBuffer":
        """Create a buffer by reading the file at path.

        Raises:
            OSError: if the file cannot be opened or read.
        """
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            text = f.read()
        lines = split_lines(text, tab_width)
        logger.debug(f"Loaded {len(lines)} lines from {path}")
        return cls(lines, path=os.fspath(path))

    def line_count(self) -> int:
        """Return the number of lines in this buffer."""
        return len(self.content)

    def gutter_width(self) -> int:
        """Return the number of digits in the line count."""
        return len(str(self.line_count()))

    def line(self, line_index: int) -> str:
        """Return the text of a line, or an empty string past either end."""
        if 0 <= line_index < len(self.content):
            return self.content[line_index]
        return ""

    def line_width(self, line_index: int) -> int:
        """Return the length of a line; out-of-range lines are empty."""
        return len(self.line(line_index))

    def snapshot(self) -> CursorState:
        """Return the cursor and scroll fields as an immutable state."""
        return CursorState(
            cursor_x=self.cursor_x,
            cursor_y=self.cursor_y,
            desired_cursor_x=self.desired_cursor_x,
            scroll_x=self.scroll_x,
            scroll_y=self.scroll_y,
        )

    def restore(self, state: CursorState) -> None:
        """Copy a state back into the cursor and scroll fields."""
        self.cursor_x = state.cursor_x
        self.cursor_y = state.cursor_y
        self.desired_cursor_x = state.desired_cursor_x
        self.scroll_x = state.scroll_x
        self.scroll_y = state.scroll_y

    @property
    def name(self) -> str:
        """Display name for the status line."""
        if self.path is None:
            return "[No Name]"
        return os.path.basename(self.path) or self.path
