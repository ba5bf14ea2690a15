"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional

from .constants import ViewerConstants
from .render import Frame


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and raw input.

        Raises:
            OSError: if stdin is not a terminal that can enter raw mode.
        """
        print(self.term.enter_fullscreen + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input  # type: ignore
            # Enter raw mode immediately so reads work
            curtsies_input = Input(keynames='curtsies')
            curtsies_input.__enter__()
            self._curtsies_input = curtsies_input

    def cleanup(self):
        """Exit fullscreen mode and restore terminal.

        Safe to call more than once and after a partial setup.
        """
        try:
            if self._curtsies_input is not None:
                # Exit raw mode context
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
        finally:
            self._curtsies_input = None
            if self.is_fullscreen:
                print(self.term.normal + self.term.exit_fullscreen + self.term.normal_cursor,
                      end='', flush=True)
                self.is_fullscreen = False

    def draw_frame(self, frame: Frame):
        """Draw a frame: content rows, status line, then the cursor.

        Everything is written with a single flush at the end.
        """
        out = [self.term.home + self.term.clear]
        for y, line in enumerate(frame.lines):
            out.append(self.term.move(y, 0) + self.term.white(line))

        if frame.status:
            status_row = len(frame.lines)
            out.append(self.term.move(status_row, 0) + self.term.reverse(frame.status))

        out.append(self.term.move(frame.cursor_y, frame.cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if no key arrived in time or
            input has not been set up.
        """
        if self._curtsies_input is None:
            return None
        # curtsies may hold keys it already read, so ask it rather than stdin
        evt = self._curtsies_input.send(None if timeout is None else float(timeout))  # type: ignore
        if evt is None:
            return None
        return str(evt)

    @property
    def columns(self) -> int:
        """Terminal width in columns."""
        return self.term.width or ViewerConstants.FALLBACK_COLUMNS

    @property
    def rows(self) -> int:
        """Terminal height in rows, including the status line."""
        return self.term.height or ViewerConstants.FALLBACK_ROWS
