"""Viewport geometry derived from terminal size and gutter width."""

from dataclasses import dataclass

from .constants import ViewerConstants


@dataclass
class ViewportGeometry:
    """Visible row/column capacity of the content area.

    Only the terminal size and gutter width are stored; the screen
    dimensions are computed on every access so they cannot go stale.
    """
    columns: int
    rows: int
    gutter_width: int = 1

    @property
    def screen_columns(self) -> int:
        """Columns available for line content (gutter and separator removed)."""
        return max(self.columns - self.gutter_width - 1, ViewerConstants.MIN_SCREEN_COLUMNS)

    @property
    def screen_rows(self) -> int:
        """Rows available for content (status line removed)."""
        return max(self.rows - ViewerConstants.STATUS_ROWS, ViewerConstants.MIN_SCREEN_ROWS)

    @property
    def content_left(self) -> int:
        """Screen column where line content starts."""
        return self.gutter_width + len(ViewerConstants.GUTTER_SEPARATOR)

    def resize(self, columns: int, rows: int) -> None:
        self.columns = max(columns, 0)
        self.rows = max(rows, 0)
