"""Constants and configuration defaults for the tori viewer."""

class ViewerConstants:
    """Central configuration constants for the viewer."""

    # Scrolling
    DEFAULT_LOOKAHEAD = 6  # Lines kept visible beyond the cursor while scrolling

    # Loading
    DEFAULT_TAB_WIDTH = 8  # Tabs are expanded so one character is one column

    # Layout
    STATUS_ROWS = 1  # Rows reserved below the content for the status line
    GUTTER_SEPARATOR = " "  # Between line number and line content
    PAST_END_GLYPH = "~"  # Marks screen rows past the end of the file
    MIN_SCREEN_ROWS = 1
    MIN_SCREEN_COLUMNS = 1

    # Fallback terminal size when the real one is unknown
    FALLBACK_COLUMNS = 80
    FALLBACK_ROWS = 24

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Config file
    CONFIG_APP_NAME = "tori"
    CONFIG_FILE_NAME = "config.json"
