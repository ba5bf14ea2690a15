"""Navigator: applies input to the buffer and keeps the viewport consistent."""

from __future__ import annotations

import logging
from typing import Optional

from . import navigation
from .buffer import FileBuffer
from .commands import Keymap, ViewerCommand
from .config import ViewerConfig
from .geometry import ViewportGeometry
from .keyboard import InputEvent, KeyEvent, ResizeEvent
from .navigation import Direction
from .render import Frame, render_frame

logger = logging.getLogger(__name__)


class Navigator:
    """Editor state of tori.

    Owns the buffer, the viewport geometry, the config and the keymap.
    All cursor and scroll changes go through here so that the viewport
    invariants hold after every event.
    """

    def __init__(
        self,
        buffer: FileBuffer,
        columns: int,
        rows: int,
        config: Optional[ViewerConfig] = None,
        keymap: Optional[Keymap] = None,
    ):
        self.buffer = buffer
        self.config = config or ViewerConfig()
        if keymap is None:
            keymap = Keymap.default()
            keymap.apply_overrides(self.config.keymap)
        self.keymap = keymap
        self.geometry = ViewportGeometry(columns, rows, buffer.gutter_width())
        # Flag indicating that the viewer should quit on the next update
        self.should_quit = False

    @property
    def screen_rows(self) -> int:
        return self.geometry.screen_rows

    @property
    def screen_columns(self) -> int:
        return self.geometry.screen_columns

    def maintain_scroll(self) -> None:
        """Maintain horizontal and vertical scroll of the current buffer."""
        state = navigation.maintain_scroll(
            self.buffer.snapshot(),
            self.buffer,
            self.screen_rows,
            self.screen_columns,
            self.config.lookahead,
        )
        self.buffer.restore(state)

    def move(self, direction: Direction) -> None:
        """Move the cursor one step, then bring it back into view."""
        state = navigation.step(self.buffer.snapshot(), direction, self.buffer)
        self.buffer.restore(state)
        self.maintain_scroll()

    def resize(self, columns: int, rows: int) -> None:
        logger.debug(f"Resize to {columns}x{rows}")
        self.geometry.resize(columns, rows)
        self.geometry.gutter_width = self.buffer.gutter_width()
        self.maintain_scroll()

    def dispatch(self, command: ViewerCommand) -> None:
        logger.debug(f"Dispatching {command!r}")
        command.execute(self)

    def handle_key(self, key_event: KeyEvent) -> bool:
        """Look up a key event in the keymap and dispatch it.

        Returns:
            True if the key was bound to a command
        """
        command = self.keymap.lookup(key_event)
        if command is None:
            return False
        self.dispatch(command)
        return True

    def handle_event(self, event: InputEvent) -> None:
        """Process one input event to completion."""
        if isinstance(event, ResizeEvent):
            self.resize(event.columns, event.rows)
        elif isinstance(event, KeyEvent):
            self.handle_key(event)
        else:
            logger.debug(f"Ignoring event {event!r}")

    def render(self) -> Frame:
        return render_frame(self.buffer, self.geometry, show_status=self.config.show_status)
