"""Main viewer controller: the blocking event loop."""

import logging
import os
import select
import signal
from typing import Optional

from .buffer import FileBuffer
from .config import ViewerConfig
from .constants import ViewerConstants
from .keyboard import KeyboardHandler, ResizeEvent
from .navigator import Navigator
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class Viewer:
    """Terminal file viewer application controller.

    Blocks on the next input event, processes it to completion, redraws,
    and blocks again. The terminal is restored on every way out of
    :meth:`run`.
    """

    def __init__(self, buffer: FileBuffer, config: Optional[ViewerConfig] = None,
                 terminal: Optional[TerminalInterface] = None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.navigator = Navigator(buffer, self.terminal.columns, self.terminal.rows, config)
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, ViewerConstants.RESIZE_PIPE_MARKER)

    def _draw(self):
        """Draw the current state to the terminal."""
        self.terminal.draw_frame(self.navigator.render())

    def _read_resize(self) -> ResizeEvent:
        # Drain the pipe; several signals collapse into one resize
        os.read(self._resize_pipe_r, 1024)
        return ResizeEvent(self.terminal.columns, self.terminal.rows)

    def _handle_pending_keys(self) -> bool:
        """Handle every key already waiting, so a burst costs one redraw.

        Returns:
            True if at least one key was handled
        """
        handled = False
        # Non-blocking since select says input is ready
        key_event = self.keyboard.get_key_event(timeout=0)
        while key_event is not None:
            self.navigator.handle_event(key_event)
            handled = True
            if self.navigator.should_quit:
                break
            key_event = self.keyboard.get_key_event(timeout=0)
        return handled

    def run(self):
        """Run the main viewer loop until quit.

        Terminal I/O errors propagate to the caller after the terminal
        has been restored.
        """
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            self.terminal.setup()
            with self.terminal.term.cbreak():
                # Pick up any size change since construction, then draw the first frame
                self.navigator.resize(self.terminal.columns, self.terminal.rows)
                self._draw()

                while not self.navigator.should_quit:
                    # Wait for input on stdin or resize pipe
                    ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                    if self._resize_pipe_r in ready:
                        self.navigator.handle_event(self._read_resize())
                    elif 0 in ready:
                        if not self._handle_pending_keys():
                            continue
                    else:
                        continue

                    if not self.navigator.should_quit:
                        self._draw()
        except KeyboardInterrupt:
            logger.debug("Interrupted")
        finally:
            # Restore original signal handler
            signal.signal(signal.SIGWINCH, original_winch_handler)
            # Close pipes
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
