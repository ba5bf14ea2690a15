"""Tori - A terminal file viewer with wings."""

from .buffer import FileBuffer
from .geometry import ViewportGeometry
from .navigation import CursorState, Direction
from .navigator import Navigator
from .render import Frame, render_frame
from .version import __version__

__all__ = [
    'FileBuffer',
    'ViewportGeometry',
    'CursorState',
    'Direction',
    'Navigator',
    'Frame',
    'render_frame',
    '__version__',
]
