"""Tori CLI entry point.

Allows running via `python -m tori` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = "usage: tori [--log FILE] FILE | --version | --keytest"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events and their bound actions. Quit with ESC."""
    from .commands import Keymap
    from .config import load_config
    from .keyboard import KeyboardHandler, format_binding
    from .terminal import TerminalInterface

    keymap = Keymap.default()
    keymap.apply_overrides(load_config().keymap)

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    try:
        term.setup()
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.keycode == 'escape' and not ev.modifiers:
                break
            command = keymap.lookup(ev)
            action = command.name if command else "-"
            print(f"key={format_binding(ev)} raw='{_escape_bytes(ev.raw)}' action={action}\r")
    finally:
        term.cleanup()
    print("Exiting keyboard test.")


def _configure_logging(log_file: Optional[str]) -> None:
    # The viewer owns the whole screen, so logs only ever go to a file
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _usage_error(message: str) -> int:
    print(f"tori: {message}", file=sys.stderr)
    print(USAGE, file=sys.stderr)
    return 2


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing: version, keyboard test mode, log file and a filename
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0

    log_file = None
    if args and args[0] == '--log':
        if len(args) < 2:
            return _usage_error("--log needs a file name")
        log_file = args[1]
        args = args[2:]
    if len(args) != 1:
        return _usage_error("expected exactly one file")
    _configure_logging(log_file)

    # Lazy import to avoid importing terminal deps for --version
    from .buffer import FileBuffer
    from .config import load_config
    from .viewer import Viewer

    path = args[0]
    config = load_config()
    try:
        buffer = FileBuffer.read_from_path(path, tab_width=config.tab_width)
    except OSError as e:
        logger.error(f"Could not load {path}: {e}")
        reason = e.strerror or str(e)
        print(f"tori: {path}: {reason}", file=sys.stderr)
        return 1

    Viewer(buffer, config).run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
