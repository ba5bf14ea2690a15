"""Keyboard input handling using curtsies-style tokens."""

import re
from typing import Optional, Union
from dataclasses import dataclass, field
from enum import Enum


class KeyKind(Enum):
    """Whether a key went down or came up."""
    PRESS = "press"
    RELEASE = "release"


class Modifier(str, Enum):
    """Modifier keys held with a key."""
    CTRL = "ctrl"
    ALT = "alt"
    SHIFT = "shift"


NO_MODIFIERS: frozenset = frozenset()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a parsed keyboard event."""
    keycode: str  # The base key (e.g., 'q', 'left', 'escape')
    modifiers: frozenset = NO_MODIFIERS
    kind: KeyKind = KeyKind.PRESS
    raw: str = field(default='', compare=False)  # The token as read from the terminal

    @property
    def binding(self) -> tuple:
        """Key used for keymap lookups."""
        return (self.keycode, self.modifiers)


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""
    columns: int
    rows: int


InputEvent = Union[KeyEvent, ResizeEvent]

# Names curtsies uses for keys, normalized to the names used in keymaps
_SPECIAL_NAMES = {
    'left': 'left',
    'right': 'right',
    'up': 'up',
    'down': 'down',
    'home': 'home',
    'end': 'end',
    'pageup': 'page_up',
    'page_up': 'page_up',
    'pagedown': 'page_down',
    'page_down': 'page_down',
    'insert': 'insert',
    'delete': 'delete',
    'backspace': 'backspace',
    'enter': 'enter',
    'esc': 'escape',
    'escape': 'escape',
    'tab': 'tab',
    'space': ' ',
    'spacebar': ' ',
    'spc': ' ',
}

_MODIFIER_NAMES = {
    'ctrl': Modifier.CTRL,
    'alt': Modifier.ALT,
    'meta': Modifier.ALT,
    'esc': Modifier.ALT,
    'shift': Modifier.SHIFT,
}

# Modifier prefix such as 'Ctrl-' or 'Esc+', then the key name or character
_KEY_NAME = re.compile(r'((?:[A-Za-z]+[-+])*)(.+)$')


def parse_key(key) -> KeyEvent:
    """Parse a curtsies key token into a KeyEvent.

    Handles names like '<LEFT>', '<Ctrl-q>', '<Esc+h>', '<F1>', single
    ASCII control characters and plain characters. Terminals only report
    key presses, so the kind is always PRESS.
    """
    key_str = str(key)

    # Curtsies-style key names
    if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
        name = key_str[1:-1]
        # Modifiers end in '-' or '+' (e.g. '<Esc+u>'); the key itself may be either
        prefix, base = _KEY_NAME.match(name).groups()
        mods = frozenset(
            _MODIFIER_NAMES[p.lower()] for p in re.split(r'[-+]', prefix)
            if p.lower() in _MODIFIER_NAMES
        )
        lower = base.lower()
        if lower in _SPECIAL_NAMES:
            base = _SPECIAL_NAMES[lower]
        elif len(base) > 1:
            base = lower  # f1, f12, ...
        elif Modifier.CTRL in mods:
            base = lower
        # Ctrl-J / Ctrl-M are what terminals send for Enter
        if mods == {Modifier.CTRL} and base in ('j', 'm'):
            return KeyEvent('enter', raw=key_str)
        return KeyEvent(base, mods, raw=key_str)

    if len(key_str) == 1:
        o = ord(key_str)
        if o == 27:
            return KeyEvent('escape', raw=key_str)
        if o in (10, 13):
            return KeyEvent('enter', raw=key_str)
        if o == 9:
            return KeyEvent('tab', raw=key_str)
        if o == 127:
            return KeyEvent('backspace', raw=key_str)
        if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
            return KeyEvent(chr(ord('a') + o - 1), frozenset({Modifier.CTRL}), raw=key_str)

    # Alt-<char> delivered as ESC prefix
    if len(key_str) == 2 and key_str[0] == '\x1b':
        return KeyEvent(key_str[1], frozenset({Modifier.ALT}), raw=key_str)

    return KeyEvent(key_str, raw=key_str)


class KeyboardHandler:
    """Reads keys from the terminal and turns them into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None if nothing arrived before the timeout."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return parse_key(key)


def format_binding(event: KeyEvent) -> str:
    """Render a key as the token used in config files, e.g. 'ctrl-q'."""
    order = [Modifier.CTRL, Modifier.ALT, Modifier.SHIFT]
    prefix = ''.join(f"{m.value}-" for m in order if m in event.modifiers)
    keycode = 'space' if event.keycode == ' ' else event.keycode
    return prefix + keycode


def parse_binding(token: str) -> tuple:
    """Parse a config token like 'ctrl-q' or 'left' into a keymap key.

    Raises:
        ValueError: if the token is empty or names an unknown modifier.
    """
    if not token:
        raise ValueError("empty key binding")
    if token == '-':
        return ('-', NO_MODIFIERS)
    parts = token.split('-')
    base = parts[-1]
    if base == '':
        # Trailing '-' is the key itself, e.g. 'ctrl--'
        parts = parts[:-2] + ['-']
        base = '-'
    mods = set()
    for part in parts[:-1]:
        mod = _MODIFIER_NAMES.get(part.lower())
        if mod is None:
            raise ValueError(f"unknown modifier {part!r} in {token!r}")
        mods.add(mod)
    lower = base.lower()
    if lower in _SPECIAL_NAMES:
        base = _SPECIAL_NAMES[lower]
    elif len(base) > 1 or mods & {Modifier.CTRL}:
        base = lower
    return (base, frozenset(mods))
