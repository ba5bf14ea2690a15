"""Command pattern implementation for viewer actions and the keymap."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Tuple, TYPE_CHECKING

from .keyboard import NO_MODIFIERS, KeyEvent, KeyKind, parse_binding
from .navigation import Direction

if TYPE_CHECKING:
    from .navigator import Navigator

logger = logging.getLogger(__name__)

KeyBinding = Tuple[str, frozenset]


class ViewerCommand(ABC):
    """Base class for viewer commands."""

    name: str = ""

    @abstractmethod
    def execute(self, navigator: 'Navigator') -> None:
        """Execute the command against the navigator state."""

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __hash__(self):
        return hash((type(self), tuple(sorted(self.__dict__.items()))))

    def __repr__(self):
        return f"{type(self).__name__}()"


class QuitCommand(ViewerCommand):
    name = "quit"

    def execute(self, navigator):
        navigator.should_quit = True


class MoveCommand(ViewerCommand):
    """Move the cursor one step in a direction."""

    def __init__(self, direction: Direction):
        self.direction = direction

    @property
    def name(self) -> str:
        return f"move_{self.direction.value}"

    def execute(self, navigator):
        navigator.move(self.direction)

    def __repr__(self):
        return f"MoveCommand({self.direction})"


def command_from_name(name: str) -> Optional[ViewerCommand]:
    """Look up a command by its config name, e.g. 'quit' or 'move_left'.

    Returns None for 'none', which unbinds a key.

    Raises:
        ValueError: if the name is not a known action.
    """
    if name == "none":
        return None
    if name == QuitCommand.name:
        return QuitCommand()
    if name.startswith("move_"):
        try:
            return MoveCommand(Direction(name[len("move_"):]))
        except ValueError:
            pass
    raise ValueError(f"unknown action {name!r}")


class Keymap:
    """Bindings between (keycode, modifiers) pairs and commands."""

    def __init__(self, bindings: Optional[Dict[KeyBinding, ViewerCommand]] = None):
        self._commands: Dict[KeyBinding, ViewerCommand] = dict(bindings or {})

    @classmethod
    def default(cls) -> 'Keymap':
        keymap = cls()
        keymap.register(('q', NO_MODIFIERS), QuitCommand())

        # Movement with arrow keys
        keymap.register(('left', NO_MODIFIERS), MoveCommand(Direction.LEFT))
        keymap.register(('right', NO_MODIFIERS), MoveCommand(Direction.RIGHT))
        keymap.register(('up', NO_MODIFIERS), MoveCommand(Direction.UP))
        keymap.register(('down', NO_MODIFIERS), MoveCommand(Direction.DOWN))
        return keymap

    def register(self, key: KeyBinding, command: ViewerCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def unregister(self, key: KeyBinding):
        self._commands.pop(key, None)

    def get_command(self, key: KeyBinding) -> Optional[ViewerCommand]:
        """Get the command for a key combination."""
        return self._commands.get(key)

    def lookup(self, key_event: KeyEvent) -> Optional[ViewerCommand]:
        """Get the command for a key event; releases never map to anything."""
        if key_event.kind is KeyKind.RELEASE:
            return None
        return self.get_command(key_event.binding)

    def apply_overrides(self, overrides: Mapping[str, str]) -> None:
        """Rebind keys from config tokens, e.g. {'ctrl-q': 'quit', 'q': 'none'}.

        Invalid entries are logged and skipped.
        """
        for token, action in overrides.items():
            try:
                key = parse_binding(token)
                command = command_from_name(action)
            except ValueError as e:
                logger.warning(f"Ignoring keymap entry {token!r}: {e}")
                continue
            if command is None:
                self.unregister(key)
            else:
                self.register(key, command)

    def __len__(self):
        return len(self._commands)
