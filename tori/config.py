"""Viewer configuration and its on-disk config file.

The config file is a JSON object stored in the OS-appropriate user config
directory, e.g. ``~/.config/tori/config.json`` on Linux::

    {
        "lookahead": 4,
        "tab_width": 4,
        "show_status": true,
        "keymap": {"ctrl-q": "quit", "k": "move_up", "q": "none"}
    }

Problems with the file are never fatal: they are logged and the defaults
are used instead.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import ViewerConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewerConfig:
    """Viewer configuration, read-only once constructed."""
    # Vertical scroll lookahead
    lookahead: int = ViewerConstants.DEFAULT_LOOKAHEAD
    tab_width: int = ViewerConstants.DEFAULT_TAB_WIDTH
    show_status: bool = True
    keymap: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.lookahead < 0:
            raise ValueError(f"lookahead must be non-negative, got {self.lookahead}")
        if self.tab_width < 1:
            raise ValueError(f"tab_width must be positive, got {self.tab_width}")


def default_config_path() -> Path:
    """Return the path of the user's config file."""
    config_dir = Path(platformdirs.user_config_dir(ViewerConstants.CONFIG_APP_NAME))
    return config_dir / ViewerConstants.CONFIG_FILE_NAME


def validate_setting(key: str, value: Any) -> bool:
    """Validate a single config value.

    Unknown keys are considered valid (forward compatibility) and ignored
    by the loader.
    """
    if key == 'lookahead':
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if key == 'tab_width':
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 16
    if key == 'show_status':
        return isinstance(value, bool)
    if key == 'keymap':
        return isinstance(value, dict) and all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        )
    return True


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return {}

    # Validate that it's a dict
    if not isinstance(data, dict):
        logger.warning(f"Config file {path} has invalid format (not an object), ignoring")
        return {}
    return data


def config_from_dict(data: Dict[str, Any]) -> ViewerConfig:
    """Build a config from parsed JSON, dropping invalid values."""
    known = {name for name in ViewerConfig.__dataclass_fields__}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.debug(f"Ignoring unknown config key {key!r}")
            continue
        if not validate_setting(key, value):
            logger.warning(f"Invalid value for {key!r}: {value!r}, using default")
            continue
        values[key] = value
    return ViewerConfig(**values)


def load_config(path: Optional[Path] = None) -> ViewerConfig:
    """Load the viewer config, falling back to defaults on any problem."""
    path = path if path is not None else default_config_path()
    return config_from_dict(_read_config_file(path))
