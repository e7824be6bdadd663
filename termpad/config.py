"""User configuration for the termpad editor.

Settings are read from ``config.json`` in the OS-appropriate user config
directory. Bad values never stop the editor from starting; they are logged
and replaced by defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants
from .highlighter import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "termpad"


def config_dir() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME))


def log_dir() -> Path:
    return Path(platformdirs.user_log_dir(APP_NAME))


@dataclass
class EditorConfig:
    tab_size: int = EditorConstants.DEFAULT_TAB_SIZE
    style: str = DEFAULT_STYLE
    watch_interval: float = EditorConstants.WATCH_INTERVAL
    mouse: bool = True

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "EditorConfig":
        """Load configuration, falling back to defaults.

        Args:
            path: Config file; defaults to config.json in the user config dir.

        Returns:
            The configuration with every invalid or missing value defaulted
        """
        if path is None:
            path = config_dir() / "config.json"
        if not path.exists():
            return cls()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load config from {path}: {e}")
            return cls()

        if not isinstance(data, dict):
            logger.warning("Config file has invalid format (not a dict), ignoring")
            return cls()
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        values = {}
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                # Forward compatibility
                continue
            if validate_setting(key, value):
                values[key] = value
            else:
                logger.warning(f"Invalid value for {key}: {value!r}, using default")
        return cls(**values)


def validate_setting(key: str, value: Any) -> bool:
    """Validate one configuration value.

    Args:
        key: Setting name
        value: Value read from the config file

    Returns:
        True if the value can be used
    """
    if key == 'tab_size':
        # bool is an int subclass; reject it explicitly
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 16
    if key == 'watch_interval':
        return (isinstance(value, (int, float)) and not isinstance(value, bool)
                and 0.01 <= value <= 10)
    if key == 'style':
        return isinstance(value, str) and bool(value)
    if key == 'mouse':
        return isinstance(value, bool)
    return True
