"""Walk settings read from config.json and the environment.

Settings live under a ``walk`` section of ``config.json`` in the working
directory. A setting missing from the file is looked up in the environment
as its upper-cased key path joined with underscores, so ``walk.max_depth``
falls back to ``WALK_MAX_DEPTH``.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

TRUE_STRINGS = {"1", "true", "yes", "on"}


def load_config(config_path: str = "config.json") -> Dict[str, Any]:
    """Read the settings file.

    A missing file, unreadable JSON, or a top-level value that is not an
    object all give ``{}`` so that every setting falls through to the
    environment or its default.

    Args:
        config_path: Settings file to read (default: "config.json")

    Returns:
        The decoded settings object
    """
    path = Path(config_path)
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            config = json.load(f)
    except (json.JSONDecodeError, IOError):
        return {}

    return config if isinstance(config, dict) else {}


def _env_key(keys: List[str]) -> str:
    return "_".join(k.upper() for k in keys)


def get_config_value(
    keys: List[str], default: Any = None, config: Optional[Dict[str, Any]] = None
) -> Any:
    """Look up one setting by its key path.

    The settings object is searched first, then the environment variable
    named after the key path, then ``default``. A null in the settings
    object counts as unset.

    Args:
        keys: Key path, e.g. ["walk", "root_label"]
        default: Value returned when the setting is found nowhere
        config: Settings object (read with load_config() when omitted)

    Returns:
        The setting's raw value; values taken from the environment are strings
    """
    if config is None:
        config = load_config()

    section: Any = config
    for key in keys:
        section = section.get(key) if isinstance(section, dict) else None
        if section is None:
            break

    if section is not None:
        return section

    return os.environ.get(_env_key(keys), default)


def get_config_bool(
    keys: List[str], default: bool = False, config: Optional[Dict[str, Any]] = None
) -> bool:
    """Look up an on/off setting.

    Environment variables arrive as strings, so "1", "true", "yes" and "on"
    (any case) are read as True and every other string as False.
    """
    value = get_config_value(keys, default=default, config=config)
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def get_config_int(
    keys: List[str], default: int, config: Optional[Dict[str, Any]] = None
) -> int:
    """Look up a whole-number setting.

    Raises:
        ValueError: If the setting is not an integer
    """
    value = get_config_value(keys, default=default, config=config)
    if isinstance(value, bool):
        raise ValueError(f"{'.'.join(keys)} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{'.'.join(keys)} must be an integer, got {value!r}") from None
