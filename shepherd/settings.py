"""
Settings Module for the Shepherd Puzzle Solver

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from shepherd.solver.alternatives import PIECE_LIMITS
from shepherd.solver.factory import DEFAULT_STRATEGY

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "strategy_name": DEFAULT_STRATEGY,
    "puzzles_file": "puzzles.txt",
    "color": True,
    "save_images": False,
    "image_dir": "renders",
    "timeout_sec": None,
    "piece_limits": dict(PIECE_LIMITS),
}


def _defaults() -> Dict[str, Any]:
    result = DEFAULT_SETTINGS.copy()
    result["piece_limits"] = dict(DEFAULT_SETTINGS["piece_limits"])
    return result


def _merge(stored: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay stored values on the defaults, dropping unknown keys."""
    result = _defaults()
    for key, value in stored.items():
        if key not in result:
            logger.debug(f"Ignoring unknown setting: {key}")
        elif key == "piece_limits":
            if not isinstance(value, dict):
                raise ValueError("piece_limits must be an object")
            result["piece_limits"].update(
                {str(kind): int(limit) for kind, limit in value.items()}
            )
        else:
            result[key] = value
    return result


def load_settings(path: Path = SETTINGS_FILE) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file to read

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return _defaults()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            raise ValueError("settings root must be an object")
        result = _merge(stored)
        logger.debug(f"Settings loaded from {path}: {result}")
        return result

    except (json.JSONDecodeError, OSError, ValueError, TypeError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return _defaults()


def save_settings(settings: Dict[str, Any], path: Path = SETTINGS_FILE) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file to write
    """
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
