"""
Settings Module for the Sum to 10 Solver

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "strategy_name": "auto",
    "target": 10,
    # Auto strategy thresholds
    "small_board_cells": 30,
    "small_beam_width": 20,
    "medium_board_cells": 50,
    "medium_beam_width": 12,
    "lookahead_depth": 3,
    # Explicit strategy parameters
    "beam_width": 20,
    "lookahead_candidates": 5,
    # Grid editor size
    "grid_rows": 14,
    "grid_cols": 8,
}

# Settings forwarded to each strategy's constructor: strategy -> {kwarg: key}
STRATEGY_SETTINGS: Dict[str, Dict[str, str]] = {
    "auto": {
        "small_board_cells": "small_board_cells",
        "small_beam_width": "small_beam_width",
        "medium_board_cells": "medium_board_cells",
        "medium_beam_width": "medium_beam_width",
        "lookahead_depth": "lookahead_depth",
    },
    "beam": {"beam_width": "beam_width"},
    "greedy_lookahead": {
        "depth": "lookahead_depth",
        "max_candidates": "lookahead_candidates",
    },
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError(f"expected a JSON object, got {type(settings).__name__}")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    path = path or SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def strategy_kwargs(settings: Dict[str, Any], strategy_name: str) -> Dict[str, Any]:
    """
    Constructor arguments for a strategy, taken from settings.

    Args:
        settings: Loaded settings
        strategy_name: Registered strategy name

    Returns:
        Keyword arguments for create_strategy (empty for unknown strategies)
    """
    mapping = STRATEGY_SETTINGS.get(strategy_name, {})
    return {
        kwarg: settings[key]
        for kwarg, key in mapping.items()
        if key in settings
    }
