# tedit/utils/utils.py
"""
tedit.utils.utils.py
====================

This module provides a collection of core utility functions for the tedit editor.

Key functionalities include:
- Automatic User Configuration: Manages the creation and loading of the
  user-specific configuration file (`config.toml`) in `~/.config/tedit`,
  ensuring a seamless first-run experience.
- Robust Configuration Loading: Loads a hardcoded, built-in default
  configuration, then recursively merges it with user-defined settings
  from `~/.config/tedit/config.toml`.
- Helper Utilities: Deep-merging dictionaries and hex to xterm-256 color
  conversion for the renderer palette.

The editor is always runnable, even if the user configuration file is
missing or corrupted, by falling back to the embedded defaults.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("tedit")

# --- Constants ---
WHITE_FG_IDX = 255
CONFIG_DIR_NAME = "tedit"

# This dictionary is the embedded default configuration.
# It serves as the ultimate fallback, ensuring the editor can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "tab_width": 4,
        "gutter_width": 5,
        "color_mode": "cpp",
    },
    "clipboard": {"enabled": True},
    "colors": {
        "normal": "#FFFFFF",
        "line_number": "#00CDCD",
        "keyword": "#CDCD00",
        "string": "#00CD00",
        "bracket": "#CD00CD",
        "saved": "#0000EE",
        "comment": "#FFFFD7",
        "number": "#0000EE",
    },
    "logging": {
        "directory": "",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


# --- Helper Functions ---

def get_user_config_path() -> Path:
    """Returns the location of the user's `config.toml`."""
    return Path.home() / ".config" / CONFIG_DIR_NAME / "config.toml"


def ensure_user_config_exists(config_path: Optional[Path] = None) -> None:
    """Creates a `config.toml` template from `DEFAULT_CONFIG` if it is missing."""
    user_config_path = config_path or get_user_config_path()
    try:
        if user_config_path.exists():
            return
        user_config_path.parent.mkdir(parents=True, exist_ok=True)
        with user_config_path.open("w", encoding="utf-8") as f:
            toml.dump(DEFAULT_CONFIG, f)
        logger.info(f"Created user config template at: {user_config_path}")
    except Exception as e:
        logger.critical(f"Could not create user configuration file: {e}", exc_info=True)


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = config_path or get_user_config_path()
    ensure_user_config_exists(user_config_path)

    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
