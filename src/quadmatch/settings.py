"""
Settings Module for quadmatch tooling

Provides persistent storage for tooling preferences and default rules
using JSON. Settings are stored in config.json in the working directory
unless another path is given.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .rules import RuleConfig

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "log_level": "INFO",
    "strategy_name": "bfs",
    "seed": None,
    "rules": {},
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (defaults to config.json)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    if not path.exists():
        logger.debug(f"Settings file {path} not found, using defaults")
        return _defaults()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return _defaults()

    if not isinstance(settings, dict):
        logger.warning(f"Settings file {path} does not hold an object, using defaults")
        return _defaults()

    # Merge with defaults to handle missing keys
    result = _defaults()
    result.update(settings)
    logger.debug(f"Settings loaded: {result}")
    return result


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to config.json)
    """
    path = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def rule_config_from_settings(settings: Dict[str, Any]) -> RuleConfig:
    """Build the RuleConfig described by the settings' "rules" section."""
    rules = settings.get("rules") or {}
    if not isinstance(rules, dict):
        logger.warning("Settings 'rules' section is not an object, using default rules")
        return RuleConfig()
    return RuleConfig.from_dict(rules)


def _defaults() -> Dict[str, Any]:
    result = DEFAULT_SETTINGS.copy()
    result["rules"] = {}
    return result
