"""Configuration loader for keyword tables and category defaults."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Dict

from ...config import config_search_path

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_config(config_name: str) -> Dict[str, Any]:
    """Load a configuration file by name.

    The override directory (``FINTRACK_CONFIG_DIR``) is searched before the
    bundled files.  Results are cached; treat them as read-only.

    Args:
        config_name: Name of the config file (without .json extension)

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If no directory holds the configuration file
        json.JSONDecodeError: If the configuration file is invalid JSON

    Example:
        >>> config = load_config('categorization')
        >>> config['dining_keywords']
        ['restaurant', 'restoran']
    """
    for directory in config_search_path():
        config_path = directory / f"{config_name}.json"
        if config_path.exists():
            logger.debug("Loading %s configuration from %s", config_name, config_path)
            with open(config_path, 'r', encoding='utf-8') as f:
                return json.load(f)

    raise FileNotFoundError(f"Configuration file not found: {config_name}.json")


def get_categorization_config() -> Dict[str, Any]:
    """Get the categorization configuration.

    Returns:
        Keyword table, dining keywords, income markers and default categories
    """
    return load_config('categorization')


def get_config_value(config_name: str, *keys: str, default: Any = None) -> Any:
    """Get a nested configuration value by key path.

    Example:
        >>> get_config_value('categorization', 'fallback_category', 'name')
        'Other'
    """
    try:
        value = load_config(config_name)
        for key in keys:
            value = value[key]
        return value
    except (KeyError, FileNotFoundError):
        return default
