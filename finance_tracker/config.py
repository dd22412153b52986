"""Configuration management for the finance tracker core.

This module centralizes configuration values including paths, display
defaults, logging setup and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

# Base package root - assumes this file is in finance_tracker/
_PACKAGE_ROOT = Path(__file__).parent.resolve()

# Bundled JSON configuration (keyword tables, default categories)
DEFAULT_CONFIG_DIR = _PACKAGE_ROOT / "lib" / "config"

# Optional directory searched before the bundled configuration
_override_dir = os.getenv("FINTRACK_CONFIG_DIR")
CONFIG_OVERRIDE_DIR: Optional[Path] = Path(_override_dir).resolve() if _override_dir else None

# Display
CURRENCY_SYMBOL = os.getenv("FINTRACK_CURRENCY_SYMBOL", "₺")

# Logging
LOG_LEVEL = os.getenv("FINTRACK_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_search_path() -> list[Path]:
    """Directories searched for JSON configuration, highest priority first."""
    paths = [DEFAULT_CONFIG_DIR]
    if CONFIG_OVERRIDE_DIR is not None:
        paths.insert(0, CONFIG_OVERRIDE_DIR)
    return paths


def configure_logging(level: Union[str, int, None] = None) -> None:
    """Configure root logging for scripts.

    Library modules only create loggers; entry points call this once.
    """
    resolved = level if level is not None else LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
