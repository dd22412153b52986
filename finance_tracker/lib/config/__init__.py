"""Bundled configuration files and loaders.

Keyword tables and default category definitions live in JSON files so they
can be changed without code changes.  ``FINTRACK_CONFIG_DIR`` points at a
directory whose files take precedence over the bundled ones.
"""

from .defaults import load_config, get_categorization_config, get_config_value

__all__ = ['load_config', 'get_categorization_config', 'get_config_value']
