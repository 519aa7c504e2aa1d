"""
Configuration module for docstore.

This module provides configuration management including
loading settings from YAML files and environment variables.

Example:
    >>> from config import load_config
    >>>
    >>> # Load default config
    >>> settings = load_config()
    >>> settings.configure_logging()
    >>>
    >>> # Build storage for a named store
    >>> storage = settings.create_storage("users")
"""

from .settings import (
    Settings,
    StorageSettings,
    load_config,
    get_default_config_path,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "load_config",
    "get_default_config_path",
]
