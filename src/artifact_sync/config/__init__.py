"""Application configuration helpers."""

from __future__ import annotations

from .env import load_environment, optional_positive_int, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .importing import DenialPolicy, ImportConfig, get_import_config
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "DenialPolicy",
    "ImportConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_import_config",
    "get_storage_config",
    "load_environment",
    "optional_positive_int",
    "require_env_vars",
]
