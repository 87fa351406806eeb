"""Application configuration helpers."""

from __future__ import annotations

from .catalog import CatalogConfig, get_catalog_config
from .env import env_float, env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, PayloadPredicate, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .vpic import VinDecodeDialect, VpicConfig, get_vpic_config

__all__ = [
    "CacheConfig",
    "CatalogConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "PayloadPredicate",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "VinDecodeDialect",
    "VpicConfig",
    "configure_logging",
    "env_float",
    "env_int",
    "get_catalog_config",
    "get_database_config",
    "get_storage_config",
    "get_vpic_config",
    "optional_env_var",
    "require_env_vars",
]
