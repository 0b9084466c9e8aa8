"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_float, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .identity import IdentityConfig, get_identity_config
from .jucesp import JucespConfig, get_jucesp_config
from .logging import configure_logging
from .receita import ReceitaConfig, get_receita_config
from .reconciliation import ReconciliationConfig, get_reconciliation_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IdentityConfig",
    "JucespConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReceitaConfig",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_identity_config",
    "get_jucesp_config",
    "get_receita_config",
    "get_reconciliation_config",
    "get_storage_config",
    "optional_env_float",
    "require_env_var",
    "require_env_vars",
]
