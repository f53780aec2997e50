"""Application configuration helpers."""

from __future__ import annotations

from .env import get_env, get_env_flag, require_values
from .errors import ConfigFileError, ConfigurationError, MissingConfigurationError
from .hackerone import HackerOneConfig
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .settings import Settings, load_settings, resolve_config_path
from .slack import SlackConfig
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigFileError",
    "ConfigurationError",
    "HackerOneConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "Settings",
    "SlackConfig",
    "StorageConfig",
    "configure_logging",
    "get_env",
    "get_env_flag",
    "get_storage_config",
    "load_settings",
    "require_values",
    "resolve_config_path",
]
