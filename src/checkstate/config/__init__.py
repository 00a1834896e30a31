"""Application configuration helpers."""

from __future__ import annotations

from .api import ApiConfig, RateLimit, RetryPolicy, get_api_config
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging

__all__ = [
    "ApiConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RetryPolicy",
    "configure_logging",
    "get_api_config",
]
