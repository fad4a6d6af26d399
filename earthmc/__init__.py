"""Async client for the EarthMC v3 REST API."""

from .clients import EarthMCClient
from .config import ConfigError, Settings, get_settings
from .logging_config import configure_logging
from .rate_limit import RateLimitConfig, RateLimiter

__all__ = [
    "EarthMCClient",
    "ConfigError",
    "Settings",
    "get_settings",
    "configure_logging",
    "RateLimitConfig",
    "RateLimiter",
]
