"""Application configuration management for the ETF portfolio tracker."""

from .models import (
    AppConfig,
    PricesConfig,
    CacheConfig,
    ValuationConfig,
    DisplayConfig,
    LoggingConfig,
)
from .loader import CONFIG_PATH_ENV, load_config, get_config, resolve_config_path, set_config

__all__ = [
    "AppConfig",
    "PricesConfig",
    "CacheConfig",
    "ValuationConfig",
    "DisplayConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "set_config",
    "resolve_config_path",
    "CONFIG_PATH_ENV",
]
