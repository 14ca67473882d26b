"""YAML configuration loading and the process-wide config singleton."""

import logging
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models import AppConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ETF_PORTFOLIO_CONFIG"

_config: Optional[AppConfig] = None


def resolve_config_path(config_path: Optional[str | Path] = None) -> Optional[Path]:
    """Explicit path first, then $ETF_PORTFOLIO_CONFIG; None means built-in defaults."""
    candidate = config_path or os.getenv(CONFIG_PATH_ENV)
    return Path(candidate) if candidate else None


def _read_document(config_path: Path) -> Dict[str, Any]:
    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            document = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Configuration file {config_path} is not valid YAML: {e}")
            raise ValueError(f"Invalid configuration: {e}") from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"Invalid configuration: expected a mapping at the top of {config_path}")
    return document


def _log_summary(config: AppConfig):
    logger.info("Configuration loaded:")
    logger.info(f"  prices: default source {config.prices.default_data_source}, "
                f"timeout {config.prices.request_timeout_seconds}s, "
                f"justETF history {config.prices.history_days} days")
    logger.info(f"  cache: {config.cache.directory} (prices fresh for {config.cache.ttl_hours}h)")
    logger.info(f"  equity category: {config.valuation.equity_category}")
    logger.info(f"  logging: {config.logging.level} {config.logging.format}"
                f"{f' to {config.logging.log_dir}' if config.logging.log_dir else ''}")


def load_config(config_path: str | Path) -> AppConfig:
    """
    Read, validate and install the configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid YAML or fails validation
    """
    global _config

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")
    document = _read_document(config_path)

    try:
        _config = AppConfig.model_validate(document)
    except ValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise ValueError(f"Invalid configuration: {e}") from e

    _log_summary(_config)
    return _config


def set_config(config: AppConfig) -> AppConfig:
    """Install an already built configuration, e.g. defaults when no file is given."""
    global _config
    _config = config
    return _config


def get_config() -> AppConfig:
    """The installed configuration; RuntimeError until load_config() or set_config() ran."""
    if _config is None:
        raise RuntimeError("Configuration not loaded. Call load_config() first.")
    return _config
