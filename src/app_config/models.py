"""Pydantic models for application configuration with validation."""

import re
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator


class PricesConfig(BaseModel):
    """Quote provider settings."""

    default_data_source: Literal["borsaitaliana", "justetf"] = Field(
        default="borsaitaliana",
        description="Data source used for ETFs that do not declare one"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=120.0,
        description="Timeout for a single price history request"
    )
    borsa_italiana_base_url: str = Field(
        default="https://grafici.borsaitaliana.it",
        description="Base URL of the Borsa Italiana charts API"
    )
    borsa_italiana_api_token: Optional[str] = Field(
        default=None,
        description="Bearer token for the Borsa Italiana API (BORSA_ITALIANA_API_TOKEN overrides)"
    )
    justetf_base_url: str = Field(
        default="https://www.justetf.com",
        description="Base URL of the justETF API"
    )
    history_days: int = Field(
        default=365,
        ge=7,
        le=3650,
        description="Days of daily history requested from justETF"
    )

    @field_validator("borsa_italiana_base_url", "justetf_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate URL scheme and strip trailing slashes."""
        if not re.match(r'^https?://', v):
            raise ValueError(f"Invalid base URL '{v}'. Must start with http:// or https://")
        return v.rstrip("/")


class CacheConfig(BaseModel):
    """Local cache settings."""

    directory: str = Field(
        default=".etf-portfolio-cache",
        description="Directory holding cached portfolios and prices"
    )
    ttl_hours: float = Field(
        default=24.0,
        gt=0.0,
        le=720.0,
        description="Cached prices older than this are refreshed"
    )


class ValuationConfig(BaseModel):
    """Valuation settings."""

    equity_category: str = Field(
        default="stocks",
        min_length=1,
        description="Asset class category whose ETFs make up the country breakdown"
    )


class DisplayConfig(BaseModel):
    """Report display settings."""

    palette: List[str] = Field(
        default_factory=list,
        description="Display slots assigned to categories in order; chart-N slots are generated when empty"
    )
    currency_symbol: str = Field(
        default="€",
        description="Symbol printed next to money amounts"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level"
    )
    format: Literal["text", "json"] = Field(
        default="text",
        description="Log line format"
    )
    log_dir: Optional[str] = Field(
        default=None,
        description="Directory for daily rotated log files; console only when unset"
    )
    backup_count: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Rotated log files kept"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lower case level names."""
        return v.upper() if isinstance(v, str) else v


class AppConfig(BaseModel):
    """Root application configuration."""

    prices: PricesConfig = Field(
        default_factory=PricesConfig,
        description="Quote provider settings"
    )
    cache: CacheConfig = Field(
        default_factory=CacheConfig,
        description="Local cache settings"
    )
    valuation: ValuationConfig = Field(
        default_factory=ValuationConfig,
        description="Valuation settings"
    )
    display: DisplayConfig = Field(
        default_factory=DisplayConfig,
        description="Report display settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )
