"""Factory for creating price clients"""

import logging
from typing import Optional

import aiohttp

from app_config import PricesConfig
from portfolio_base import PriceClient
from .borsa_italiana import BorsaItalianaClient
from .justetf import JustEtfClient


def create_price_client(
    data_source: str,
    prices_config: Optional[PricesConfig] = None,
    session: Optional[aiohttp.ClientSession] = None,
    logger: Optional[logging.Logger] = None
) -> PriceClient:
    """
    Factory to create the client for an ETF's data source tag.

    Args:
        data_source: 'borsaitaliana' or 'justetf'
        prices_config: Provider settings, defaults when omitted
        session: Optional shared aiohttp session
        logger: Optional logger instance

    Returns:
        PriceClient instance
    """
    prices_config = prices_config or PricesConfig()
    source = data_source.lower()

    if logger:
        logger.debug(f"Creating {source} price client")

    if source == 'borsaitaliana':
        return BorsaItalianaClient(
            base_url=prices_config.borsa_italiana_base_url,
            api_token=prices_config.borsa_italiana_api_token,
            timeout_seconds=prices_config.request_timeout_seconds,
            session=session,
            logger=logger,
        )
    elif source == 'justetf':
        return JustEtfClient(
            base_url=prices_config.justetf_base_url,
            history_days=prices_config.history_days,
            timeout_seconds=prices_config.request_timeout_seconds,
            session=session,
            logger=logger,
        )
    else:
        raise ValueError(f"Unsupported data source: {data_source}")
