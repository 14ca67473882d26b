"""Price refresh with cache staleness policy and cached fallback on provider errors"""

import asyncio
from typing import Callable, Dict, Optional

from portfolio_base import Etf, Portfolio, PriceClient, PriceHistory, PriceSourceError
from portfolio_app.logger import AppLogger
from portfolio_app.services.cache_service import FileCacheService

app_logger = AppLogger(__name__)

ClientFactory = Callable[[str], PriceClient]


class PriceService:
    """Loads current prices for a portfolio from the cache or the ETF's data source"""

    def __init__(self, cache: FileCacheService, client_factory: ClientFactory):
        self.cache = cache
        self.client_factory = client_factory
        self._clients: Dict[str, PriceClient] = {}

    def _client(self, data_source: str) -> PriceClient:
        if data_source not in self._clients:
            self._clients[data_source] = self.client_factory(data_source)
        return self._clients[data_source]

    async def load_prices(self, portfolio: Portfolio, force_refresh: bool = False,
                          offline: bool = False) -> Dict[str, PriceHistory]:
        """
        Prices for every ETF of the portfolio.

        Cached records younger than the cache TTL are used as they are unless a refresh
        is forced; otherwise the ETF's data source is queried and the fresh record is
        cached. When the query fails the cached record, however old, is used instead.
        ISINs with neither are left out.
        """
        etfs = list(portfolio.etfs.values())
        results = await asyncio.gather(*(self._load_etf_prices(etf, force_refresh, offline) for etf in etfs))
        prices = {etf.isin: record for etf, record in zip(etfs, results) if record is not None}
        app_logger.log_info(f"Loaded prices for {len(prices)}/{len(etfs)} ETFs")
        return prices

    async def _load_etf_prices(self, etf: Etf, force_refresh: bool, offline: bool) -> Optional[PriceHistory]:
        cached = self.cache.get_prices(etf.isin)

        if offline:
            if cached is None:
                app_logger.log_warning(f"No cached prices for {etf.isin} in offline mode")
            return cached

        if not force_refresh and self.cache.is_fresh(cached):
            app_logger.log_debug(f"Using cached prices for {etf.isin} from {cached.timestamp.isoformat()}")
            return cached

        try:
            fresh = await self._client(etf.data_source).get_price_history(etf.isin)
        except PriceSourceError as e:
            app_logger.log_error(f"Price refresh failed for {etf.isin} ({etf.data_source}): {e}")
            if cached is not None:
                app_logger.log_warning(f"Falling back to cached prices for {etf.isin} from {cached.timestamp.isoformat()}")
            return cached

        self.cache.save_prices(etf.isin, fresh)
        return fresh

    async def close(self):
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
