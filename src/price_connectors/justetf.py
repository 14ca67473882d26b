"""justETF performance chart client"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional

import aiohttp

from portfolio_base import PriceHistory, PricePoint, PriceSourceAPIError
from .base import HttpPriceClient


class JustEtfClient(HttpPriceClient):
    """Daily market values in EUR from the justETF performance chart"""

    data_source = 'justetf'

    def __init__(self, base_url: str = "https://www.justetf.com", history_days: int = 365,
                 timeout_seconds: float = 30.0, session: Optional[aiohttp.ClientSession] = None,
                 logger: Optional[logging.Logger] = None, today: Callable[[], date] = date.today):
        super().__init__(timeout_seconds=timeout_seconds, session=session, logger=logger)
        self.base_url = base_url.rstrip('/')
        self.history_days = history_days
        self.today = today

    def headers(self):
        headers = super().headers()
        headers['accept-encoding'] = 'gzip, deflate'
        return headers

    def build_url(self, isin: str) -> str:
        date_to = self.today()
        date_from = date_to - timedelta(days=self.history_days)
        return (f"{self.base_url}/api/etfs/{isin}/performance-chart"
                f"?locale=it&currency=EUR&valuesType=MARKET_VALUE&reduceData=false"
                f"&includeDividends=true&features=DIVIDENDS"
                f"&dateFrom={date_from.isoformat()}&dateTo={date_to.isoformat()}")

    def parse_payload(self, isin: str, payload: Any) -> PriceHistory:
        """series[].value.raw as price; the current price is the last point"""
        if not isinstance(payload, dict):
            raise PriceSourceAPIError(f"Unexpected response for ISIN {isin}: expected a JSON object")

        try:
            history = [
                PricePoint(date=item['date'], price=item['value']['raw'])
                for item in payload.get('series') or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise PriceSourceAPIError(f"Malformed price series for ISIN {isin}: {e}") from e

        if not history:
            raise PriceSourceAPIError(f"No last price for ISIN {isin}")

        return PriceHistory(price=history[-1].price, timestamp=datetime.now(), history=history)
