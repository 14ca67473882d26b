"""Borsa Italiana charts API client"""

import logging
import os
from datetime import date, datetime
from typing import Any, Dict, Optional

import aiohttp

from portfolio_base import PriceHistory, PricePoint, PriceSourceAPIError
from .base import HttpPriceClient


def convert_dt(dt: str) -> date:
    """Convert a "YYYYMMDD" (optionally "YYYYMMDD-HH:MM:SS") stamp to a date"""
    day = dt.split('-')[0]
    return date(int(day[0:4]), int(day[4:6]), int(day[6:8]))


class BorsaItalianaClient(HttpPriceClient):
    """One year of adjusted daily closes from Borsa Italiana (XMIL listing)"""

    data_source = 'borsaitaliana'

    def __init__(self, base_url: str = "https://grafici.borsaitaliana.it", api_token: Optional[str] = None,
                 timeout_seconds: float = 30.0, session: Optional[aiohttp.ClientSession] = None,
                 logger: Optional[logging.Logger] = None):
        super().__init__(timeout_seconds=timeout_seconds, session=session, logger=logger)
        self.base_url = base_url.rstrip('/')
        self.api_token = os.getenv('BORSA_ITALIANA_API_TOKEN') or api_token

    def headers(self) -> Dict[str, str]:
        headers = super().headers()
        if self.api_token:
            headers['authorization'] = f"Bearer {self.api_token}"
        return headers

    def build_url(self, isin: str) -> str:
        return (f"{self.base_url}/api/instruments/{isin},XMIL,ISIN/history/period"
                f"?period=1Y&adjustment=true&add-last-price=true")

    def parse_payload(self, isin: str, payload: Any) -> PriceHistory:
        """Daily closePx series; the current price is the last close"""
        if not isinstance(payload, dict):
            raise PriceSourceAPIError(f"Unexpected response for ISIN {isin}: expected a JSON object")

        points = (payload.get('history') or {}).get('historyDt') or []
        try:
            history = [PricePoint(date=convert_dt(item['dt']), price=item['closePx']) for item in points]
        except (KeyError, TypeError, ValueError) as e:
            raise PriceSourceAPIError(f"Malformed price history for ISIN {isin}: {e}") from e

        if not history:
            raise PriceSourceAPIError(f"No last price for ISIN {isin}")

        return PriceHistory(price=history[-1].price, timestamp=datetime.now(), history=history)
