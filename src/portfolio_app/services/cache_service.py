"""File-based cache of portfolios and price histories"""

import re
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from portfolio_base import Portfolio, PortfolioStore, PriceHistory
from portfolio_app.logger import AppLogger

app_logger = AppLogger(__name__)

_SAFE_KEY = re.compile(r'[^A-Za-z0-9_.-]')


class FileCacheService(PortfolioStore):
    """Stores one JSON document per portfolio and per ISIN price record"""

    def __init__(self, directory: str | Path, ttl_hours: float = 24.0):
        self.directory = Path(directory)
        self.ttl = timedelta(hours=ttl_hours)
        self.portfolios_dir = self.directory / 'portfolios'
        self.prices_dir = self.directory / 'prices'
        self.portfolios_dir.mkdir(parents=True, exist_ok=True)
        self.prices_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, folder: Path, key: str) -> Path:
        return folder / f"{_SAFE_KEY.sub('_', key)}.json"

    def save_portfolio(self, portfolio: Portfolio) -> Portfolio:
        """Store a copy of the portfolio under a new id"""
        stored = portfolio.model_copy(update={'id': str(uuid.uuid4())})
        self._path(self.portfolios_dir, stored.id).write_text(stored.model_dump_json(by_alias=True), encoding='utf-8')
        app_logger.log_info(f"Cached portfolio '{stored.name}' as {stored.id}")
        return stored

    def get_portfolios(self) -> List[Portfolio]:
        """Stored portfolios, oldest first"""
        portfolios = []
        for path in sorted(self.portfolios_dir.glob('*.json'), key=lambda p: p.stat().st_mtime):
            try:
                portfolios.append(Portfolio.model_validate_json(path.read_text(encoding='utf-8')))
            except ValidationError as e:
                app_logger.log_warning(f"Skipping unreadable cached portfolio {path.name}: {e}")
        return portfolios

    def delete_portfolio(self, portfolio_id: str):
        path = self._path(self.portfolios_dir, portfolio_id)
        if path.exists():
            path.unlink()
            app_logger.log_info(f"Deleted cached portfolio {portfolio_id}")

    def save_prices(self, isin: str, prices: PriceHistory):
        """Replace the cached price record of an ISIN"""
        self._path(self.prices_dir, isin).write_text(prices.model_dump_json(by_alias=True), encoding='utf-8')
        app_logger.log_debug(f"Cached {len(prices.history)} prices for {isin}")

    def get_prices(self, isin: str) -> Optional[PriceHistory]:
        path = self._path(self.prices_dir, isin)
        if not path.exists():
            return None
        try:
            return PriceHistory.model_validate_json(path.read_text(encoding='utf-8'))
        except ValidationError as e:
            app_logger.log_warning(f"Ignoring unreadable cached prices for {isin}: {e}")
            return None

    def is_fresh(self, prices: Optional[PriceHistory], now: Optional[datetime] = None) -> bool:
        """True when the record was fetched less than ttl ago"""
        if prices is None:
            return False
        now = now or datetime.now(prices.timestamp.tzinfo)
        return now - prices.timestamp < self.ttl
