from abc import ABC, abstractmethod
from typing import List, Optional
from .models import Portfolio, PriceHistory

class PortfolioStore(ABC):
    """Abstract base class for the persistent portfolio and price cache"""

    @abstractmethod
    def save_portfolio(self, portfolio: Portfolio) -> Portfolio:
        """Persist a portfolio and return the stored copy"""
        pass

    @abstractmethod
    def get_portfolios(self) -> List[Portfolio]:
        """Get all stored portfolios"""
        pass

    @abstractmethod
    def delete_portfolio(self, portfolio_id: str):
        """Remove a stored portfolio"""
        pass

    @abstractmethod
    def save_prices(self, isin: str, prices: PriceHistory):
        """Persist the price record of an ISIN, replacing the previous one"""
        pass

    @abstractmethod
    def get_prices(self, isin: str) -> Optional[PriceHistory]:
        """Get the last stored price record of an ISIN"""
        pass
