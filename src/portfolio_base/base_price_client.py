from abc import ABC, abstractmethod
from .models import PriceHistory

class PriceClient(ABC):
    """Abstract base class for quote provider clients"""

    data_source: str = ''

    @abstractmethod
    async def get_price_history(self, isin: str) -> PriceHistory:
        """Get current price and daily history for an ISIN"""
        pass

    async def close(self):
        """Release any resources held by the client"""
        pass
