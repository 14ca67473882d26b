from .base_price_client import PriceClient
from .base_store import PortfolioStore
from .models import (
    # Holdings models
    CategoryKey,
    CountryKey,
    DataSource,
    Transaction,
    RecurringPlan,
    AssetClass,
    Etf,
    Portfolio,
    # Market data models
    PricePoint,
    PriceHistory,
    EQUITY_CATEGORY,
    VALID_SIP_FREQUENCIES,
)
from .exceptions import (
    PortfolioError,
    PortfolioImportError,
    PriceSourceError,
    PriceSourceConnectionError,
    PriceSourceAPIError,
)

__version__ = "1.0.0"

__all__ = [
    "PriceClient",
    "PortfolioStore",
    "CategoryKey",
    "CountryKey",
    "DataSource",
    "Transaction",
    "RecurringPlan",
    "AssetClass",
    "Etf",
    "Portfolio",
    "PricePoint",
    "PriceHistory",
    "EQUITY_CATEGORY",
    "VALID_SIP_FREQUENCIES",
    "PortfolioError",
    "PortfolioImportError",
    "PriceSourceError",
    "PriceSourceConnectionError",
    "PriceSourceAPIError",
    "__version__",
]
