from .portfolio_importer import PortfolioImporter, parse_portfolio, load_portfolio_file
from .cache_service import FileCacheService
from .price_service import PriceService
from .portfolio_service import PortfolioService, PortfolioState, PortfolioReport, build_report

__all__ = [
    "PortfolioImporter",
    "parse_portfolio",
    "load_portfolio_file",
    "FileCacheService",
    "PriceService",
    "PortfolioService",
    "PortfolioState",
    "PortfolioReport",
    "build_report",
]
