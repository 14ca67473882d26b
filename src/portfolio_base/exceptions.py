class PortfolioError(Exception):
    """Base class for portfolio tracker errors"""
    pass

class PortfolioImportError(PortfolioError):
    """Raised when a portfolio document is empty or invalid"""
    pass

class PriceSourceError(PortfolioError):
    """Raised when prices cannot be retrieved from a price source"""
    pass

class PriceSourceConnectionError(PriceSourceError):
    """Raised when the price source cannot be reached or times out"""
    pass

class PriceSourceAPIError(PriceSourceError):
    """Raised when the price source returns an error or an unusable payload"""
    pass
