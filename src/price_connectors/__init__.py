from .base import HttpPriceClient
from .borsa_italiana import BorsaItalianaClient, convert_dt
from .justetf import JustEtfClient
from .factory import create_price_client

__version__ = "1.0.0"

__all__ = [
    "HttpPriceClient",
    "BorsaItalianaClient",
    "JustEtfClient",
    "convert_dt",
    "create_price_client",
    "__version__",
]
