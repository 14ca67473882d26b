"""
Portfolio importer: YAML document to validated Portfolio.

Fields missing from the document are defaulted before the portfolio reaches the
valuation engine: transactions and countries become empty, the data source
falls back to the configured default, and the ETF ISIN is taken from its key.
"""
import uuid
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import ValidationError
from portfolio_base import Portfolio, PortfolioImportError
from portfolio_app.logger import AppLogger

app_logger = AppLogger(__name__)

REQUIRED_KEYS = ('name', 'targetAssetClassAllocation', 'targetCountryAllocation', 'maxDrift', 'etfs')


class PortfolioImporter:
    """Parses and validates portfolio documents"""

    def __init__(self, default_data_source: str = 'borsaitaliana'):
        self.default_data_source = default_data_source

    def parse(self, text: Optional[str]) -> Portfolio:
        """
        Parse a YAML portfolio document.

        Raises:
            PortfolioImportError: If the document is empty, not valid YAML, or does not match the schema
        """
        if not text or not text.strip():
            raise PortfolioImportError("The file is empty")

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            app_logger.log_error(f"Invalid YAML portfolio document: {e}")
            raise PortfolioImportError(f"Invalid YAML: {e}") from e

        if not isinstance(document, dict):
            raise PortfolioImportError("The portfolio document must be a mapping")

        missing = [key for key in REQUIRED_KEYS if key not in document]
        if missing:
            raise PortfolioImportError(f"Missing required fields: {', '.join(missing)}")

        etfs = document['etfs']
        if not isinstance(etfs, dict):
            raise PortfolioImportError("'etfs' must be a mapping of ISIN to ETF")

        data = {
            **document,
            'id': str(uuid.uuid4()),
            'etfs': {str(isin): self._with_defaults(str(isin), etf) for isin, etf in etfs.items()},
        }

        try:
            portfolio = Portfolio.model_validate(data)
        except ValidationError as e:
            app_logger.log_error(f"Portfolio validation failed: {e}")
            raise PortfolioImportError(f"Invalid portfolio: {e}") from e

        app_logger.log_info(f"Imported portfolio '{portfolio.name}' with {len(portfolio.etfs)} ETFs")
        return portfolio

    def load_file(self, path: str | Path) -> Portfolio:
        """Read and parse a YAML portfolio file"""
        path = Path(path)
        if not path.exists():
            raise PortfolioImportError(f"Portfolio file not found: {path}")
        app_logger.log_debug(f"Loading portfolio from {path}")
        return self.parse(path.read_text(encoding='utf-8'))

    def _with_defaults(self, isin: str, etf: Any) -> Dict[str, Any]:
        if not isinstance(etf, dict):
            raise PortfolioImportError(f"ETF {isin} must be a mapping")
        return {
            **etf,
            'isin': isin,
            'dataSource': etf.get('dataSource') or self.default_data_source,
            'countries': etf.get('countries') or {},
            'transactions': etf.get('transactions') or [],
        }


def parse_portfolio(text: Optional[str], default_data_source: str = 'borsaitaliana') -> Portfolio:
    return PortfolioImporter(default_data_source).parse(text)


def load_portfolio_file(path: str | Path, default_data_source: str = 'borsaitaliana') -> Portfolio:
    return PortfolioImporter(default_data_source).load_file(path)
