"""
Portfolio state service.

Holds the single source of truth (portfolio and current prices) and derives
every reported figure from it through the pure valuation and drift functions.
"""
import hashlib
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from app_config import AppConfig
from drift_calculator import (
    DriftCalculationResult,
    DriftCalculator,
    EtfSnapshot,
    asset_class_colors,
    country_colors,
    current_asset_class_allocation,
    current_country_allocation,
    current_equity_value,
    current_etf_data,
    current_portfolio_value,
    current_portfolio_value_date,
    current_values_by_asset_class,
    current_values_by_country,
    portfolio_cost,
    prices_history_map,
)
from portfolio_base import Portfolio, PriceHistory, Transaction
from portfolio_app.logger import AppLogger
from portfolio_app.services.price_service import PriceService

app_logger = AppLogger(__name__)


class PortfolioState(BaseModel):
    """Immutable application state; updates produce a new state"""
    portfolio: Optional[Portfolio] = None
    prices: Dict[str, PriceHistory] = Field(default_factory=dict)

    def fingerprint(self, as_of: date) -> str:
        """Hash of the inputs every derived value depends on"""
        digest = hashlib.sha256(self.model_dump_json(by_alias=True).encode())
        digest.update(as_of.isoformat().encode())
        return digest.hexdigest()


class PortfolioReport(BaseModel):
    """Every derived figure of a portfolio at a date"""
    as_of: date
    portfolio_name: str
    max_drift: float
    cost: float
    value: float
    equity_value: float
    prices_date: Optional[date] = None
    etfs: List[EtfSnapshot]
    values_by_asset_class: Dict[str, float]
    asset_class_allocation: Dict[str, float]
    values_by_country: Dict[str, float]
    country_allocation: Dict[str, float]
    asset_class_drift: DriftCalculationResult
    country_drift: DriftCalculationResult
    asset_class_colors: Dict[str, str]
    country_colors: Dict[str, str]

    @property
    def gain(self) -> float:
        return self.value - self.cost


class PortfolioService:
    """Owns the portfolio state and computes reports from it"""

    def __init__(self, config: AppConfig, price_service: Optional[PriceService] = None,
                 drift_calculator: Optional[DriftCalculator] = None):
        self.config = config
        self.price_service = price_service
        self.drift_calculator = drift_calculator or DriftCalculator()
        self.state = PortfolioState()
        self._report_cache: Dict[str, PortfolioReport] = {}

    def set_portfolio(self, portfolio: Portfolio):
        self.state = self.state.model_copy(update={'portfolio': portfolio})
        app_logger.log_info(f"Portfolio set to '{portfolio.name}' ({len(portfolio.etfs)} ETFs)")

    def set_price(self, isin: str, prices: PriceHistory):
        """Replace the whole price record of an ISIN"""
        self.state = self.state.model_copy(update={'prices': {**self.state.prices, isin: prices}})

    def set_prices(self, prices: Dict[str, PriceHistory]):
        self.state = self.state.model_copy(update={'prices': {**self.state.prices, **prices}})

    async def refresh_prices(self, force_refresh: bool = False, offline: bool = False) -> Dict[str, PriceHistory]:
        """Load prices for the current portfolio through the price service"""
        if self.state.portfolio is None:
            raise RuntimeError("No portfolio loaded. Call set_portfolio() first.")
        if self.price_service is None:
            raise RuntimeError("No price service configured")
        prices = await self.price_service.load_prices(self.state.portfolio, force_refresh, offline)
        self.set_prices(prices)
        return prices

    def add_quantity_adjustment(self, isin: str, quantity: float, on: Optional[date] = None) -> bool:
        """
        Record a manual quantity change as a synthetic transaction at the current price.

        Returns False, leaving the state untouched, when the ISIN is not in the portfolio.
        """
        portfolio = self.state.portfolio
        if portfolio is None or isin not in portfolio.etfs:
            app_logger.log_warning(f"Ignoring quantity adjustment for unknown ETF {isin}")
            return False

        etf = portfolio.etfs[isin]
        record = self.state.prices.get(isin)
        transaction = Transaction(
            date=on or date.today(),
            quantity=quantity,
            price=record.price if record else 0.0,
        )
        updated_etf = etf.model_copy(update={'transactions': [*etf.transactions, transaction]})
        self.state = self.state.model_copy(update={
            'portfolio': portfolio.model_copy(update={'etfs': {**portfolio.etfs, isin: updated_etf}})
        })
        app_logger.log_info(f"Added adjustment of {quantity} units to {isin} at {transaction.price}")
        return True

    def report(self, as_of: Optional[date] = None) -> PortfolioReport:
        """Derived figures for the current state, memoized per state and date"""
        if self.state.portfolio is None:
            raise RuntimeError("No portfolio loaded. Call set_portfolio() first.")

        as_of = as_of or date.today()
        key = self.state.fingerprint(as_of)
        if key not in self._report_cache:
            self._report_cache.clear()
            self._report_cache[key] = build_report(
                self.state.portfolio, self.state.prices, as_of, self.config, self.drift_calculator
            )
        return self._report_cache[key]


def build_report(portfolio: Portfolio, prices: Dict[str, PriceHistory], as_of: date,
                 config: Optional[AppConfig] = None,
                 drift_calculator: Optional[DriftCalculator] = None) -> PortfolioReport:
    """Compose the valuation, allocation and drift functions into a report"""
    config = config or AppConfig()
    drift_calculator = drift_calculator or DriftCalculator()
    equity_category = config.valuation.equity_category
    palette = config.display.palette
    etfs = portfolio.etfs

    value = current_portfolio_value(etfs, prices, as_of)
    equity_value = current_equity_value(etfs, prices, as_of, equity_category)
    snapshots = current_etf_data(etfs, prices, as_of)
    values_by_asset_class = current_values_by_asset_class(snapshots)
    values_by_country = current_values_by_country(etfs, prices, as_of, equity_category)

    return PortfolioReport(
        as_of=as_of,
        portfolio_name=portfolio.name,
        max_drift=portfolio.max_drift,
        cost=portfolio_cost(etfs, prices_history_map(prices), as_of),
        value=value,
        equity_value=equity_value,
        prices_date=current_portfolio_value_date(etfs, prices),
        etfs=snapshots,
        values_by_asset_class=values_by_asset_class,
        asset_class_allocation=current_asset_class_allocation(etfs, prices, as_of, value),
        values_by_country=values_by_country,
        country_allocation=current_country_allocation(equity_value, values_by_country),
        asset_class_drift=drift_calculator.calculate_drift(
            portfolio.target_asset_class_allocation, values_by_asset_class
        ),
        country_drift=drift_calculator.calculate_country_drift(
            portfolio.target_country_allocation, values_by_country
        ),
        asset_class_colors=asset_class_colors(portfolio, palette),
        country_colors=country_colors(portfolio, palette),
    )
