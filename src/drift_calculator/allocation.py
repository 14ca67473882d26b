"""Allocation percentages by asset class and by country"""

from datetime import date
from typing import Dict, Mapping
from portfolio_base import Etf, PriceHistory
from .positions import quantity_at_date
from .valuation import current_price


def to_percentages(values: Mapping[str, float], total: float) -> Dict[str, float]:
    """Express each value as a percentage of total; all zero when total is not positive"""
    if total <= 0:
        return {key: 0.0 for key in values}
    return {key: value / total * 100 for key, value in values.items()}


def current_asset_class_allocation(etfs: Mapping[str, Etf], prices: Mapping[str, PriceHistory],
                                   as_of: date, total_value: float) -> Dict[str, float]:
    """Percentage of total_value held in each asset class category"""
    values: Dict[str, float] = {}
    for etf in etfs.values():
        value = quantity_at_date(etf.transactions, as_of, etf.sip) * current_price(prices, etf.isin)
        values[etf.category] = values.get(etf.category, 0.0) + value
    return to_percentages(values, total_value)


def current_country_allocation(total_equity_value: float,
                               value_by_country: Mapping[str, float]) -> Dict[str, float]:
    """Percentage of the equity sleeve exposed to each country"""
    return to_percentages(value_by_country, total_equity_value)
