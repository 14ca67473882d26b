from .calculator import (
    DriftCalculator,
    drift_data,
    drift_data_by_asset_class,
    drift_data_by_country,
    is_within_max_drift,
    round_half_up,
)
from .models import DriftRow, DriftCalculationResult, EtfSnapshot
from .positions import quantity_at_date, sip_occurrences, sip_occurrence_dates, whole_months_between
from .valuation import (
    all_etfs,
    is_equity,
    equity_filter,
    prices_history_to_map,
    prices_history_map,
    last_transaction_price,
    etf_cost,
    portfolio_cost,
    current_portfolio_value,
    current_equity_value,
    current_etf_data,
    current_values_by_asset_class,
    current_values_by_country,
    current_portfolio_value_date,
)
from .allocation import current_asset_class_allocation, current_country_allocation, to_percentages
from .colors import assign_colors, asset_class_colors, country_colors

__version__ = "1.0.0"

__all__ = [
    "DriftCalculator",
    "DriftRow",
    "DriftCalculationResult",
    "EtfSnapshot",
    "drift_data",
    "drift_data_by_asset_class",
    "drift_data_by_country",
    "is_within_max_drift",
    "round_half_up",
    "quantity_at_date",
    "sip_occurrences",
    "sip_occurrence_dates",
    "whole_months_between",
    "all_etfs",
    "is_equity",
    "equity_filter",
    "prices_history_to_map",
    "prices_history_map",
    "last_transaction_price",
    "etf_cost",
    "portfolio_cost",
    "current_portfolio_value",
    "current_equity_value",
    "current_etf_data",
    "current_values_by_asset_class",
    "current_values_by_country",
    "current_portfolio_value_date",
    "current_asset_class_allocation",
    "current_country_allocation",
    "to_percentages",
    "assign_colors",
    "asset_class_colors",
    "country_colors",
    "__version__",
]
