"""Drift calculation with single-pivot buy-only and sell-only rebalancing"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Optional
import logging
from .models import DriftCalculationResult, DriftRow

_CENT = Decimal("0.01")


def round_half_up(value: float) -> float:
    """
    Round to two decimals with halves away from zero.

    The float is converted exactly, so 2.675 (stored just below the half) rounds down
    while 0.125 rounds up to 0.13.
    """
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class _CategoryDrift:
    category: str
    current_value: float
    target_percent: float
    drift_amount: float
    percentage: float


class DriftCalculator:
    """Calculate drift from target allocation and the amounts needed to compensate it"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def calculate_drift(self, target_allocation: Optional[Mapping[str, float]],
                        current_values: Mapping[str, float]) -> DriftCalculationResult:
        """
        Compare current values per category with target percentages.

        Buy-only amounts are anchored on the most overweight category: the portfolio
        grows until that category sits exactly at target, and every other category is
        bought up to its share of the grown portfolio. Sell-only amounts are anchored on
        the most underweight category the same way, shrinking the portfolio instead.
        Amounts are signed and returned for every row; a strategy that cannot reach the
        target leaves its amounts as None on every row.
        """
        if target_allocation is None:
            # No portfolio loaded yet
            return DriftCalculationResult(rows=[], buy_feasible=True, sell_feasible=True)

        portfolio_value = sum(current_values.values())

        categories = list(target_allocation)
        categories += [c for c in current_values if c not in target_allocation]

        drifts = [self._category_drift(category, target_allocation, current_values, portfolio_value)
                  for category in categories]

        # Held categories without a target can't be diluted by buying alone
        buy_blockers = [c for c in current_values if c not in target_allocation]
        # Target categories without holdings have nothing to keep while selling
        sell_blockers = [c for c in target_allocation if c not in current_values]
        buy_feasible = not buy_blockers
        sell_feasible = not sell_blockers

        warnings = []
        if not buy_feasible:
            warnings.append(
                f"Buy-only rebalance not possible: {', '.join(buy_blockers)} held but not in target allocation"
            )
        if not sell_feasible:
            warnings.append(
                f"Sell-only rebalance not possible: {', '.join(sell_blockers)} in target allocation but not held"
            )
        for warning in warnings:
            self.logger.info(warning)

        # Stable sort: ties keep category order
        sorted_drifts = sorted(drifts, key=lambda d: d.drift_amount)
        lowest = sorted_drifts[0] if sorted_drifts else None
        highest = sorted_drifts[-1] if sorted_drifts else None

        new_value_buy = self._implied_portfolio_value(highest if buy_feasible else None, portfolio_value)
        new_value_sell = self._implied_portfolio_value(lowest, portfolio_value)

        if highest and lowest:
            self.logger.debug(
                f"Portfolio value {portfolio_value:,.2f}: buy pivot {highest.category} -> {new_value_buy:,.2f}, "
                f"sell pivot {lowest.category} -> {new_value_sell:,.2f}"
            )

        rows = []
        for drift in drifts:
            amount_to_buy = None
            if buy_feasible:
                amount_to_buy = round_half_up(new_value_buy * drift.target_percent / 100 - drift.current_value)

            amount_to_sell = None
            if sell_feasible:
                amount_to_sell = round_half_up(drift.current_value - new_value_sell * drift.target_percent / 100)

            rows.append(DriftRow(
                category=drift.category,
                drift_amount=drift.drift_amount,
                percentage=drift.percentage,
                amount_to_buy_to_compensate=amount_to_buy,
                amount_to_sell_to_compensate=amount_to_sell,
            ))

        return DriftCalculationResult(
            rows=rows,
            buy_feasible=buy_feasible,
            sell_feasible=sell_feasible,
            buy_blockers=buy_blockers,
            sell_blockers=sell_blockers,
            warnings=warnings,
        )

    def calculate_country_drift(self, target_country_allocation: Optional[Mapping[str, float]],
                                current_values_by_country: Mapping[str, float]) -> DriftCalculationResult:
        """Country drift uses the same algorithm on the equity sleeve"""
        return self.calculate_drift(target_country_allocation, current_values_by_country)

    def _category_drift(self, category: str, target_allocation: Mapping[str, float],
                        current_values: Mapping[str, float], portfolio_value: float) -> _CategoryDrift:
        """Signed drift of one category, in money and relative to its target weight"""
        target_percent = target_allocation.get(category, 0)
        current_value = current_values.get(category, 0)

        current_percent = (current_value / portfolio_value * 100) if portfolio_value else 0
        # A category without target weight is reported as 100% over
        if target_percent:
            percentage = (current_percent - target_percent) / target_percent * 100
        else:
            percentage = 100

        return _CategoryDrift(
            category=category,
            current_value=current_value,
            target_percent=target_percent,
            drift_amount=current_value - target_percent / 100 * portfolio_value,
            percentage=round_half_up(percentage),
        )

    def _implied_portfolio_value(self, pivot: Optional[_CategoryDrift], portfolio_value: float) -> float:
        """Portfolio value at which the pivot category sits exactly at its target"""
        if pivot is None:
            return portfolio_value
        if not pivot.target_percent:
            self.logger.debug(f"Pivot {pivot.category} has no target weight, keeping portfolio value")
            return portfolio_value
        return pivot.current_value / pivot.target_percent * 100


def drift_data(target_allocation: Optional[Mapping[str, float]],
               current_values: Mapping[str, float]) -> List[DriftRow]:
    """Drift rows for every category in the target or in the holdings"""
    return DriftCalculator().calculate_drift(target_allocation, current_values).rows


def drift_data_by_asset_class(target_allocation: Optional[Mapping[str, float]],
                              current_values_by_asset_class: Dict[str, float]) -> List[DriftRow]:
    return drift_data(target_allocation, current_values_by_asset_class)


def drift_data_by_country(target_country_allocation: Optional[Mapping[str, float]],
                          current_values_by_country: Dict[str, float]) -> List[DriftRow]:
    return drift_data(target_country_allocation, current_values_by_country)


def is_within_max_drift(rows: Iterable[DriftRow], max_drift: float) -> bool:
    """True when no row drifts beyond max_drift percent of its target"""
    return not any(row.exceeds(max_drift) for row in rows)
