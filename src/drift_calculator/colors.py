"""Stable display slots per category"""

from typing import Dict, Iterable, Optional, Sequence
from portfolio_base import Portfolio


def assign_colors(target_keys: Iterable[str], discovered_keys: Iterable[str],
                  palette: Optional[Sequence[str]] = None) -> Dict[str, str]:
    """
    Map target keys (in order) followed by keys only found in holdings to palette slots.

    Without a palette the slots are chart-1, chart-2, ...; a short palette wraps around.
    """
    keys = list(dict.fromkeys([*target_keys, *discovered_keys]))
    if not palette:
        return {key: f"chart-{index + 1}" for index, key in enumerate(keys)}
    return {key: palette[index % len(palette)] for index, key in enumerate(keys)}


def asset_class_colors(portfolio: Portfolio, palette: Optional[Sequence[str]] = None) -> Dict[str, str]:
    return assign_colors(
        portfolio.target_asset_class_allocation,
        (etf.category for etf in portfolio.etfs.values()),
        palette,
    )


def country_colors(portfolio: Portfolio, palette: Optional[Sequence[str]] = None) -> Dict[str, str]:
    return assign_colors(
        portfolio.target_country_allocation,
        (country for etf in portfolio.etfs.values() for country in etf.countries),
        palette,
    )
