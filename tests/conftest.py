"""Shared pytest fixtures for the portfolio tracker test suite.

Nothing here touches the network.
"""

import pytest

from app_config import AppConfig, CacheConfig
from tests.builders import make_etf, make_portfolio, make_prices, make_transaction


@pytest.fixture
def stock_etf():
    return make_etf(
        isin="stock1",
        category="stocks",
        transactions=[make_transaction("2020-01-01", 10, 50)],
        countries={"US": 60, "JP": 40},
    )


@pytest.fixture
def bond_etf():
    return make_etf(
        isin="bond1",
        category="bonds",
        transactions=[make_transaction("2020-01-01", 20, 25)],
    )


@pytest.fixture
def balanced_portfolio(stock_etf, bond_etf):
    return make_portfolio(
        [stock_etf, bond_etf],
        target_asset_class={"stocks": 60, "bonds": 40},
        target_country={"US": 50, "JP": 50},
    )


@pytest.fixture
def current_prices():
    return {
        "stock1": make_prices(100, [("2020-01-01", 90), ("2020-01-02", 100)]),
        "bond1": make_prices(25, [("2020-01-01", 25)]),
    }


@pytest.fixture
def app_config(tmp_path):
    return AppConfig(cache=CacheConfig(directory=str(tmp_path / "cache")))


PORTFOLIO_YAML = """
name: "My Simple Portfolio"

targetAssetClassAllocation:
  Stocks: 70
  Bonds: 30

targetCountryAllocation:
  US: 50
  others: 50

maxDrift: 10

etfs:
  IE00B4L5Y983:
    name: "iShares Core MSCI World UCITS"
    assetClass:
        name: "US Total Market"
        category: "Stocks"
    countries:
        US: 68.96
        others: 31.04
    transactions:
      - date: "2024-01-15"
        quantity: 10
        price: 220.50
      - date: "2024-06-15"
        quantity: 5
        price: 235.20
    sip:
      quantity: 1
      frequency: 12
      startDate: "2026-01-16"

  LU0478205379:
    name: "Xtrackers II EUR Corporate Bond UCITS ETF 1C"
    dataSource: justetf
    assetClass:
        name: "US Aggregate Bonds"
        category: "Bonds"
    transactions:
      - date: "2024-01-15"
        quantity: 20
        price: 72.30
"""


@pytest.fixture
def portfolio_yaml():
    return PORTFOLIO_YAML
