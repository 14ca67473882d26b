import copy
from datetime import date

import pytest

from drift_calculator import current_asset_class_allocation, current_country_allocation, to_percentages


def test_to_percentages():
    assert to_percentages({"a": 25, "b": 75}, 100) == {"a": 25, "b": 75}


def test_to_percentages_zero_total():
    assert to_percentages({"a": 0, "b": 0}, 0) == {"a": 0, "b": 0}


def test_asset_class_allocation(balanced_portfolio, current_prices):
    allocation = current_asset_class_allocation(balanced_portfolio.etfs, current_prices, date(2020, 6, 1), 1500)
    assert allocation == pytest.approx({"stocks": 200 / 3, "bonds": 100 / 3})
    assert sum(allocation.values()) == pytest.approx(100)


def test_asset_class_allocation_empty_portfolio(balanced_portfolio):
    allocation = current_asset_class_allocation(balanced_portfolio.etfs, {}, date(2020, 6, 1), 0)
    assert allocation == {"stocks": 0, "bonds": 0}


def test_country_allocation():
    assert current_country_allocation(1000, {"US": 600, "JP": 400}) == pytest.approx({"US": 60, "JP": 40})


def test_country_allocation_without_equity():
    assert current_country_allocation(0, {"US": 0}) == {"US": 0}


def test_asset_class_allocation_is_repeatable(balanced_portfolio, current_prices):
    etfs_before, prices_before = copy.deepcopy(balanced_portfolio.etfs), copy.deepcopy(current_prices)

    first = current_asset_class_allocation(balanced_portfolio.etfs, current_prices, date(2020, 6, 1), 1500)

    assert current_asset_class_allocation(balanced_portfolio.etfs, current_prices, date(2020, 6, 1), 1500) == first
    assert balanced_portfolio.etfs == etfs_before
    assert current_prices == prices_before


def test_country_allocation_is_repeatable():
    values = {"US": 600, "JP": 400}
    before = copy.deepcopy(values)

    first = current_country_allocation(1000, values)

    assert current_country_allocation(1000, values) == first
    assert values == before
