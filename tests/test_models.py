"""Tests for the holdings and market data models"""

from datetime import date

import pytest
from pydantic import ValidationError

from portfolio_base import AssetClass, Etf, PriceHistory, RecurringPlan, VALID_SIP_FREQUENCIES


class TestRecurringPlan:
    @pytest.mark.parametrize("frequency", VALID_SIP_FREQUENCIES)
    def test_valid_frequencies(self, frequency):
        plan = RecurringPlan(quantity=1, frequency=frequency, start_date=date(2020, 1, 1))
        assert plan.period_months * frequency == 12

    @pytest.mark.parametrize("frequency", [0, 5, 7, 24])
    def test_invalid_frequency(self, frequency):
        with pytest.raises(ValidationError, match="Invalid frequency"):
            RecurringPlan(quantity=1, frequency=frequency, start_date=date(2020, 1, 1))

    def test_monthly_by_default(self):
        plan = RecurringPlan.model_validate({"quantity": 1, "startDate": "2020-01-01"})
        assert plan.frequency == 12
        assert plan.period_months == 1


class TestEtf:
    def test_camel_case_document(self):
        etf = Etf.model_validate({
            "isin": "IE00B4L5Y983",
            "name": "World",
            "dataSource": "justetf",
            "assetClass": {"name": "World", "category": "stocks"},
        })
        assert etf.data_source == "justetf"
        assert etf.category == "stocks"
        assert etf.transactions == []
        assert etf.countries == {}

    def test_category_is_stripped(self):
        assert AssetClass(name="x", category="  stocks ").category == "stocks"

    def test_empty_category_rejected(self):
        with pytest.raises(ValidationError):
            AssetClass(name="x", category="   ")

    def test_unknown_data_source_rejected(self):
        with pytest.raises(ValidationError):
            Etf(isin="x", name="x", data_source="yahoo", asset_class=AssetClass(name="x", category="stocks"))

    def test_frozen(self):
        asset_class = AssetClass(name="x", category="stocks")
        with pytest.raises(ValidationError):
            asset_class.category = "bonds"


def test_price_history_last_date():
    record = PriceHistory.model_validate({
        "price": 2,
        "timestamp": "2020-01-03T10:00:00",
        "history": [{"date": "2020-01-01", "price": 1}, {"date": "2020-01-02", "price": 2}],
    })
    assert record.last_date == date(2020, 1, 2)
    assert PriceHistory(price=1, timestamp=record.timestamp).last_date is None
