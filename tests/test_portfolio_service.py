"""Tests for the portfolio state service and report composition"""

from datetime import date

import pytest

from app_config import AppConfig, DisplayConfig
from portfolio_app.services.cache_service import FileCacheService
from portfolio_app.services.portfolio_service import PortfolioService, build_report
from portfolio_app.services.price_service import PriceService
from tests.stubs import StubPriceClient, fresh_prices

AS_OF = date(2020, 6, 1)


@pytest.fixture
def service(app_config, balanced_portfolio, current_prices):
    portfolio_service = PortfolioService(app_config)
    portfolio_service.set_portfolio(balanced_portfolio)
    portfolio_service.set_prices(current_prices)
    return portfolio_service


class TestReport:
    def test_figures(self, service):
        report = service.report(AS_OF)

        assert report.value == 1500
        assert report.cost == 1000
        assert report.gain == 500
        assert report.equity_value == 1000
        assert report.prices_date == date(2020, 1, 2)
        assert report.values_by_asset_class == {"stocks": 1000, "bonds": 500}
        assert report.asset_class_allocation == pytest.approx({"stocks": 200 / 3, "bonds": 100 / 3})
        assert report.country_allocation == pytest.approx({"US": 60, "JP": 40})
        assert report.asset_class_colors == {"stocks": "chart-1", "bonds": "chart-2"}

    def test_drift(self, service):
        report = service.report(AS_OF)
        rows = {row.category: row for row in report.asset_class_drift.rows}

        # Target 60/40 on a 1500 portfolio
        assert rows["stocks"].drift_amount == pytest.approx(100)
        assert rows["bonds"].drift_amount == pytest.approx(-100)
        assert [row.category for row in report.country_drift.rows] == ["US", "JP"]

    def test_memoized_until_state_changes(self, service, current_prices):
        first = service.report(AS_OF)
        assert service.report(AS_OF) is first

        service.set_price("stock1", current_prices["bond1"])
        assert service.report(AS_OF) is not first

    def test_memoized_per_date(self, service):
        assert service.report(AS_OF) is not service.report(date(2020, 6, 2))

    def test_no_portfolio(self, app_config):
        with pytest.raises(RuntimeError):
            PortfolioService(app_config).report(AS_OF)

    def test_build_report_uses_palette(self, balanced_portfolio, current_prices):
        config = AppConfig(display=DisplayConfig(palette=["red"]))
        report = build_report(balanced_portfolio, current_prices, AS_OF, config)
        assert set(report.asset_class_colors.values()) == {"red"}


class TestAdjustments:
    def test_appends_transaction_at_current_price(self, service, balanced_portfolio):
        assert service.add_quantity_adjustment("stock1", 5, on=date(2020, 5, 1))

        etf = service.state.portfolio.etfs["stock1"]
        assert len(etf.transactions) == 2
        assert etf.transactions[-1].quantity == 5
        assert etf.transactions[-1].price == 100
        assert service.report(AS_OF).value == 2000

        # The portfolio passed in is left untouched
        assert len(balanced_portfolio.etfs["stock1"].transactions) == 1

    def test_negative_adjustment(self, service):
        service.add_quantity_adjustment("bond1", -20, on=date(2020, 5, 1))
        assert service.report(AS_OF).values_by_asset_class["bonds"] == 0

    def test_unknown_isin(self, service):
        state = service.state
        assert not service.add_quantity_adjustment("unknown", 5)
        assert service.state is state

    def test_unknown_price_records_zero(self, app_config, balanced_portfolio):
        service = PortfolioService(app_config)
        service.set_portfolio(balanced_portfolio)
        service.add_quantity_adjustment("bond1", 1, on=AS_OF)
        assert service.state.portfolio.etfs["bond1"].transactions[-1].price == 0


@pytest.mark.asyncio
async def test_refresh_prices(app_config, balanced_portfolio, tmp_path):
    client = StubPriceClient({"stock1": fresh_prices(110), "bond1": fresh_prices(30)})
    price_service = PriceService(FileCacheService(tmp_path / "cache"), lambda source: client)
    service = PortfolioService(app_config, price_service=price_service)
    service.set_portfolio(balanced_portfolio)

    await service.refresh_prices()

    assert service.report(AS_OF).value == 10 * 110 + 20 * 30


@pytest.mark.asyncio
async def test_refresh_prices_without_portfolio(app_config):
    with pytest.raises(RuntimeError):
        await PortfolioService(app_config).refresh_prices()
