"""Builders for validated domain models with test defaults"""

from datetime import date, datetime

from portfolio_base import AssetClass, Etf, Portfolio, PriceHistory, PricePoint, RecurringPlan, Transaction


def make_etf(isin="isin1", category="stocks", transactions=(), sip=None, countries=None,
             name=None, data_source="borsaitaliana"):
    return Etf(
        isin=isin,
        name=name or f"ETF {isin}",
        data_source=data_source,
        asset_class=AssetClass(name=category, category=category),
        countries=countries or {},
        transactions=list(transactions),
        sip=sip,
    )


def make_transaction(on, quantity, price):
    return Transaction(date=date.fromisoformat(on) if isinstance(on, str) else on, quantity=quantity, price=price)


def make_sip(start, quantity=1, frequency=12):
    return RecurringPlan(
        quantity=quantity,
        frequency=frequency,
        start_date=date.fromisoformat(start) if isinstance(start, str) else start,
    )


def make_prices(price, history=(), timestamp=None):
    return PriceHistory(
        price=price,
        timestamp=timestamp or datetime(2020, 1, 1, 12, 0, 0),
        history=[PricePoint(date=date.fromisoformat(d), price=p) for d, p in history],
    )


def make_portfolio(etfs, target_asset_class=None, target_country=None, max_drift=10.0, name="Test"):
    return Portfolio(
        id="portfolio-1",
        name=name,
        target_asset_class_allocation=target_asset_class or {},
        target_country_allocation=target_country or {},
        max_drift=max_drift,
        etfs={etf.isin: etf for etf in etfs},
    )


