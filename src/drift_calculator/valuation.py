"""Valuation of holdings: cost basis and current value"""

from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping, Optional
from portfolio_base import Etf, PriceHistory, PricePoint, EQUITY_CATEGORY
from .models import EtfSnapshot
from .positions import quantity_at_date, sip_occurrence_dates

PriceByDate = Dict[date, float]
EtfFilter = Callable[[Etf], bool]


def all_etfs(etf: Etf) -> bool:
    return True


def equity_filter(equity_category: str = EQUITY_CATEGORY) -> EtfFilter:
    """Filter keeping the ETFs whose asset class is the equity category"""
    def is_equity(etf: Etf) -> bool:
        return etf.category == equity_category
    return is_equity


is_equity = equity_filter()


def prices_history_to_map(history: Iterable[PricePoint]) -> PriceByDate:
    """Index a price series by date; later points win on duplicate dates"""
    return {point.date: point.price for point in history}


def prices_history_map(prices: Mapping[str, PriceHistory]) -> Dict[str, PriceByDate]:
    """Index every ISIN's price series by date"""
    return {isin: prices_history_to_map(record.history) for isin, record in prices.items()}


def current_price(prices: Mapping[str, PriceHistory], isin: str) -> float:
    """Current price of an ISIN, 0 when unknown"""
    record = prices.get(isin)
    return record.price if record else 0.0


def last_transaction_price(etf: Etf) -> Optional[float]:
    """Price of the most recent explicit transaction; on a shared date the one listed last wins"""
    if not etf.transactions:
        return None
    return max(reversed(etf.transactions), key=lambda t: t.date).price


def etf_cost(etf: Etf, price_by_date: Optional[Mapping[date, float]], as_of: date) -> float:
    """
    Amount paid for an ETF: every explicit transaction plus each plan purchase up to as_of.

    Plan purchases are priced at the closing price of their date, falling back to the
    last transaction price and then to 0 when the date is missing from the history.
    """
    cost = sum(t.quantity * t.price for t in etf.transactions)

    if etf.sip:
        price_by_date = price_by_date or {}
        fallback_price = last_transaction_price(etf)
        for occurrence in sip_occurrence_dates(etf.sip, as_of):
            price = price_by_date.get(occurrence)
            if price is None:
                price = fallback_price if fallback_price is not None else 0.0
            cost += etf.sip.quantity * price

    return cost


def portfolio_cost(etfs: Mapping[str, Etf], price_by_date_map: Mapping[str, Mapping[date, float]],
                   as_of: date) -> float:
    """Total amount paid for the portfolio up to as_of"""
    return sum(etf_cost(etf, price_by_date_map.get(etf.isin), as_of) for etf in etfs.values())


def current_portfolio_value(etfs: Mapping[str, Etf], prices: Mapping[str, PriceHistory],
                            as_of: date, etf_filter: EtfFilter = all_etfs) -> float:
    """Market value of the ETFs passing the filter, at current prices"""
    return sum(
        quantity_at_date(etf.transactions, as_of, etf.sip) * current_price(prices, etf.isin)
        for etf in etfs.values()
        if etf_filter(etf)
    )


def current_equity_value(etfs: Mapping[str, Etf], prices: Mapping[str, PriceHistory], as_of: date,
                         equity_category: str = EQUITY_CATEGORY) -> float:
    """Market value of the equity sleeve, the base of the country breakdown"""
    return current_portfolio_value(etfs, prices, as_of, equity_filter(equity_category))


def current_etf_data(etfs: Mapping[str, Etf], prices: Mapping[str, PriceHistory],
                     as_of: date) -> List[EtfSnapshot]:
    """Per-ETF quantity, paid value and current value"""
    snapshots = []
    for etf in etfs.values():
        quantity = quantity_at_date(etf.transactions, as_of, etf.sip)
        record = prices.get(etf.isin)
        snapshots.append(EtfSnapshot(
            isin=etf.isin,
            name=etf.name,
            category=etf.category,
            quantity=quantity,
            paid_value=etf_cost(etf, prices_history_to_map(record.history) if record else None, as_of),
            current_value=quantity * current_price(prices, etf.isin),
        ))
    return snapshots


def current_values_by_asset_class(snapshots: Iterable[EtfSnapshot]) -> Dict[str, float]:
    """Sum current values per asset class category"""
    values: Dict[str, float] = {}
    for snapshot in snapshots:
        values[snapshot.category] = values.get(snapshot.category, 0.0) + snapshot.current_value
    return values


def current_values_by_country(etfs: Mapping[str, Etf], prices: Mapping[str, PriceHistory], as_of: date,
                              equity_category: str = EQUITY_CATEGORY) -> Dict[str, float]:
    """
    Spread each equity ETF's current value over its country weights.

    Weights are percentages of the ETF value; when they do not add up to 100 the
    remainder is left unassigned.
    """
    values: Dict[str, float] = {}
    for etf in filter(equity_filter(equity_category), etfs.values()):
        etf_value = quantity_at_date(etf.transactions, as_of, etf.sip) * current_price(prices, etf.isin)
        for country, percentage in etf.countries.items():
            values[country] = values.get(country, 0.0) + etf_value * percentage / 100
    return values


def current_portfolio_value_date(etfs: Mapping[str, Etf],
                                 prices: Mapping[str, PriceHistory]) -> Optional[date]:
    """Latest price date among the portfolio's ETFs"""
    dates = [prices[isin].last_date for isin in etfs if isin in prices and prices[isin].last_date]
    return max(dates) if dates else None
