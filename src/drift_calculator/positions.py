"""Position sizing from explicit transactions and recurring purchase plans"""

from datetime import date
from typing import Iterable, Iterator, Optional
from dateutil.relativedelta import relativedelta
from portfolio_base import RecurringPlan, Transaction


def whole_months_between(start: date, end: date) -> int:
    """
    Calendar months elapsed from start to end, counting a month only once its
    anniversary day is reached (clamped to month end, so Jan 31 -> Feb 29 is one month).
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and start + relativedelta(months=months) > end:
        months -= 1
    elif months < 0 and start + relativedelta(months=months) < end:
        months += 1
    return months


def sip_occurrences(sip: Optional[RecurringPlan], on: date) -> int:
    """Number of plan purchases with effective date on or before the given date"""
    if sip is None or sip.start_date > on:
        return 0
    # The start date is the first purchase
    return whole_months_between(sip.start_date, on) // sip.period_months + 1


def sip_occurrence_dates(sip: Optional[RecurringPlan], on: date) -> Iterator[date]:
    """Effective dates of every plan purchase up to the given date, oldest first"""
    for index in range(sip_occurrences(sip, on)):
        yield sip.start_date + relativedelta(months=index * sip.period_months)


def quantity_at_date(transactions: Iterable[Transaction], on: date,
                     sip: Optional[RecurringPlan] = None) -> float:
    """
    Units held at the end of the given date.

    Transactions are filtered by date rather than scanned up to the first later
    one, so the input does not need to be sorted.
    """
    quantity = sum(t.quantity for t in transactions if t.date <= on)
    return quantity + sip_occurrences(sip, on) * (sip.quantity if sip else 0)
