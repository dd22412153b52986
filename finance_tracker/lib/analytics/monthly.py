"""Monthly income/expense aggregation.

This module turns a user's transactions into per-month totals.  All
functions are pure; callers pass whatever transactions they have and the
functions filter to the requested calendar month.
"""

from __future__ import annotations

import calendar
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from ...errors import InvalidPeriodError
from ...models import MonthlyStats, Transaction
from ..common.amounts import ZERO
from ..common.dates import local_naive

logger = logging.getLogger(__name__)


def _validate_month(year: int, month: int) -> None:
    if not 1 <= int(month) <= 12:
        raise InvalidPeriodError(year, month)


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """Return the first and last instant of a calendar month.

    The end bound covers the whole last day (23:59:59.999999).

    Example:
        >>> month_bounds(2024, 2)
        (datetime.datetime(2024, 2, 1, 0, 0), datetime.datetime(2024, 2, 29, 23, 59, 59, 999999))
    """
    _validate_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999999)
    return start, end


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """Return the (year, month) before the given month, wrapping January."""
    _validate_month(year, month)
    if month == 1:
        return year - 1, 12
    return year, month - 1


def recent_months(now: datetime, count: int = 6) -> List[Tuple[int, int]]:
    """Return ``count`` (year, month) pairs ending with the month of ``now``, oldest first."""
    months: List[Tuple[int, int]] = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append((year, month))
        year, month = previous_month(year, month)
    return list(reversed(months))


def compute_monthly_stats(transactions: Iterable[Transaction], year: int, month: int) -> MonthlyStats:
    """Sum a month's income and expenses.

    Args:
        transactions: Transactions of a single user, any date range
        year: Calendar year
        month: Calendar month (1-12)

    Returns:
        MonthlyStats with exact decimal totals; zeros when nothing matches

    Raises:
        InvalidPeriodError: If ``month`` is outside 1-12
    """
    start, end = month_bounds(year, month)
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    count = 0

    for transaction in transactions:
        when = local_naive(transaction.date)
        if not start <= when <= end:
            continue
        count += 1
        if transaction.is_income:
            income += transaction.amount
        elif transaction.is_expense:
            expenses += transaction.amount

    logger.debug("Aggregated %d transactions for %04d-%02d", count, year, month)
    return MonthlyStats(total_income=income, total_expenses=expenses, balance=income - expenses)


def savings_rate(stats: MonthlyStats) -> float:
    """Percentage of income kept this month.

    Returns 0 when there is no income or the balance is not positive.
    """
    if stats.total_income <= 0 or stats.balance <= 0:
        return 0.0
    return float(stats.balance / stats.total_income * 100)


def expense_ratio_pct(stats: MonthlyStats) -> Optional[float]:
    """Expenses as a percentage of income, or ``None`` without income."""
    if stats.total_income <= 0:
        return None
    return float(stats.total_expenses / stats.total_income * 100)
