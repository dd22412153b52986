import time
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from finance_tracker.errors import InvalidPeriodError
from finance_tracker.lib.analytics import (
    compute_monthly_stats,
    expense_ratio_pct,
    month_bounds,
    previous_month,
    recent_months,
    savings_rate,
)
from finance_tracker.models import MonthlyStats, Transaction, TransactionType


def _txn(amount, when, type_=TransactionType.EXPENSE, txn_id='t1'):
    return Transaction(
        id=txn_id,
        user_id='u1',
        amount=Decimal(str(amount)),
        type=type_,
        description='',
        date=when,
    )


def test_empty_month_is_all_zero():
    stats = compute_monthly_stats([], 2024, 3)
    assert stats == MonthlyStats(total_income=Decimal('0'), total_expenses=Decimal('0'), balance=Decimal('0'))


def test_totals_are_exact_decimals():
    transactions = [
        _txn('0.1', datetime(2024, 3, 2)),
        _txn('0.2', datetime(2024, 3, 3)),
        _txn('1000', datetime(2024, 3, 1), type_=TransactionType.INCOME),
    ]
    stats = compute_monthly_stats(transactions, 2024, 3)
    assert stats.total_expenses == Decimal('0.3')
    assert stats.total_income == Decimal('1000')
    assert stats.balance == Decimal('999.7')


def test_last_second_of_month_is_included():
    transactions = [
        _txn(10, datetime(2024, 3, 31, 23, 59, 59)),
        _txn(20, datetime(2024, 4, 1, 0, 0, 0)),
        _txn(40, datetime(2024, 2, 29, 23, 59, 59)),
    ]
    assert compute_monthly_stats(transactions, 2024, 3).total_expenses == Decimal('10')


def test_plain_dates_count_as_midnight():
    transactions = [
        Transaction(id='t1', user_id='u1', amount=Decimal('25'), type=TransactionType.EXPENSE,
                    description='', date=datetime(2024, 3, 15).date()),
    ]
    assert compute_monthly_stats(transactions, 2024, 3).total_expenses == Decimal('25')


def test_month_bounds_cover_leap_day():
    start, end = month_bounds(2024, 2)
    assert start == datetime(2024, 2, 1)
    assert end == datetime(2024, 2, 29, 23, 59, 59, 999999)


@pytest.mark.parametrize('month', [0, 13])
def test_invalid_month_is_rejected(month):
    with pytest.raises(InvalidPeriodError):
        compute_monthly_stats([], 2024, month)


def test_previous_month_wraps_january():
    assert previous_month(2024, 1) == (2023, 12)
    assert previous_month(2024, 7) == (2024, 6)


def test_recent_months_are_oldest_first():
    assert recent_months(datetime(2024, 2, 10), 3) == [(2023, 12), (2024, 1), (2024, 2)]


def test_savings_rate_and_expense_ratio():
    stats = MonthlyStats(total_income=Decimal('1000'), total_expenses=Decimal('800'), balance=Decimal('200'))
    assert savings_rate(stats) == 20.0
    assert expense_ratio_pct(stats) == 80.0


def test_savings_rate_is_zero_when_overspending_or_without_income():
    overspent = MonthlyStats(total_income=Decimal('500'), total_expenses=Decimal('800'), balance=Decimal('-300'))
    no_income = MonthlyStats(total_expenses=Decimal('100'), balance=Decimal('-100'))
    assert savings_rate(overspent) == 0.0
    assert savings_rate(no_income) == 0.0
    assert expense_ratio_pct(no_income) is None


def test_stats_serialize_with_camel_case_keys():
    stats = MonthlyStats(total_income=Decimal('10.5'), total_expenses=Decimal('4'), balance=Decimal('6.5'))
    assert stats.to_dict() == {'totalIncome': 10.5, 'totalExpenses': 4.0, 'balance': 6.5}


def test_string_amounts_are_summed_exactly():
    transactions = [
        Transaction(id='t1', user_id='u1', amount='12.50', type=TransactionType.EXPENSE,
                    description='', date=datetime(2024, 3, 5)),
        Transaction(id='t2', user_id='u1', amount='0.25', type=TransactionType.EXPENSE,
                    description='', date=datetime(2024, 3, 6)),
    ]
    assert compute_monthly_stats(transactions, 2024, 3).total_expenses == Decimal('12.75')


@pytest.fixture
def utc_local_time(monkeypatch):
    monkeypatch.setenv('TZ', 'UTC')
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.skipif(not hasattr(time, 'tzset'), reason='time.tzset is not available on this platform')
def test_aware_timestamps_use_local_calendar(utc_local_time):
    # 22:30 at UTC-02:00 on March 31 is already April 1 in UTC
    late_march = datetime(2024, 3, 31, 22, 30, tzinfo=timezone(timedelta(hours=-2)))
    # 01:30 at UTC+03:00 on April 1 is still March 31 in UTC
    early_april = datetime(2024, 4, 1, 1, 30, tzinfo=timezone(timedelta(hours=3)))
    transactions = [_txn(10, late_march, txn_id='t1'), _txn(20, early_april, txn_id='t2')]

    assert compute_monthly_stats(transactions, 2024, 3).total_expenses == Decimal('20')
    assert compute_monthly_stats(transactions, 2024, 4).total_expenses == Decimal('10')
