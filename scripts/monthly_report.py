#!/usr/bin/env python3
"""Print a month's totals, health score and insights from exported records."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker.category_rules import default_categories
from finance_tracker.config import configure_logging
from finance_tracker.errors import FinanceDataError
from finance_tracker.lib.analytics import insight_records
from finance_tracker.lib.common import format_currency
from finance_tracker.models import Category
from finance_tracker.personal_finance_analytics import PersonalFinanceAnalytics, transactions_from_frame

logger = logging.getLogger(__name__)


def _load_categories(path: Optional[Path]) -> List[Category]:
    if path is None:
        return default_categories()
    frame = pd.read_csv(path, dtype=str)
    cleaned = frame.astype(object).where(frame.notna(), None)
    return [Category.from_record(record) for record in cleaned.to_dict(orient='records')]


def _print_report(analytics: PersonalFinanceAnalytics, year: int, month: int, limit: int) -> None:
    stats = analytics.calculate_monthly_summary(year, month)
    print(f"Month: {year:04d}-{month:02d}")
    print(f"Income:   {format_currency(stats.total_income)}")
    print(f"Expenses: {format_currency(stats.total_expenses)}")
    print(f"Balance:  {format_currency(stats.balance)}")

    breakdown = analytics.category_breakdown(year, month)
    if not breakdown.empty:
        print("\nSpending by category:")
        print(breakdown[['Category', 'Value', 'Percentage']].round(2).to_string(index=False))

    health = analytics.financial_health(year, month)
    print(f"\nFinancial health: {health.score}")
    for name, factor in health.factors.items():
        print(f"  {name:<11} {factor.score:>3}  {factor.label}")

    print("\nInsights:")
    for record in insight_records(analytics.generate_insights(year, month), limit=limit):
        print(f"  [{record['title']}] {record['content']}")


def main(transactions_path: Path, categories_path: Optional[Path], year: int, month: int, limit: int = 4) -> int:
    try:
        transactions = transactions_from_frame(pd.read_csv(transactions_path, dtype=str))
        categories = _load_categories(categories_path)
        _print_report(PersonalFinanceAnalytics(transactions, categories), year, month, limit)
    except FinanceDataError as exc:
        logger.error("Could not build the report: %s", exc)
        return 1
    return 0


if __name__ == '__main__':
    today = datetime.now()
    parser = argparse.ArgumentParser(description='Show a monthly finance report from CSV exports.')
    parser.add_argument('transactions', type=Path, help='CSV of transactions (id, amount, type, description, date, ...)')
    parser.add_argument('--categories', type=Path, default=None, help='CSV of categories; defaults to the seed set')
    parser.add_argument('--year', type=int, default=today.year, help='Calendar year')
    parser.add_argument('--month', type=int, default=today.month, choices=range(1, 13), metavar='MONTH', help='Calendar month (1-12)')
    parser.add_argument('--limit', type=int, default=4, help='How many insights to show')
    parser.add_argument('--log-level', default=None, help='Logging level, e.g. DEBUG')
    args = parser.parse_args()
    configure_logging(args.log_level)
    sys.exit(main(args.transactions, args.categories, args.year, args.month, limit=args.limit))
