"""Personal Finance Analytics.

This module ties the calculation library to one user's records: it keeps
the transactions in a DataFrame for breakdowns and trends, and delegates
monthly totals, budget progress, goal progress, the health score and the
insights to the pure functions in :mod:`finance_tracker.lib`.
"""

from __future__ import annotations

import calendar
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import FinanceDataError
from .lib.analytics import (
    compute_monthly_stats,
    generate_insights,
    month_bounds,
    previous_month,
    recent_months,
    savings_rate,
    score_health,
)
from .lib.analytics.insights import Insight
from .lib.budgets import BudgetUsage, budget_adherence, budget_usage
from .lib.common.dates import local_naive
from .lib.config import get_config_value
from .lib.goals import GoalProgress, evaluate_goal_record, overall_goal_progress
from .models import (
    Budget,
    Category,
    FinancialGoal,
    FinancialHealthScore,
    MonthlyStats,
    Transaction,
)

logger = logging.getLogger(__name__)

BREAKDOWN_COLUMNS = ['Category', 'Value', 'Color', 'Percentage']
TREND_COLUMNS = ['Month Label', 'Year', 'Month', 'Income', 'Expenses', 'Balance']


class PersonalFinanceAnalytics:
    """Analytics over a single user's transactions, budgets and goals."""

    def __init__(
        self,
        transactions: Iterable[Transaction],
        categories: Iterable[Category] = (),
        budgets: Iterable[Budget] = (),
        goals: Iterable[FinancialGoal] = (),
    ):
        self.transactions: Tuple[Transaction, ...] = tuple(transactions)
        self.categories: Tuple[Category, ...] = tuple(categories)
        self.budgets: Tuple[Budget, ...] = tuple(budgets)
        self.goals: Tuple[FinancialGoal, ...] = tuple(goals)
        self.data = self._prepare_data()

    def _prepare_data(self) -> pd.DataFrame:
        """Build the transaction frame used for breakdowns and trends."""
        columns = [
            'id', 'Transaction Date', 'Description', 'Amount', 'Type',
            'Category ID', 'Category', 'Color', 'Source',
        ]
        if not self.transactions:
            return pd.DataFrame(columns=columns + ['Signed Amount', 'Year', 'Month'])

        fallback = get_config_value('categorization', 'fallback_category', default={})
        fallback_name = fallback.get('name', 'Other')
        fallback_color = fallback.get('color', '#9E9E9E')
        by_id = {category.id: category for category in self.categories}

        rows = []
        for txn in self.transactions:
            category = by_id.get(txn.category_id) if txn.category_id else None
            rows.append({
                'id': txn.id,
                'Transaction Date': local_naive(txn.date),
                'Description': txn.description,
                'Amount': float(txn.amount),
                'Type': txn.type.value,
                'Category ID': txn.category_id,
                'Category': category.name if category else fallback_name,
                'Color': category.color if category else fallback_color,
                'Source': txn.source.value,
            })

        data = pd.DataFrame(rows, columns=columns)
        data['Transaction Date'] = pd.to_datetime(data['Transaction Date'])
        data['Signed Amount'] = np.where(data['Type'] == 'income', data['Amount'], -data['Amount'])
        data['Year'] = data['Transaction Date'].dt.year
        data['Month'] = data['Transaction Date'].dt.month
        return data

    def _month_transactions(self, year: int, month: int) -> List[Transaction]:
        start, end = month_bounds(year, month)
        return [txn for txn in self.transactions if start <= local_naive(txn.date) <= end]

    def calculate_monthly_summary(self, year: int, month: int) -> MonthlyStats:
        """Income, expenses and balance for a calendar month."""
        return compute_monthly_stats(self.transactions, year, month)

    def category_breakdown(self, year: Optional[int] = None, month: Optional[int] = None) -> pd.DataFrame:
        """Expense totals per category, largest first.

        Args:
            year: Restrict to this year
            month: Restrict to this month of ``year``

        Returns:
            DataFrame with columns Category, Value, Color, Percentage

        Raises:
            FinanceDataError: If ``month`` is given without ``year``
        """
        if month is not None and year is None:
            raise FinanceDataError("A month filter needs a year")
        data = self.data
        if data.empty:
            return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

        expenses = data[data['Type'] == 'expense']
        if year is not None and month is not None:
            start, end = month_bounds(year, month)
            expenses = expenses[
                (expenses['Transaction Date'] >= start) & (expenses['Transaction Date'] <= end)
            ]
        elif year is not None:
            expenses = expenses[expenses['Year'] == year]
        if expenses.empty:
            return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

        breakdown = (
            expenses.groupby('Category', sort=False)
            .agg(Value=('Amount', 'sum'), Color=('Color', 'first'))
            .reset_index()
            .sort_values('Value', ascending=False, kind='stable')
            .reset_index(drop=True)
        )
        total = breakdown['Value'].sum()
        breakdown['Percentage'] = (breakdown['Value'] / total * 100) if total else 0.0
        return breakdown[BREAKDOWN_COLUMNS]

    def monthly_trend(self, now: datetime, months: int = 6) -> pd.DataFrame:
        """Income and expenses for the last ``months`` months, oldest first."""
        rows = []
        for year, month in recent_months(now, months):
            stats = self.calculate_monthly_summary(year, month)
            rows.append({
                'Month Label': f"{calendar.month_abbr[month]} {year}",
                'Year': year,
                'Month': month,
                'Income': float(stats.total_income),
                'Expenses': float(stats.total_expenses),
                'Balance': float(stats.balance),
            })
        return pd.DataFrame(rows, columns=TREND_COLUMNS)

    def budget_usage(self) -> List[BudgetUsage]:
        """Active budgets with their spending."""
        return budget_usage(self.budgets, self.transactions, self.categories)

    def goal_progress(self, now: datetime) -> List[Tuple[FinancialGoal, GoalProgress]]:
        return [(goal, evaluate_goal_record(goal, now)) for goal in self.goals]

    def financial_health(
        self,
        year: int,
        month: int,
        budget_adherence_value: Optional[float] = None,
        goal_progress_value: Optional[float] = None,
    ) -> FinancialHealthScore:
        """Health score for a month.

        Budget adherence and goal progress are derived from this user's
        budgets and goals unless given explicitly.
        """
        stats = self.calculate_monthly_summary(year, month)
        if budget_adherence_value is None:
            budget_adherence_value = budget_adherence(self.budget_usage())
        if goal_progress_value is None:
            goal_progress_value = overall_goal_progress(self.goals)

        return score_health(
            stats.total_income,
            stats.total_expenses,
            savings_rate(stats),
            budget_adherence_value,
            goal_progress_value,
        )

    def generate_insights(self, year: int, month: int) -> List[Insight]:
        """Insights for a month, compared against the month before."""
        stats = self.calculate_monthly_summary(year, month)
        prev_year, prev_month = previous_month(year, month)
        previous_stats = self.calculate_monthly_summary(prev_year, prev_month)
        logger.debug(
            "Generating insights for %04d-%02d (expenses %s, previous %s)",
            year, month, stats.total_expenses, previous_stats.total_expenses,
        )
        return generate_insights(
            self._month_transactions(year, month),
            self.budget_usage(),
            stats,
            previous_stats,
        )


def transactions_from_frame(frame: pd.DataFrame) -> List[Transaction]:
    """Build transactions from a DataFrame of stored records (e.g. a CSV export)."""
    cleaned = frame.astype(object).where(frame.notna(), None)
    records: Sequence[dict] = cleaned.to_dict(orient='records')
    return [Transaction.from_record(record) for record in records]
