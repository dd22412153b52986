"""Budget progress and spending calculations.

This module provides functions for deriving how much of a budget has been
spent, classifying budget progress into safe/warning/danger, and
summarising a user's budgets for the score and the budget page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ...models import Budget, Category, Transaction
from ..common.amounts import ZERO, Number, parse_amount, round_half_up
from ..common.dates import end_of_day, local_naive

logger = logging.getLogger(__name__)

DANGER_THRESHOLD = 90
WARNING_THRESHOLD = 75

STATUS_SAFE = 'safe'
STATUS_WARNING = 'warning'
STATUS_DANGER = 'danger'


@dataclass(frozen=True)
class BudgetProgress:
    percentage: float
    remaining: float
    status: str
    overspent: float = 0.0


def evaluate_budget(spent: Number, budget_amount: Number) -> BudgetProgress:
    """Classify spending against a budget.

    Args:
        spent: Amount spent so far
        budget_amount: Budget limit

    Returns:
        BudgetProgress where ``percentage`` is clamped to 100 for display,
        ``remaining`` is floored at zero and ``status`` is decided on the
        unclamped percentage (> 90 danger, > 75 warning).  A budget of zero
        or less yields ``0, 0, 'safe'``.

    Example:
        >>> evaluate_budget(95, 100)
        BudgetProgress(percentage=95.0, remaining=5.0, status='danger', overspent=0.0)
    """
    spent_value = parse_amount(spent, 'spent')
    amount = parse_amount(budget_amount, 'budget amount')

    if amount <= 0:
        return BudgetProgress(percentage=0.0, remaining=0.0, status=STATUS_SAFE)

    raw_percentage = spent_value * 100 / amount
    if raw_percentage > DANGER_THRESHOLD:
        status = STATUS_DANGER
    elif raw_percentage > WARNING_THRESHOLD:
        status = STATUS_WARNING
    else:
        status = STATUS_SAFE

    return BudgetProgress(
        percentage=float(min(Decimal(100), raw_percentage)),
        remaining=float(max(ZERO, amount - spent_value)),
        status=status,
        overspent=float(max(ZERO, spent_value - amount)),
    )


def budget_spent(budget: Budget, transactions: Iterable[Transaction]) -> Decimal:
    """Sum expense amounts in the budget's category and date window.

    The window is inclusive on both ends; the end date counts through the
    end of its day.  Budgets without a category have nothing to track.
    """
    if budget.category_id is None:
        return ZERO

    start = local_naive(budget.start_date)
    end = local_naive(budget.end_date)
    if end.time() == time.min:
        end = end_of_day(end)

    total = ZERO
    for transaction in transactions:
        if not transaction.is_expense or transaction.category_id != budget.category_id:
            continue
        if start <= local_naive(transaction.date) <= end:
            total += transaction.amount
    return total


@dataclass(frozen=True)
class BudgetUsage:
    """A budget together with its derived spending and category."""

    budget: Budget
    spent: Decimal
    category: Optional[Category] = None

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else 'Uncategorized'

    @property
    def progress(self) -> BudgetProgress:
        return evaluate_budget(self.spent, self.budget.amount)

    @property
    def spent_fraction(self) -> Optional[Decimal]:
        if self.budget.amount <= 0:
            return None
        return self.spent / self.budget.amount


def budget_usage(
    budgets: Iterable[Budget],
    transactions: Sequence[Transaction],
    categories: Iterable[Category] = (),
) -> List[BudgetUsage]:
    """Attach spending and category to every active budget."""
    by_id: Dict[str, Category] = {category.id: category for category in categories}
    usages = []
    for budget in budgets:
        if not budget.is_active:
            continue
        usages.append(
            BudgetUsage(
                budget=budget,
                spent=budget_spent(budget, transactions),
                category=by_id.get(budget.category_id) if budget.category_id else None,
            )
        )
    return usages


def budget_totals(usages: Iterable[BudgetUsage]) -> Tuple[Decimal, Decimal, int]:
    """Return total budget, total spent and the rounded share used.

    Example:
        >>> budget_totals([])
        (Decimal('0'), Decimal('0'), 0)
    """
    total_budget = ZERO
    total_spent = ZERO
    for usage in usages:
        total_budget += usage.budget.amount
        total_spent += usage.spent
    used_pct = round_half_up(total_spent * 100 / total_budget) if total_budget > 0 else 0
    return total_budget, total_spent, used_pct


def budget_adherence(usages: Iterable[BudgetUsage]) -> float:
    """Fraction of budgets whose spending stays within the limit.

    Budgets with a non-positive amount are ignored.  With nothing to measure
    the user has not broken any budget, so the result is 1.0.
    """
    measured = 0
    within = 0
    for usage in usages:
        if usage.budget.amount <= 0:
            logger.warning("Ignoring budget %s with non-positive amount", usage.budget.id)
            continue
        measured += 1
        if usage.spent <= usage.budget.amount:
            within += 1
    if measured == 0:
        return 1.0
    return within / measured
