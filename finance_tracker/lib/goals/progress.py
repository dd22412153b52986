"""Savings goal progress and time-remaining calculations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Union

from ...models import FinancialGoal
from ..common.amounts import ZERO, Number, parse_amount
from ..common.dates import local_naive

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class GoalProgress:
    progress_pct: float
    days_remaining_label: str
    is_overdue: bool
    remaining_amount: float
    is_completed: bool = False

    @property
    def display_pct(self) -> float:
        """Progress clamped to 100 for progress bars."""
        return min(100.0, self.progress_pct)

    @property
    def is_overachieved(self) -> bool:
        return self.progress_pct > 100


def days_remaining_label(target_date: Union[date, datetime], now: datetime) -> str:
    """Describe the time left until ``target_date``.

    The day difference is rounded up, so anything later today but not yet
    reached still counts as one day left.

    Example:
        >>> days_remaining_label(datetime(2024, 1, 16), datetime(2024, 1, 1))
        '15 days left'
    """
    diff_days = math.ceil((local_naive(target_date) - local_naive(now)) / ONE_DAY)

    if diff_days < 0:
        return 'overdue'
    if diff_days == 0:
        return 'today'
    if diff_days == 1:
        return '1 day left'
    if diff_days < 30:
        return f'{diff_days} days left'
    if diff_days < 365:
        return f'{math.ceil(diff_days / 30)} months left'
    return f'{math.ceil(diff_days / 365)} years left'


def evaluate_goal(
    current_amount: Number,
    target_amount: Number,
    target_date: Union[date, datetime],
    now: datetime,
    is_completed: bool = False,
) -> GoalProgress:
    """Evaluate progress towards a savings goal.

    Args:
        current_amount: Amount saved so far
        target_amount: Goal amount; progress is 0 when this is not positive
        target_date: When the goal should be reached
        now: Reference time for the time-remaining label
        is_completed: Whether the goal was marked complete

    Returns:
        GoalProgress with the unclamped completion percentage
    """
    current = parse_amount(current_amount, 'current amount')
    target = parse_amount(target_amount, 'target amount')

    progress_pct = float(current * 100 / target) if target > 0 else 0.0
    target_moment = local_naive(target_date)
    reference = local_naive(now)

    return GoalProgress(
        progress_pct=progress_pct,
        days_remaining_label=days_remaining_label(target_moment, reference),
        is_overdue=target_moment < reference and not is_completed,
        remaining_amount=float(max(ZERO, target - current)),
        is_completed=is_completed,
    )


def evaluate_goal_record(goal: FinancialGoal, now: datetime) -> GoalProgress:
    return evaluate_goal(
        goal.current_amount,
        goal.target_amount,
        goal.target_date,
        now,
        is_completed=goal.is_completed,
    )


def goal_status_label(progress: GoalProgress) -> str:
    """Badge text for a goal: completion and lateness win over the countdown."""
    if progress.is_completed:
        return 'Completed'
    if progress.is_overdue:
        return 'Overdue'
    return progress.days_remaining_label


def overall_goal_progress(goals: Iterable[FinancialGoal]) -> float:
    """Average completion fraction across goals, each capped at 1.

    Goals without a positive target are skipped; with none left the result
    is 0.0.
    """
    fractions = [
        min(1.0, float(goal.current_amount / goal.target_amount))
        for goal in goals
        if goal.target_amount > 0
    ]
    if not fractions:
        return 0.0
    return sum(fractions) / len(fractions)
