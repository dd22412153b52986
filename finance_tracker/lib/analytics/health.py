"""Financial health score.

Blends four factors into a single 0-100 score:

* savings    (30%) - a 20% savings rate earns the full 100 points
* budget     (25%) - share of budgets kept
* discipline (25%) - how little of the income is spent
* goals      (20%) - progress towards savings goals
"""

from __future__ import annotations

import logging

from ...models import FactorScore, FinancialHealthScore
from ..common.amounts import Number, parse_amount, round_half_up

logger = logging.getLogger(__name__)

TARGET_SAVINGS_RATE = 20.0

WEIGHTS = {
    'savings': 0.30,
    'budget': 0.25,
    'discipline': 0.25,
    'goals': 0.20,
}

SCORE_BANDS = (
    (90, 'Excellent'),
    (70, 'Good'),
    (50, 'Fair'),
    (30, 'Weak'),
)


def score_label(score: float) -> str:
    """Qualitative band for any factor or overall score."""
    for threshold, label in SCORE_BANDS:
        if score >= threshold:
            return label
    return 'Critical'


def discipline_score(total_income: Number, total_expenses: Number) -> float:
    """Reward a low expense-to-income ratio.

    Without income the ratio is undefined: spending anything scores 0,
    spending nothing scores 100.
    """
    income = float(parse_amount(total_income, 'total income'))
    expenses = float(parse_amount(total_expenses, 'total expenses'))
    if income == 0:
        return 0.0 if expenses > 0 else 100.0
    return max(0.0, (1 - expenses / income) * 100)


def _factor(score: float) -> FactorScore:
    return FactorScore(score=round_half_up(score), label=score_label(score))


def score_health(
    total_income: Number,
    total_expenses: Number,
    savings_rate: float,
    budget_adherence: float,
    goal_progress: float,
) -> FinancialHealthScore:
    """Compute the weighted financial health score.

    Args:
        total_income: Income for the period
        total_expenses: Expenses for the period
        savings_rate: Percentage of income saved (20 means 20%)
        budget_adherence: Fraction in [0, 1]
        goal_progress: Fraction in [0, 1]

    Returns:
        FinancialHealthScore with the overall score clamped to [0, 100]

    Example:
        >>> score_health(10000, 6000, 20, 1.0, 1.0).score
        85
    """
    savings = min(100.0, (float(savings_rate) / TARGET_SAVINGS_RATE) * 100)
    budget = float(budget_adherence) * 100
    discipline = discipline_score(total_income, total_expenses)
    goals = float(goal_progress) * 100

    weighted = (
        savings * WEIGHTS['savings']
        + budget * WEIGHTS['budget']
        + discipline * WEIGHTS['discipline']
        + goals * WEIGHTS['goals']
    )
    overall = min(100, max(0, round_half_up(weighted)))
    logger.debug(
        "Health score %s (savings=%.1f budget=%.1f discipline=%.1f goals=%.1f)",
        overall, savings, budget, discipline, goals,
    )

    return FinancialHealthScore(
        score=overall,
        savings=_factor(savings),
        budget=_factor(budget),
        goals=_factor(goals),
        discipline=_factor(discipline),
    )
