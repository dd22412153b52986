"""Budget-specific calculations.

This module provides budget progress classification, spending derivation
and budget summaries used by the health score and the insights.
"""

from .calculations import (
    BudgetProgress,
    BudgetUsage,
    budget_adherence,
    budget_spent,
    budget_totals,
    budget_usage,
    evaluate_budget,
)

__all__ = [
    'BudgetProgress',
    'BudgetUsage',
    'budget_adherence',
    'budget_spent',
    'budget_totals',
    'budget_usage',
    'evaluate_budget',
]
