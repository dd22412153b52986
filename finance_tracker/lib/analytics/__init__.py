"""Analytics utilities for monthly figures, scoring and insights.

This module provides the monthly aggregator, the financial health score
and the rule-based insight generator.
"""

from .monthly import (
    compute_monthly_stats,
    expense_ratio_pct,
    month_bounds,
    previous_month,
    recent_months,
    savings_rate,
)
from .health import score_health, score_label
from .insights import (
    INSIGHT_PRESENTATION,
    BudgetWarning,
    GoalSuggestion,
    InsightType,
    SavingTip,
    TrendAnalysis,
    generate_insights,
    insight_records,
    presentation_for,
)

__all__ = [
    # Monthly
    'compute_monthly_stats',
    'expense_ratio_pct',
    'month_bounds',
    'previous_month',
    'recent_months',
    'savings_rate',
    # Health
    'score_health',
    'score_label',
    # Insights
    'INSIGHT_PRESENTATION',
    'BudgetWarning',
    'GoalSuggestion',
    'InsightType',
    'SavingTip',
    'TrendAnalysis',
    'generate_insights',
    'insight_records',
    'presentation_for',
]
