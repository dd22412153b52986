"""Rule-based insight generation.

Each rule looks at the current month's data and may add one insight:

1. budget warnings for budgets more than 80% used
2. a saving tip when dining out costs more than 500
3. a trend note when expenses moved more than 10% against last month
4. an emergency fund suggestion, always

Insights are plain frozen dataclasses, one per kind, so each carries only
the figures its message needs.  Presentation (title, icon, colour) is looked
up from the kind.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Sequence, Union

from ...models import MonthlyStats, Transaction
from ..budgets.calculations import BudgetUsage
from ..common.amounts import ZERO, round_half_up
from ..common.formatting import format_currency
from ..config import get_categorization_config

logger = logging.getLogger(__name__)

BUDGET_WARNING_FRACTION = Decimal("0.8")
BUDGET_DANGER_FRACTION = Decimal("0.9")
DINING_SPEND_THRESHOLD = Decimal("500")
DINING_SAVING_SHARE = Decimal("0.4")
TREND_THRESHOLD_PCT = Decimal("10")
EMERGENCY_FUND_MONTHS = 3


class InsightType(str, Enum):
    SAVING_TIP = "saving_tip"
    BUDGET_WARNING = "budget_warning"
    TREND_ANALYSIS = "trend_analysis"
    GOAL_SUGGESTION = "goal_suggestion"


@dataclass(frozen=True)
class InsightStyle:
    title: str
    icon: str
    color: str


INSIGHT_PRESENTATION: Dict[InsightType, InsightStyle] = {
    InsightType.SAVING_TIP: InsightStyle('Saving Tip', 'lightbulb', '#4CAF50'),
    InsightType.BUDGET_WARNING: InsightStyle('Budget Warning', 'alert-triangle', '#FF9800'),
    InsightType.TREND_ANALYSIS: InsightStyle('Trend Analysis', 'trending-up', '#2196F3'),
    InsightType.GOAL_SUGGESTION: InsightStyle('Goal Suggestion', 'target', '#9C27B0'),
}


def presentation_for(insight_type: InsightType) -> InsightStyle:
    return INSIGHT_PRESENTATION[InsightType(insight_type)]


class _InsightBase(ABC):
    insight_type: ClassVar[InsightType]

    @property
    def title(self) -> str:
        return presentation_for(self.insight_type).title

    @property
    @abstractmethod
    def content(self) -> str:
        """Fully interpolated display text."""

    @property
    def priority(self) -> int:
        return 1

    def to_record(self, insight_id: str) -> Dict[str, Any]:
        return {
            'id': insight_id,
            'type': self.insight_type.value,
            'title': self.title,
            'content': self.content,
            'priority': self.priority,
        }


@dataclass(frozen=True)
class BudgetWarning(_InsightBase):
    insight_type: ClassVar[InsightType] = InsightType.BUDGET_WARNING

    category_name: str
    spent_fraction: Decimal

    @property
    def used_pct(self) -> int:
        return round_half_up(self.spent_fraction * 100)

    @property
    def priority(self) -> int:
        return 3 if self.spent_fraction > BUDGET_DANGER_FRACTION else 2

    @property
    def color(self) -> str:
        return '#F44336' if self.spent_fraction > BUDGET_DANGER_FRACTION else '#FF9800'

    @property
    def content(self) -> str:
        return (
            f"You have used {self.used_pct}% of your {self.category_name} budget. "
            "Spend carefully."
        )


@dataclass(frozen=True)
class SavingTip(_InsightBase):
    insight_type: ClassVar[InsightType] = InsightType.SAVING_TIP

    dining_total: Decimal

    @property
    def monthly_saving(self) -> int:
        return round_half_up(self.dining_total * DINING_SAVING_SHARE)

    @property
    def content(self) -> str:
        return (
            f"Cooking at home on weekends could save you {format_currency(self.monthly_saving)} a month. "
            "Your restaurant spending is above average."
        )


@dataclass(frozen=True)
class TrendAnalysis(_InsightBase):
    insight_type: ClassVar[InsightType] = InsightType.TREND_ANALYSIS

    change_pct: Decimal

    @property
    def magnitude(self) -> int:
        return round_half_up(abs(self.change_pct))

    @property
    def increased(self) -> bool:
        return self.change_pct > 0

    @property
    def content(self) -> str:
        direction = 'increased' if self.increased else 'decreased'
        advice = (
            "Review what is driving the increase."
            if self.increased
            else "Keep this pace and you will save a significant amount this year."
        )
        return f"Your spending {direction} by {self.magnitude}% compared to last month. {advice}"


@dataclass(frozen=True)
class GoalSuggestion(_InsightBase):
    insight_type: ClassVar[InsightType] = InsightType.GOAL_SUGGESTION

    target_amount: Decimal

    @property
    def content(self) -> str:
        return (
            "Consider building an emergency fund. Three times your monthly expenses "
            f"({format_currency(self.target_amount)}) would be ideal."
        )


Insight = Union[BudgetWarning, SavingTip, TrendAnalysis, GoalSuggestion]


def dining_spend(transactions: Iterable[Transaction], keywords: Optional[Sequence[str]] = None) -> Decimal:
    """Sum expenses whose description mentions eating out."""
    if keywords is None:
        keywords = get_categorization_config().get('dining_keywords', ['restaurant'])
    lowered_keywords = [keyword.lower() for keyword in keywords]
    total = ZERO
    for transaction in transactions:
        if not transaction.is_expense:
            continue
        description = (transaction.description or '').lower()
        if any(keyword in description for keyword in lowered_keywords):
            total += transaction.amount
    return total


def _budget_warnings(budgets: Iterable[BudgetUsage]) -> List[BudgetWarning]:
    warnings = []
    for usage in budgets:
        fraction = usage.spent_fraction
        if fraction is None:
            logger.debug("Skipping budget %s without a positive amount", usage.budget.id)
            continue
        if fraction > BUDGET_WARNING_FRACTION:
            warnings.append(BudgetWarning(category_name=usage.category_name, spent_fraction=fraction))
    return warnings


def _trend(monthly_stats: MonthlyStats, previous_month_stats: Optional[MonthlyStats]) -> Optional[TrendAnalysis]:
    if previous_month_stats is None:
        return None
    previous = previous_month_stats.total_expenses
    if previous == 0:
        # no baseline to compare against
        return None
    change = (monthly_stats.total_expenses - previous) / previous * 100
    if abs(change) > TREND_THRESHOLD_PCT:
        return TrendAnalysis(change_pct=change)
    return None


def generate_insights(
    transactions: Sequence[Transaction],
    budgets: Sequence[BudgetUsage],
    monthly_stats: MonthlyStats,
    previous_month_stats: Optional[MonthlyStats] = None,
) -> List[Insight]:
    """Generate insights for the current month.

    Args:
        transactions: The month's transactions
        budgets: Budgets with derived spending
        monthly_stats: Totals for the month
        previous_month_stats: Totals for the month before, if known

    Returns:
        Insights in rule order; the emergency fund suggestion is always last
    """
    insights: List[Insight] = []
    insights.extend(_budget_warnings(budgets))

    dining_total = dining_spend(transactions)
    if dining_total > DINING_SPEND_THRESHOLD:
        insights.append(SavingTip(dining_total=dining_total))

    trend = _trend(monthly_stats, previous_month_stats)
    if trend is not None:
        insights.append(trend)

    insights.append(GoalSuggestion(target_amount=monthly_stats.total_expenses * EMERGENCY_FUND_MONTHS))

    logger.debug("Generated %d insights", len(insights))
    return insights


def insight_records(insights: Iterable[Insight], limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """Turn insights into ``{id, type, title, content, priority}`` records.

    Ids are ``"<type>-<position>"`` so the same inputs always give the same ids.
    """
    records = [
        insight.to_record(f"{insight.insight_type.value}-{position}")
        for position, insight in enumerate(insights, start=1)
    ]
    if limit is not None:
        records = records[:limit]
    return records
