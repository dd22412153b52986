from datetime import datetime
from decimal import Decimal

import pytest

from finance_tracker.lib.analytics import (
    BudgetWarning,
    GoalSuggestion,
    SavingTip,
    TrendAnalysis,
    generate_insights,
    insight_records,
)
from finance_tracker.lib.analytics.insights import _InsightBase, dining_spend
from finance_tracker.lib.budgets import BudgetUsage
from finance_tracker.models import Budget, Category, MonthlyStats, Transaction, TransactionType


def _stats(expenses, income=0):
    expenses, income = Decimal(str(expenses)), Decimal(str(income))
    return MonthlyStats(total_income=income, total_expenses=expenses, balance=income - expenses)


def _usage(spent, amount=100, name='Gıda & İçecek', budget_id='b1'):
    budget = Budget(
        id=budget_id,
        user_id='u1',
        amount=Decimal(str(amount)),
        start_date=datetime(2024, 3, 1),
        end_date=datetime(2024, 3, 31),
        category_id='food',
    )
    return BudgetUsage(budget=budget, spent=Decimal(str(spent)), category=Category(id='food', name=name))


def _txn(amount, description, type_=TransactionType.EXPENSE):
    return Transaction(
        id='t1',
        user_id='u1',
        amount=Decimal(str(amount)),
        type=type_,
        description=description,
        date=datetime(2024, 3, 10),
    )


def test_empty_month_only_suggests_emergency_fund():
    insights = generate_insights([], [], _stats(1000))
    assert len(insights) == 1
    suggestion = insights[0]
    assert isinstance(suggestion, GoalSuggestion)
    assert suggestion.target_amount == 3000
    assert suggestion.priority == 1
    assert '₺3.000,00' in suggestion.content


def test_budget_warning_priority_depends_on_usage():
    insights = generate_insights([], [_usage(85), _usage(95, budget_id='b2'), _usage(80, budget_id='b3')], _stats(0))
    warnings = [insight for insight in insights if isinstance(insight, BudgetWarning)]

    assert [warning.priority for warning in warnings] == [2, 3]
    assert warnings[0].used_pct == 85
    assert 'Gıda & İçecek' in warnings[0].content


def test_zero_amount_budget_never_warns():
    insights = generate_insights([], [_usage(50, amount=0)], _stats(0))
    assert not any(isinstance(insight, BudgetWarning) for insight in insights)


def test_saving_tip_for_heavy_dining():
    transactions = [
        _txn(400, 'Restaurant dinner'),
        _txn(200, 'Kebap restoran'),
        _txn(1000, 'Restaurant refund', type_=TransactionType.INCOME),
    ]
    assert dining_spend(transactions) == Decimal('600')

    tips = [insight for insight in generate_insights(transactions, [], _stats(600)) if isinstance(insight, SavingTip)]
    assert len(tips) == 1
    assert tips[0].monthly_saving == 240
    assert '₺240,00' in tips[0].content


def test_dining_threshold_is_strict():
    insights = generate_insights([_txn(500, 'restaurant')], [], _stats(500))
    assert not any(isinstance(insight, SavingTip) for insight in insights)


def test_trend_reports_large_changes():
    insights = generate_insights([], [], _stats(1200), previous_month_stats=_stats(1000))
    trends = [insight for insight in insights if isinstance(insight, TrendAnalysis)]
    assert len(trends) == 1
    assert trends[0].increased
    assert trends[0].magnitude == 20
    assert 'increased by 20%' in trends[0].content


def test_trend_reports_decrease():
    trend = next(
        insight for insight in generate_insights([], [], _stats(700), _stats(1000))
        if isinstance(insight, TrendAnalysis)
    )
    assert not trend.increased
    assert trend.magnitude == 30


def test_trend_skipped_for_small_changes_and_missing_baseline():
    for previous in (_stats(1050), _stats(0), None):
        insights = generate_insights([], [], _stats(1000), previous_month_stats=previous)
        assert not any(isinstance(insight, TrendAnalysis) for insight in insights)


def test_insights_follow_rule_order():
    insights = generate_insights(
        [_txn(800, 'restaurant')],
        [_usage(99)],
        _stats(2000),
        previous_month_stats=_stats(1000),
    )
    assert [type(insight) for insight in insights] == [BudgetWarning, SavingTip, TrendAnalysis, GoalSuggestion]


def test_insight_records_have_stable_ids():
    insights = generate_insights([], [_usage(95)], _stats(100))
    records = insight_records(insights)

    assert [record['id'] for record in records] == ['budget_warning-1', 'goal_suggestion-2']
    assert records[0]['title'] == 'Budget Warning'
    assert records[0]['priority'] == 3
    assert insight_records(insights, limit=1) == records[:1]


def test_insight_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        _InsightBase()
