"""Plotly visualisation helpers for the finance tracker.

Each function accepts the objects returned by
:class:`finance_tracker.personal_finance_analytics.PersonalFinanceAnalytics`
and produces an interactive Plotly figure: the spending breakdown pie,
the monthly income/expense trend, the health score gauge and the budget
progress bars.

All functions return a ``plotly.graph_objects.Figure``.  Empty input
produces a blank figure titled "No data to display" so callers never need
to special-case missing data.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .lib.analytics.health import score_label
from .lib.budgets import BudgetUsage
from .models import FinancialHealthScore

STATUS_COLORS = {
    'safe': '#4CAF50',
    'warning': '#FF9800',
    'danger': '#F44336',
}

SCORE_BAND_COLORS = [
    (0, 30, '#F44336'),
    (30, 50, '#FF5722'),
    (50, 70, '#FF9800'),
    (70, 90, '#8BC34A'),
    (90, 100, '#4CAF50'),
]


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_category_pie_chart(breakdown: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate a pie chart of spending per category.

    Parameters
    ----------
    breakdown : pandas.DataFrame
        Output of ``category_breakdown`` with Category, Value and Color columns.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart coloured with each category's colour.
    """
    if breakdown.empty:
        return _empty_figure()
    color_map = dict(zip(breakdown["Category"], breakdown["Color"]))
    fig = px.pie(
        breakdown,
        names="Category",
        values="Value",
        color="Category",
        color_discrete_map=color_map,
    )
    fig.update_traces(textinfo="percent", textposition="inside", insidetextorientation="radial")
    fig.update_layout(title=title or "Spending breakdown", uniformtext_minsize=10, uniformtext_mode="hide")
    return fig


def create_monthly_trend_chart(trend: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Create a line chart of monthly income against expenses.

    Parameters
    ----------
    trend : pandas.DataFrame
        Output of ``monthly_trend`` with Month Label, Income and Expenses columns.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Two-line chart, or a blank figure when every month is zero.
    """
    if trend.empty or not ((trend["Income"] > 0) | (trend["Expenses"] > 0)).any():
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=trend["Month Label"], y=trend["Income"], mode="lines+markers",
        name="Income", line=dict(color="#4CAF50"),
    ))
    fig.add_trace(go.Scatter(
        x=trend["Month Label"], y=trend["Expenses"], mode="lines+markers",
        name="Expenses", line=dict(color="#F44336"),
    ))
    fig.update_layout(
        title=title or "Monthly trend",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def create_health_gauge(health: FinancialHealthScore, title: str | None = None) -> go.Figure:
    """Render the financial health score as a gauge.

    Parameters
    ----------
    health : FinancialHealthScore
        Score returned by ``score_health``.
    title : str, optional
        Chart title; defaults to the score's band label.

    Returns
    -------
    plotly.graph_objects.Figure
        Gauge indicator with the score bands shaded.
    """
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=health.score,
        gauge={
            "axis": {"range": [0, 100]},
            "steps": [{"range": [low, high], "color": color} for low, high, color in SCORE_BAND_COLORS],
            "bar": {"color": "#212121"},
        },
    ))
    fig.update_layout(title=title or f"Financial health: {score_label(health.score)}")
    return fig


def create_budget_progress_chart(usages: Sequence[BudgetUsage], title: str | None = None) -> go.Figure:
    """Horizontal bars showing how much of each budget is used.

    Parameters
    ----------
    usages : sequence of BudgetUsage
        Budgets with their derived spending.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bars coloured by budget status, capped at 100%.
    """
    if not usages:
        return _empty_figure()
    rows = []
    for usage in usages:
        progress = usage.progress
        rows.append({
            "Category": usage.category_name,
            "Percentage": progress.percentage,
            "Status": progress.status,
        })
    df = pd.DataFrame(rows)
    fig = px.bar(
        df,
        x="Percentage",
        y="Category",
        orientation="h",
        color="Status",
        color_discrete_map=STATUS_COLORS,
        range_x=[0, 100],
    )
    fig.update_layout(
        title=title or "Budget usage",
        xaxis_title="Used (%)",
        yaxis_title="Category",
    )
    return fig
