"""Calculation library for the analytics core.

Structure:
    - common/: Amount parsing, rounding, date and currency formatting
    - analytics/: Monthly aggregation, health score and insights
    - budgets/: Budget progress and spending
    - goals/: Savings goal progress
    - config/: JSON configuration and loaders
"""

__all__ = ['common', 'analytics', 'budgets', 'goals', 'config']
