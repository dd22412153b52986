"""Savings goal calculations."""

from .progress import (
    GoalProgress,
    days_remaining_label,
    evaluate_goal,
    evaluate_goal_record,
    goal_status_label,
    overall_goal_progress,
)

__all__ = [
    'GoalProgress',
    'days_remaining_label',
    'evaluate_goal',
    'evaluate_goal_record',
    'goal_status_label',
    'overall_goal_progress',
]
