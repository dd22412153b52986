"""Date normalisation helpers shared by the calendar calculations."""

from __future__ import annotations

from datetime import date, datetime


def local_naive(moment: date) -> datetime:
    """Convert a date or timestamp to naive local time for calendar comparisons.

    Plain dates become midnight; timezone-aware timestamps are converted to
    the local zone and stripped of their offset.
    """
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            return moment.astimezone().replace(tzinfo=None)
        return moment
    return datetime(moment.year, moment.month, moment.day)


def end_of_day(moment: datetime) -> datetime:
    """Return the last instant of the day ``moment`` falls on."""
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)
