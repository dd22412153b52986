"""Formatting utilities for currency and date display."""

from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from ...config import CURRENCY_SYMBOL
from ...errors import InvalidAmountError
from .amounts import parse_amount

CENT = Decimal("0.01")


def format_currency(amount: Union[Decimal, float, int, str], symbol: Optional[str] = None) -> str:
    """Format an amount using Turkish grouping (``.`` thousands, ``,`` decimals).

    Args:
        amount: The amount to format
        symbol: Currency symbol; defaults to the configured symbol

    Returns:
        Formatted currency string

    Example:
        >>> format_currency(1234.56)
        '₺1.234,56'
        >>> format_currency(-50)
        '-₺50,00'
    """
    value = parse_amount(amount)
    symbol = CURRENCY_SYMBOL if symbol is None else symbol
    sign = "-" if value < 0 else ""
    cents = abs(value).quantize(CENT, rounding=ROUND_HALF_UP)
    grouped = f"{cents:,.2f}"
    # swap the en-US separators for tr-TR ones
    localized = grouped.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    return f"{sign}{symbol}{localized}"


def parse_currency(text: str, symbol: Optional[str] = None) -> Decimal:
    """Parse a string produced by :func:`format_currency` back into a ``Decimal``.

    Example:
        >>> parse_currency('₺1.234,56')
        Decimal('1234.56')
    """
    symbol = CURRENCY_SYMBOL if symbol is None else symbol
    cleaned = text.strip()
    negative = cleaned.startswith("-")
    if negative:
        cleaned = cleaned[1:]
    if symbol and cleaned.startswith(symbol):
        cleaned = cleaned[len(symbol):]
    cleaned = cleaned.strip().replace(".", "").replace(",", ".")
    if not cleaned:
        raise InvalidAmountError(text, "currency")
    value = parse_amount(cleaned, field="currency")
    return -value if negative else value


def format_percentage(value: Union[Decimal, float, int], places: int = 0) -> str:
    """Format a percentage with a leading ``%`` the way the dashboard shows it.

    Example:
        >>> format_percentage(73.4)
        '%73'
    """
    return f"%{float(value):.{places}f}"


def format_relative_date(when: Union[date, datetime], now: datetime) -> str:
    """Describe how long ago ``when`` happened relative to ``now``."""
    if not isinstance(when, datetime):
        when = datetime(when.year, when.month, when.day)
    days = (now - when).days

    if days == 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if 1 < days < 7:
        return f"{days} days ago"
    if 7 <= days < 30:
        weeks = days // 7
        return "1 week ago" if weeks == 1 else f"{weeks} weeks ago"

    label = f"{when.day} {calendar.month_name[when.month]}"
    if when.year != now.year:
        label = f"{label} {when.year}"
    return label
