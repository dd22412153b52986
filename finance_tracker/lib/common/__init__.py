"""Common utilities shared by all calculations.

This module provides amount parsing, rounding, date normalisation and
display formatting.
"""

from .amounts import parse_amount, round_half_up, to_float
from .dates import end_of_day, local_naive
from .formatting import format_currency, format_percentage, format_relative_date, parse_currency

__all__ = [
    'parse_amount',
    'round_half_up',
    'to_float',
    'end_of_day',
    'local_naive',
    'format_currency',
    'format_percentage',
    'format_relative_date',
    'parse_currency',
]
