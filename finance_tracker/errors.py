"""Exception types raised by the analytics core.

Only input problems surface as exceptions.  Undefined ratios (a zero budget,
zero income, zero expenses in the previous month) are handled by the
individual calculations and never raise.
"""

from __future__ import annotations


class FinanceDataError(ValueError):
    """Base class for malformed finance records."""


class InvalidAmountError(FinanceDataError):
    """An amount could not be parsed as a finite decimal number."""

    def __init__(self, value: object, field: str = "amount"):
        self.value = value
        self.field = field
        super().__init__(f"Invalid {field}: {value!r}")


class InvalidPeriodError(FinanceDataError):
    """A calendar month outside 1-12 was requested."""

    def __init__(self, year: int, month: int):
        self.year = year
        self.month = month
        super().__init__(f"Month must be between 1 and 12, got {year}-{month}")


class InvalidRecordError(FinanceDataError):
    """A record is missing a required field or carries an unknown enum value."""
