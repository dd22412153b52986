"""Exact amount parsing and rounding helpers.

Money is stored as decimal strings.  These helpers turn stored values into
:class:`decimal.Decimal` at calculation boundaries and apply the half-up
rounding used for every displayed figure.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ...errors import InvalidAmountError

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")


def parse_amount(value: object, field: str = "amount") -> Decimal:
    """Parse a stored amount into a ``Decimal``.

    Missing values (``None`` or a blank string) count as zero.  Anything else
    that is not a finite number raises :class:`InvalidAmountError`.

    Example:
        >>> parse_amount("245.80")
        Decimal('245.80')
        >>> parse_amount(None)
        Decimal('0')
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        raise InvalidAmountError(value, field)
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr so 0.1 stays 0.1
        parsed = _decimal_from_text(str(value), value, field)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return ZERO
        parsed = _decimal_from_text(text, value, field)
    else:
        raise InvalidAmountError(value, field)

    if not parsed.is_finite():
        raise InvalidAmountError(value, field)
    return parsed


def _decimal_from_text(text: str, original: object, field: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise InvalidAmountError(original, field) from None


def to_float(value: Number) -> float:
    """Convert a parsed amount into a plain float for output."""
    return float(parse_amount(value))


def round_half_up(value: Number, places: int = 0) -> Union[int, float]:
    """Round half away from zero, returning an ``int`` when ``places`` is 0.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``);
    displayed percentages and amounts round 2.5 up to 3.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = parse_amount(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)
