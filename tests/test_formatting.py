from datetime import datetime
from decimal import Decimal

import pytest

from finance_tracker.errors import InvalidAmountError
from finance_tracker.lib.common import (
    format_currency,
    format_percentage,
    format_relative_date,
    parse_amount,
    parse_currency,
    round_half_up,
)

NOW = datetime(2024, 10, 19, 12, 0)


def test_currency_uses_turkish_separators():
    assert format_currency(1234.56) == '₺1.234,56'
    assert format_currency('1234567.891') == '₺1.234.567,89'
    assert format_currency(0) == '₺0,00'
    assert format_currency(-50) == '-₺50,00'
    assert format_currency(5, symbol='$') == '$5,00'


def test_currency_rounds_half_cents_up():
    assert format_currency('0.125') == '₺0,13'


@pytest.mark.parametrize('value', ['0', '0.01', '0.5', '999.99', '1000', '1234.56', '9999999.99', '10000000'])
def test_currency_round_trip(value):
    assert parse_currency(format_currency(value)) == Decimal(value)


def test_parse_currency_handles_negative_values():
    assert parse_currency('-₺1.250,50') == Decimal('-1250.50')


def test_parse_currency_rejects_blank_text():
    with pytest.raises(InvalidAmountError):
        parse_currency('₺')


def test_percentage_has_leading_sign():
    assert format_percentage(73.4) == '%73'
    assert format_percentage(12.345, places=1) == '%12.3'


def test_relative_dates():
    assert format_relative_date(datetime(2024, 10, 19, 8, 0), NOW) == 'Today'
    assert format_relative_date(datetime(2024, 10, 18, 8, 0), NOW) == 'Yesterday'
    assert format_relative_date(datetime(2024, 10, 16, 8, 0), NOW) == '3 days ago'
    assert format_relative_date(datetime(2024, 10, 12, 8, 0), NOW) == '1 week ago'
    assert format_relative_date(datetime(2024, 10, 4, 8, 0), NOW) == '2 weeks ago'
    assert format_relative_date(datetime(2024, 9, 9, 8, 0), NOW) == '9 September'
    assert format_relative_date(datetime(2023, 5, 1).date(), NOW) == '1 May 2023'


def test_parse_amount_treats_missing_as_zero():
    assert parse_amount(None) == 0
    assert parse_amount('   ') == 0
    assert parse_amount('245.80') == Decimal('245.80')
    assert parse_amount(0.1) == Decimal('0.1')


@pytest.mark.parametrize('value', ['abc', 'NaN', 'Infinity', True, [1]])
def test_parse_amount_rejects_malformed_values(value):
    with pytest.raises(InvalidAmountError):
        parse_amount(value)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(Decimal('84.5')) == 85
    assert round_half_up('1.005', 2) == 1.01
    assert isinstance(round_half_up(2.4), int)
