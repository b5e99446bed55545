from decimal import Decimal

from finance_tracker.formatting import escape_dollar_for_markdown, format_currency, format_percent


def test_format_currency_default_places():
    assert format_currency(Decimal('1234.5'), 'USD') == '$1,234.50'
    assert format_currency(Decimal('-40'), 'USD') == '-$40.00'


def test_format_currency_rounds_half_up():
    assert format_currency(Decimal('0.105'), 'USD') == '$0.11'
    assert format_currency(Decimal('2.5'), 'EUR', whole=True) == '€3'


def test_format_currency_unknown_code():
    assert format_currency(5, 'chf') == 'CHF 5.00'


def test_format_percent():
    assert format_percent(Decimal('12.345')) == '12.3%'
    assert format_percent(Decimal('40'), 0) == '40%'


def test_escape_dollar_for_markdown():
    assert escape_dollar_for_markdown('$5 and $6') == '\\$5 and \\$6'
