"""Formatting utilities for currency and percentage display."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from . import config

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'INR': '₹',
    'CAD': 'CA$',
    'AUD': 'A$',
}

Number = Union[Decimal, float, int]


def format_currency(amount: Number, currency: Optional[str] = None, whole: bool = False) -> str:
    """Format a currency amount for display.

    Args:
        amount: The amount to format
        currency: ISO currency code, defaults to the configured currency
        whole: Round to whole units (chart axes and analytics cards)

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "-$40.00")

    Example:
        >>> format_currency(Decimal('1234.5'))
        '$1,234.50'
        >>> format_currency(Decimal('-40'), 'EUR', whole=True)
        '-€40'
    """
    code = (currency or config.DEFAULT_CURRENCY).upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    places = Decimal('1') if whole else Decimal('0.01')
    value = value.quantize(places, rounding=ROUND_HALF_UP)
    sign = '-' if value < 0 else ''
    digits = f"{abs(value):,.0f}" if whole else f"{abs(value):,.2f}"
    return f"{sign}{symbol}{digits}"


def format_percent(value: Number, places: int = 1) -> str:
    """Format a percentage value (``12.345`` -> ``'12.3%'``)."""
    return f"{float(value):.{places}f}%"


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown does not read them as LaTeX."""
    return text.replace("$", "\\$")
