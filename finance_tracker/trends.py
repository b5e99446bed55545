"""Cumulative balance per day over a trailing window."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from operator import itemgetter
from typing import Any, Iterable, List

from .bucketing import as_day, day_buckets
from .errors import InvalidRangeError

ZERO = Decimal('0')


@dataclass(frozen=True)
class BalancePoint:
    date: date
    balance: Decimal


def balance_as_of(transactions: Iterable[Any], day: Any) -> Decimal:
    """Income minus expense over every transaction dated on or before ``day``."""
    cutoff = as_day(day)
    return sum((t.signed_amount for t in transactions if t.date <= cutoff), ZERO)


def balance_trend(transactions: Iterable[Any], today: Any, trailing_days: int = 30) -> List[BalancePoint]:
    """Running balance for each of the ``trailing_days`` days ending at ``today``.

    Each point is the cumulative balance as of that day, so transactions
    dated before the window still count.  Days with no history report zero.
    """
    if trailing_days < 1:
        raise InvalidRangeError(f"trailing_days must be at least 1, got {trailing_days}")
    end = as_day(today)
    try:
        start = end - timedelta(days=trailing_days - 1)
    except OverflowError as exc:
        raise InvalidRangeError(f"Cannot go back {trailing_days} days from {end}") from exc
    buckets = day_buckets(start, end)

    ordered = sorted(((t.date, t.signed_amount) for t in transactions), key=itemgetter(0))
    points: List[BalancePoint] = []
    balance = ZERO
    idx = 0
    for bucket in buckets:
        while idx < len(ordered) and ordered[idx][0] <= bucket.end:
            balance += ordered[idx][1]
            idx += 1
        points.append(BalancePoint(date=bucket.start, balance=balance))
    return points
