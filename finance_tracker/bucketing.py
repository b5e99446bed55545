"""Partition time into day or month buckets and assign transactions to them.

Bucketing only decides membership; summing amounts is left to the
calculators in :mod:`trends` and :mod:`rollups`.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Hashable, Iterable, List, Sequence, Tuple, TypeVar, Union

import pandas as pd

from .errors import InvalidRangeError
from .models import parse_day

T = TypeVar('T')


class Granularity(str, Enum):
    DAY = 'day'
    MONTH = 'month'


@dataclass(frozen=True)
class Bucket:
    """An inclusive span of calendar days."""

    granularity: Granularity
    start: date
    end: date

    @property
    def key(self) -> Hashable:
        return bucket_key(self.start, self.granularity)

    @property
    def label(self) -> str:
        if self.granularity is Granularity.DAY:
            return self.start.strftime('%b %d')
        return calendar.month_abbr[self.start.month]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def as_day(value: Any) -> date:
    """Normalize a range bound to a calendar day or raise ``InvalidRangeError``."""
    day = parse_day(value)
    if day is None:
        raise InvalidRangeError(f"Invalid range bound {value!r}")
    return day


def bucket_key(day: date, granularity: Granularity) -> Hashable:
    if granularity is Granularity.DAY:
        return day
    return (day.year, day.month)


def _checked_range(range_start: Any, range_end: Any) -> Tuple[date, date]:
    start = as_day(range_start)
    end = as_day(range_end)
    if end < start:
        raise InvalidRangeError(f"Range end {end} is before range start {start}")
    return start, end


def day_buckets(range_start: Any, range_end: Any) -> List[Bucket]:
    """One bucket per calendar day from ``range_start`` to ``range_end`` inclusive."""
    start, end = _checked_range(range_start, range_end)
    try:
        days = pd.date_range(start, end, freq='D')
    except (ValueError, OverflowError) as exc:
        raise InvalidRangeError(f"Cannot build day range {start}..{end}: {exc}") from exc
    return [Bucket(Granularity.DAY, ts.date(), ts.date()) for ts in days]


def month_buckets(year: int) -> List[Bucket]:
    """Twelve month buckets for ``year``, January to December."""
    if isinstance(year, bool) or not isinstance(year, int) or not 1 <= year <= 9999:
        raise InvalidRangeError(f"Invalid year {year!r}")
    buckets = []
    for month in range(1, 13):
        last_day = calendar.monthrange(year, month)[1]
        buckets.append(Bucket(Granularity.MONTH, date(year, month, 1), date(year, month, last_day)))
    return buckets


def bucketize(range_start: Any, range_end: Any, granularity: Union[Granularity, str]) -> List[Bucket]:
    """Ordered buckets covering a range.

    ``day`` yields one bucket per day of the inclusive range.  ``month``
    always yields the twelve months of ``range_start``'s year.
    """
    granularity = Granularity(granularity)
    if granularity is Granularity.DAY:
        return day_buckets(range_start, range_end)
    start, _ = _checked_range(range_start, range_end)
    return month_buckets(start.year)


def assign_to_buckets(buckets: Sequence[Bucket], transactions: Iterable[T]) -> List[Tuple[Bucket, List[T]]]:
    """Pair each bucket with the transactions dated inside it.

    Transactions outside every bucket are left out; input order is kept
    within a bucket.
    """
    if not buckets:
        return []
    granularities = {bucket.granularity for bucket in buckets}
    if len(granularities) != 1:
        raise ValueError("Buckets must share a single granularity")
    granularity = granularities.pop()

    members: Dict[Hashable, List[T]] = {bucket.key: [] for bucket in buckets}
    for txn in transactions:
        slot = members.get(bucket_key(parse_day(txn.date), granularity))
        if slot is not None:
            slot.append(txn)
    return [(bucket, members[bucket.key]) for bucket in buckets]
