from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.bucketing import (
    Bucket,
    Granularity,
    assign_to_buckets,
    bucketize,
    day_buckets,
    month_buckets,
)
from finance_tracker.errors import InvalidRangeError
from finance_tracker.models import Transaction


def _txn(txn_id, day):
    return Transaction(id=txn_id, type='expense', amount=Decimal('1'), date=day)


def test_day_buckets_are_inclusive_and_consecutive():
    buckets = day_buckets(date(2024, 2, 27), date(2024, 3, 1))
    assert [b.start for b in buckets] == [
        date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)
    ]
    assert all(b.start == b.end for b in buckets)
    assert buckets[0].label == 'Feb 27'


def test_single_day_range():
    assert len(bucketize('2024-06-01', '2024-06-01', 'day')) == 1


def test_month_granularity_covers_start_year():
    buckets = bucketize(date(2023, 5, 10), date(2023, 5, 20), Granularity.MONTH)
    assert len(buckets) == 12
    assert buckets[0].start == date(2023, 1, 1)
    assert buckets[1].end == date(2023, 2, 28)
    assert buckets[-1].end == date(2023, 12, 31)
    assert [b.label for b in buckets][:3] == ['Jan', 'Feb', 'Mar']


def test_inverted_range_raises():
    with pytest.raises(InvalidRangeError):
        bucketize(date(2024, 1, 2), date(2024, 1, 1), 'day')


def test_invalid_bound_raises():
    with pytest.raises(InvalidRangeError):
        day_buckets('yesterday-ish', date(2024, 1, 1))


def test_invalid_year_raises():
    with pytest.raises(InvalidRangeError):
        month_buckets(0)


def test_assign_to_day_buckets_drops_outside_dates():
    buckets = day_buckets(date(2024, 1, 1), date(2024, 1, 3))
    txns = [_txn('a', date(2024, 1, 2)), _txn('b', date(2023, 12, 31)), _txn('c', date(2024, 1, 2))]
    assigned = assign_to_buckets(buckets, txns)
    assert [len(members) for _, members in assigned] == [0, 2, 0]
    assert [t.id for t in assigned[1][1]] == ['a', 'c']


def test_assign_to_month_buckets_partitions_year():
    txns = [_txn(str(m), date(2024, m, 15)) for m in range(1, 13)] + [_txn('next', date(2025, 1, 1))]
    assigned = assign_to_buckets(month_buckets(2024), txns)
    assert [len(members) for _, members in assigned] == [1] * 12


def test_mixed_granularity_rejected():
    buckets = [
        Bucket(Granularity.DAY, date(2024, 1, 1), date(2024, 1, 1)),
        Bucket(Granularity.MONTH, date(2024, 1, 1), date(2024, 1, 31)),
    ]
    with pytest.raises(ValueError):
        assign_to_buckets(buckets, [])
