"""Exceptions raised by the aggregation engine and the store."""

from __future__ import annotations


class FinanceTrackerError(Exception):
    """Base class for finance tracker errors."""


class InvalidRangeError(FinanceTrackerError, ValueError):
    """A bucketing range ends before it starts or has an unusable bound."""


class InvalidRecordError(FinanceTrackerError, ValueError):
    """A transaction or category record violates the data contract."""
