"""Totals over a transaction collection.

``summarize`` backs the transaction list header and ``dashboard_stats`` the
three cards on the dashboard (all-time balance, this month's income and
expense).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Tuple, TypeVar

from .bucketing import as_day
from .rollups import totals_by_type

T = TypeVar('T')


@dataclass(frozen=True)
class Summary:
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal

    @property
    def net(self) -> Decimal:
        return self.balance


@dataclass(frozen=True)
class DashboardStats:
    balance: Decimal
    month_income: Decimal
    month_expense: Decimal


def summarize(transactions: Iterable[Any]) -> Summary:
    income, expense = totals_by_type(transactions)
    return Summary(total_income=income, total_expense=expense, balance=income - expense)


def summarize_for_month(transactions: Iterable[Any], month_start: Any, month_end: Any) -> Summary:
    """Summarize only transactions dated in ``[month_start, month_end]``."""
    start, end = as_day(month_start), as_day(month_end)
    return summarize(t for t in transactions if start <= t.date <= end)


def month_bounds(day: Any) -> Tuple[date, date]:
    """First and last calendar day of the month containing ``day``."""
    day = as_day(day)
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def dashboard_stats(transactions: Iterable[Any], today: Any) -> DashboardStats:
    items = list(transactions)
    overall = summarize(items)
    this_month = summarize_for_month(items, *month_bounds(today))
    return DashboardStats(
        balance=overall.balance,
        month_income=this_month.total_income,
        month_expense=this_month.total_expense,
    )


def recent_transactions(transactions: Iterable[T], limit: int = 5) -> List[T]:
    """Newest ``limit`` transactions by date; same-day entries keep input order."""
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    return sorted(transactions, key=lambda t: t.date, reverse=True)[:limit]
