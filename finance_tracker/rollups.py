"""Month-by-month income/expense rollups and year-to-date statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Tuple, TypeVar

from .bucketing import month_buckets
from .models import TransactionType

ZERO = Decimal('0')
HUNDRED = Decimal('100')

T = TypeVar('T')


@dataclass(frozen=True)
class MonthlyRollup:
    month: int
    label: str
    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expense

    @property
    def has_activity(self) -> bool:
        return self.income > 0 or self.expense > 0


@dataclass(frozen=True)
class YearSummary:
    year: int
    months: List[MonthlyRollup]
    ytd_income: Decimal
    ytd_expense: Decimal
    non_zero_months: int
    avg_monthly_income: Decimal
    avg_monthly_expense: Decimal
    savings_rate: Decimal


def since_year_start(transactions: Iterable[T], year: int) -> List[T]:
    """Transactions dated on or after 1 January of ``year``, in input order."""
    start = date(year, 1, 1)
    return [t for t in transactions if t.date >= start]


def totals_by_type(transactions: Iterable[Any]) -> Tuple[Decimal, Decimal]:
    """Return ``(income, expense)`` sums."""
    income = expense = ZERO
    for txn in transactions:
        if txn.type is TransactionType.INCOME:
            income += txn.amount
        else:
            expense += txn.amount
    return income, expense


def savings_rate(income: Decimal, expense: Decimal) -> Decimal:
    """Percentage of income not spent; zero when there is no income."""
    if income <= 0:
        return ZERO
    return (income - expense) / income * HUNDRED


def yearly_monthly_rollup(transactions: Iterable[Any], year: int) -> List[MonthlyRollup]:
    """Twelve entries of income and expense sums, January to December."""
    buckets = month_buckets(year)
    members: List[List[Any]] = [[] for _ in buckets]
    # later-year entries land in their calendar month
    for txn in since_year_start(transactions, year):
        members[txn.date.month - 1].append(txn)
    rollups = []
    for bucket, items in zip(buckets, members):
        income, expense = totals_by_type(items)
        rollups.append(MonthlyRollup(month=bucket.start.month, label=bucket.label, income=income, expense=expense))
    return rollups


def year_to_date_summary(transactions: Iterable[Any], year: int) -> YearSummary:
    ytd = since_year_start(transactions, year)
    months = yearly_monthly_rollup(ytd, year)
    ytd_income, ytd_expense = totals_by_type(ytd)
    # floored at one month
    non_zero_months = sum(1 for m in months if m.has_activity) or 1
    return YearSummary(
        year=year,
        months=months,
        ytd_income=ytd_income,
        ytd_expense=ytd_expense,
        non_zero_months=non_zero_months,
        avg_monthly_income=ytd_income / non_zero_months,
        avg_monthly_expense=ytd_expense / non_zero_months,
        savings_rate=savings_rate(ytd_income, ytd_expense),
    )
