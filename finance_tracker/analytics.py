"""Personal finance analytics over one snapshot of the store.

:class:`FinanceAnalytics` binds a transaction list, the category list and the
reference day once, joins them, and exposes every derived view the
dashboard needs.  Each method is a fresh computation; nothing is cached
between calls.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Tuple

from . import config
from .bucketing import as_day
from .filters import FilterCriteria, filter_transactions
from .joins import ResolvedTransaction, resolve_transactions
from .models import Category, Transaction, TransactionType, categories_of_type
from .ranking import CategoryTotal, category_share, top_categories
from .rollups import MonthlyRollup, YearSummary, since_year_start, year_to_date_summary, yearly_monthly_rollup
from .summary import DashboardStats, Summary, dashboard_stats, recent_transactions, summarize
from .trends import BalancePoint, balance_trend


class FinanceAnalytics:
    """Personal finance analytics and calculations."""

    def __init__(
        self,
        transactions: Iterable[Transaction],
        categories: Iterable[Category] = (),
        today: Any = None,
    ):
        """Initialize with transaction data; ``today`` defaults to the clock."""
        self.transactions: Tuple[Transaction, ...] = tuple(transactions)
        self.categories: Tuple[Category, ...] = tuple(categories)
        self.today: date = as_day(today) if today is not None else date.today()
        self.resolved: Tuple[ResolvedTransaction, ...] = tuple(
            resolve_transactions(self.transactions, self.categories)
        )

    @property
    def year(self) -> int:
        return self.today.year

    @property
    def income_categories(self) -> List[Category]:
        return categories_of_type(self.categories, TransactionType.INCOME)

    @property
    def expense_categories(self) -> List[Category]:
        return categories_of_type(self.categories, TransactionType.EXPENSE)

    def filtered(self, criteria: Optional[FilterCriteria] = None) -> List[ResolvedTransaction]:
        return filter_transactions(self.resolved, criteria)

    def summary(self, criteria: Optional[FilterCriteria] = None) -> Summary:
        """Income, expense and net of the (optionally filtered) list."""
        return summarize(self.filtered(criteria))

    def balance_trend(self, trailing_days: Optional[int] = None) -> List[BalancePoint]:
        days = config.TRAILING_DAYS if trailing_days is None else trailing_days
        return balance_trend(self.resolved, self.today, days)

    def monthly_rollup(self, year: Optional[int] = None) -> List[MonthlyRollup]:
        return yearly_monthly_rollup(self.resolved, year or self.year)

    def year_summary(self, year: Optional[int] = None) -> YearSummary:
        return year_to_date_summary(self.resolved, year or self.year)

    def top_categories(self, n: Optional[int] = None, year: Optional[int] = None) -> List[CategoryTotal]:
        """Largest expense categories of the year to date."""
        limit = config.TOP_CATEGORY_LIMIT if n is None else n
        return top_categories(since_year_start(self.resolved, year or self.year), limit)

    def category_breakdown(
        self, n: Optional[int] = None, year: Optional[int] = None
    ) -> List[Tuple[CategoryTotal, Decimal]]:
        """Top categories paired with their percentage of year-to-date expense."""
        ytd_expense = self.year_summary(year).ytd_expense
        return [(item, category_share(item.total, ytd_expense)) for item in self.top_categories(n, year)]

    def dashboard_stats(self) -> DashboardStats:
        return dashboard_stats(self.resolved, self.today)

    def recent(self, limit: Optional[int] = None) -> List[ResolvedTransaction]:
        return recent_transactions(self.resolved, config.RECENT_LIMIT if limit is None else limit)
