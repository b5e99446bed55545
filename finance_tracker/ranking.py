"""Rank expense categories by total spend."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from .models import TransactionType

ZERO = Decimal('0')
HUNDRED = Decimal('100')


@dataclass(frozen=True)
class CategoryTotal:
    category_id: str
    name: str
    color: str
    total: Decimal


def category_totals(transactions: Iterable[Any]) -> List[CategoryTotal]:
    """Expense totals per resolved category, in first-encounter order.

    Expects joined transactions (see :func:`joins.resolve_transactions`);
    uncategorized expenses and income are skipped.
    """
    seeds: Dict[str, Any] = {}
    totals: Dict[str, Decimal] = {}
    for txn in transactions:
        category = txn.category
        if txn.type is not TransactionType.EXPENSE or category is None:
            continue
        if category.id not in totals:
            seeds[category.id] = category
            totals[category.id] = ZERO
        totals[category.id] += txn.amount
    return [
        CategoryTotal(category_id=cid, name=seeds[cid].name, color=seeds[cid].color, total=total)
        for cid, total in totals.items()
    ]


def top_categories(transactions: Iterable[Any], n: int = 6) -> List[CategoryTotal]:
    """The ``n`` largest expense categories, largest first.

    Equal totals keep first-encounter order.  An empty list means there is
    no categorized spending to show.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    ranked = sorted(category_totals(transactions), key=lambda item: item.total, reverse=True)
    return ranked[:n]


def category_share(total: Decimal, total_expense: Optional[Decimal]) -> Decimal:
    """``total`` as a percentage of ``total_expense`` (zero when there is none)."""
    if not total_expense:
        return ZERO
    return total / total_expense * HUNDRED
