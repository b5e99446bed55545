"""Attach category display data to transactions.

Every calculator that needs a category name or color works on
:class:`ResolvedTransaction` values produced here, so the join happens once
per data refresh.  A transaction whose ``category_id`` points at a category
that no longer exists resolves exactly like an uncategorized one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .logging_setup import get_logger
from .models import Category, Transaction, TransactionType

logger = get_logger(__name__)


@dataclass(frozen=True)
class CategoryView:
    id: str
    name: str
    color: str
    icon: str

    @classmethod
    def of(cls, category: Category) -> 'CategoryView':
        return cls(id=category.id, name=category.name, color=category.color, icon=category.icon)


@dataclass(frozen=True)
class ResolvedTransaction:
    """A transaction together with its resolved category (if any)."""

    transaction: Transaction
    category: Optional[CategoryView] = None

    @property
    def id(self) -> str:
        return self.transaction.id

    @property
    def type(self) -> TransactionType:
        return self.transaction.type

    @property
    def amount(self) -> Decimal:
        return self.transaction.amount

    @property
    def date(self) -> date:
        return self.transaction.date

    @property
    def description(self) -> Optional[str]:
        return self.transaction.description

    @property
    def signed_amount(self) -> Decimal:
        return self.transaction.signed_amount

    @property
    def category_id(self) -> Optional[str]:
        return self.category.id if self.category is not None else None

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category is not None else None


def resolve_transactions(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
) -> List[ResolvedTransaction]:
    """Join ``transactions`` with ``categories`` by id, preserving order."""
    lookup: Dict[str, CategoryView] = {c.id: CategoryView.of(c) for c in categories}
    resolved: List[ResolvedTransaction] = []
    dangling = 0
    for txn in transactions:
        view = None
        if txn.category_id is not None:
            view = lookup.get(txn.category_id)
            if view is None:
                dangling += 1
        resolved.append(ResolvedTransaction(transaction=txn, category=view))
    if dangling:
        logger.debug("%d transaction(s) reference missing categories; treated as uncategorized", dangling)
    return resolved
