"""Predicate based subsetting of a transaction collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, TypeVar, Union

from .models import TransactionType

ALL = 'all'

T = TypeVar('T')


@dataclass(frozen=True)
class FilterCriteria:
    """Type, category and free-text restrictions, all optional.

    ``None`` or ``'all'`` disables the type and category restrictions; an
    empty ``search_text`` disables the text restriction.
    """

    transaction_type: Union[TransactionType, str, None] = None
    category_id: Optional[str] = None
    search_text: Optional[str] = None

    @classmethod
    def from_params(cls, type: Any = None, category: Any = None, search: Any = None) -> 'FilterCriteria':
        """Build criteria from loose UI values (select boxes, text inputs)."""
        return cls(
            transaction_type=type or None,
            category_id=category or None,
            search_text=search or None,
        )

    def _wanted_type(self) -> Optional[TransactionType]:
        if self.transaction_type is None or self.transaction_type == ALL:
            return None
        return TransactionType.parse(self.transaction_type)

    def matches(self, txn: Any) -> bool:
        wanted = self._wanted_type()
        if wanted is not None and txn.type is not wanted:
            return False
        if self.category_id is not None and self.category_id != ALL:
            if txn.category_id != self.category_id:
                return False
        if self.search_text:
            if txn.description is None:
                return False
            if self.search_text.casefold() not in txn.description.casefold():
                return False
        return True


def filter_transactions(transactions: Iterable[T], criteria: Optional[FilterCriteria] = None) -> List[T]:
    """Return the transactions matching every criterion, in input order."""
    items = list(transactions)
    if criteria is None:
        return items
    return [txn for txn in items if criteria.matches(txn)]
