"""Entity model for transactions and categories.

Amounts are held as :class:`decimal.Decimal` so that sums over hundreds of
entries keep sub-cent precision.  Direction is carried by
:class:`TransactionType` only; an amount is never negative.  The
``from_record`` constructors are the conversion boundary used by the store
(and by anything else that hands loosely typed rows to the engine).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from .config import DEFAULT_CATEGORY_ICON
from .errors import InvalidRecordError


class TransactionType(str, Enum):
    INCOME = 'income'
    EXPENSE = 'expense'

    @classmethod
    def parse(cls, value: Any) -> 'TransactionType':
        """Return the member for ``value`` (member or case-insensitive name)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidRecordError(f"Unknown transaction type {value!r}")


def to_decimal(value: Any) -> Decimal:
    """Convert a stored or user supplied amount to an exact decimal.

    Floats go through ``repr`` so ``0.1`` becomes ``Decimal('0.1')`` rather
    than its binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidRecordError(f"Invalid amount {value!r}")
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidRecordError(f"Invalid amount {value!r}") from None
    else:
        raise InvalidRecordError(f"Invalid amount {value!r}")
    if not result.is_finite():
        raise InvalidRecordError(f"Invalid amount {value!r}")
    return result


def parse_day(value: Any) -> Optional[date]:
    """Return the calendar day of ``value`` or ``None`` when it has none.

    Accepts dates, datetimes (time-of-day dropped), pandas timestamps and
    ISO-like strings.  Numbers are rejected rather than read as epochs.
    """
    if value is None or isinstance(value, (bool, int, float, Decimal)):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.date()


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class Transaction:
    """One income or expense entry."""

    id: str
    type: TransactionType
    amount: Decimal
    date: date
    category_id: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'type', TransactionType.parse(self.type))
        amount = to_decimal(self.amount)
        if amount < 0:
            raise InvalidRecordError(
                f"Transaction {self.id!r} has negative amount {amount}; "
                "direction belongs in the type"
            )
        object.__setattr__(self, 'amount', amount)
        day = parse_day(self.date)
        if day is None:
            raise InvalidRecordError(f"Transaction {self.id!r} has invalid date {self.date!r}")
        object.__setattr__(self, 'date', day)

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type is TransactionType.INCOME else -self.amount

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Transaction':
        """Build a transaction from a database row or similar mapping."""
        return cls(
            id=str(record['id']),
            type=record['type'],
            amount=record['amount'],
            date=record['date'],
            category_id=_blank_to_none(record.get('category_id')),
            description=_blank_to_none(record.get('description')),
        )


@dataclass(frozen=True)
class Category:
    """A user defined label for income or expense transactions."""

    id: str
    name: str
    type: TransactionType
    color: str
    icon: str = DEFAULT_CATEGORY_ICON

    def __post_init__(self) -> None:
        object.__setattr__(self, 'type', TransactionType.parse(self.type))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Category':
        return cls(
            id=str(record['id']),
            name=str(record['name']),
            type=record['type'],
            color=str(record['color']),
            icon=_blank_to_none(record.get('icon')) or DEFAULT_CATEGORY_ICON,
        )


def categories_of_type(categories: Iterable[Category], txn_type: Any) -> List[Category]:
    """Return the categories usable for ``txn_type`` in input order."""
    wanted = TransactionType.parse(txn_type)
    return [category for category in categories if category.type is wanted]
