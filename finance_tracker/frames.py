"""pandas views of calculator outputs.

Amount columns keep their ``Decimal`` values (object dtype); chart code
casts to float at the last moment.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

import pandas as pd

from .ranking import CategoryTotal
from .rollups import MonthlyRollup
from .trends import BalancePoint

TRANSACTION_COLUMNS = ['Date', 'Type', 'Category', 'Amount', 'Description']


def transactions_frame(transactions: Iterable[Any]) -> pd.DataFrame:
    """One row per transaction with display columns plus its ``id``."""
    rows = [
        {
            'id': txn.id,
            'Date': txn.date,
            'Type': txn.type.value,
            'Category': getattr(txn, 'category_name', None) or '',
            'Amount': txn.amount,
            'Description': txn.description or '',
        }
        for txn in transactions
    ]
    return pd.DataFrame(rows, columns=['id'] + TRANSACTION_COLUMNS)


def balance_trend_frame(points: Sequence[BalancePoint]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            'Date': [p.date for p in points],
            'Label': [p.date.strftime('%b %d') for p in points],
            'Balance': [p.balance for p in points],
        }
    )


def monthly_rollup_frame(rollups: Sequence[MonthlyRollup]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            'Month': [r.label for r in rollups],
            'Income': [r.income for r in rollups],
            'Expense': [r.expense for r in rollups],
            'Net': [r.net for r in rollups],
        }
    )


def category_totals_frame(
    totals: Sequence[CategoryTotal], shares: Optional[Sequence[Decimal]] = None
) -> pd.DataFrame:
    frame = pd.DataFrame(
        {
            'Category': [t.name for t in totals],
            'Color': [t.color for t in totals],
            'Total': [t.total for t in totals],
        }
    )
    if shares is not None:
        frame['Share'] = list(shares)
    return frame
