"""CSV export of a (filtered) transaction list."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Union

from .bucketing import as_day
from .frames import TRANSACTION_COLUMNS, transactions_frame
from .logging_setup import get_logger

logger = get_logger(__name__)


def transactions_to_csv(transactions: Iterable[Any]) -> str:
    """Render ``Date,Type,Category,Amount,Description`` rows.

    Dates are ISO, amounts keep their exact decimal text, missing category
    or description become empty fields.  Rows are newline separated with no
    trailing newline.
    """
    frame = transactions_frame(transactions)[TRANSACTION_COLUMNS]
    text = frame.to_csv(index=False, lineterminator='\n')
    return text[:-1] if text.endswith('\n') else text


def export_filename(today: Any) -> str:
    return f"transactions-{as_day(today).isoformat()}.csv"


def write_csv(transactions: Iterable[Any], path: Union[str, Path]) -> Path:
    items = list(transactions)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(transactions_to_csv(items), encoding='utf-8')
    logger.info("Exported %d transaction(s) to %s", len(items), target)
    return target
