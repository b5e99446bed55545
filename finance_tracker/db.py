"""SQLite storage for transactions and categories.

Amounts are stored as decimal text and read back through
:meth:`Transaction.from_record`, so nothing passes through a float on the
way in or out.  Deleting a category leaves its transactions in place with
``category_id`` set to NULL; the engine reads those as uncategorized.
"""

from __future__ import annotations

import sqlite3
import uuid
from contextlib import contextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union

import pandas as pd

from . import config
from .bucketing import as_day
from .errors import InvalidRecordError
from .logging_setup import get_logger
from .models import Category, Transaction, TransactionType, parse_day, to_decimal

logger = get_logger(__name__)

PathLike = Union[str, Path, None]

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS categories (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
    color TEXT NOT NULL,
    icon TEXT NOT NULL DEFAULT 'circle',
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS transactions (
    id TEXT PRIMARY KEY,
    category_id TEXT REFERENCES categories(id) ON DELETE SET NULL,
    type TEXT NOT NULL CHECK (type IN ('income', 'expense')),
    amount TEXT NOT NULL,
    description TEXT,
    date TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_txn_date ON transactions (date);
CREATE INDEX IF NOT EXISTS ix_txn_category ON transactions (category_id);
"""

TRANSACTION_SELECT = (
    "SELECT id, category_id, type, amount, description, date FROM transactions"
)


def _resolve_path(db_path: PathLike) -> Path:
    if db_path is not None:
        path = Path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
    config.ensure_data_directories()
    return config.DB_PATH


@contextmanager
def connect(db_path: PathLike = None) -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(str(_resolve_path(db_path)))
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        yield conn
    finally:
        conn.close()


def init_db(db_path: PathLike = None) -> None:
    with connect(db_path) as conn:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    logger.info("Database schema ready at %s", db_path or config.DB_PATH)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


def _sanitize_db_value(value: Any) -> Optional[str]:
    """Convert empty strings to NULL, the way the entry forms submit them."""
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def _category_type(conn: sqlite3.Connection, category_id: str) -> TransactionType:
    row = conn.execute("SELECT type FROM categories WHERE id = ?", (category_id,)).fetchone()
    if row is None:
        raise InvalidRecordError(f"Unknown category {category_id!r}")
    return TransactionType.parse(row[0])


def _check_category(conn: sqlite3.Connection, txn: Transaction) -> None:
    if txn.category_id is None:
        return
    category_type = _category_type(conn, txn.category_id)
    if category_type is not txn.type:
        raise InvalidRecordError(
            f"Category {txn.category_id!r} is for {category_type.value} transactions, "
            f"not {txn.type.value}"
        )


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def add_category(
    name: str,
    txn_type: Union[TransactionType, str],
    color: str,
    icon: Optional[str] = None,
    db_path: PathLike = None,
) -> Category:
    clean_name = _sanitize_db_value(name)
    if clean_name is None:
        raise InvalidRecordError("Category name cannot be empty")
    category = Category(
        id=_new_id(),
        name=clean_name,
        type=txn_type,
        color=color,
        icon=_sanitize_db_value(icon) or config.DEFAULT_CATEGORY_ICON,
    )
    with connect(db_path) as conn:
        conn.execute(
            "INSERT INTO categories (id, name, type, color, icon, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (category.id, category.name, category.type.value, category.color, category.icon, _now()),
        )
        conn.commit()
    logger.info("Added %s category %r", category.type.value, category.name)
    return category


def update_category(
    category_id: str,
    name: Optional[str] = None,
    txn_type: Union[TransactionType, str, None] = None,
    color: Optional[str] = None,
    icon: Optional[str] = None,
    db_path: PathLike = None,
) -> bool:
    """Update the given fields of a category.

    Returns True if a row was changed, False otherwise.
    """
    updates = []
    params: List[Any] = []

    if name is not None:
        clean_name = _sanitize_db_value(name)
        if clean_name is None:
            raise InvalidRecordError("Category name cannot be empty")
        updates.append("name = ?")
        params.append(clean_name)
    if txn_type is not None:
        updates.append("type = ?")
        params.append(TransactionType.parse(txn_type).value)
    if color is not None:
        updates.append("color = ?")
        params.append(color)
    if icon is not None:
        updates.append("icon = ?")
        params.append(_sanitize_db_value(icon) or config.DEFAULT_CATEGORY_ICON)

    if not updates:
        return False

    params.append(category_id)
    with connect(db_path) as conn:
        cursor = conn.execute(f"UPDATE categories SET {', '.join(updates)} WHERE id = ?", params)
        conn.commit()
        return cursor.rowcount > 0


def delete_category(category_id: str, db_path: PathLike = None) -> bool:
    """Delete a category; its transactions become uncategorized."""
    with connect(db_path) as conn:
        cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
        conn.commit()
        deleted = cursor.rowcount > 0
    if deleted:
        logger.info("Deleted category %s", category_id)
    return deleted


def fetch_categories(db_path: PathLike = None) -> List[Category]:
    sql = "SELECT id, name, type, color, icon FROM categories ORDER BY name ASC, id ASC"
    with connect(db_path) as conn:
        df = pd.read_sql_query(sql, conn)
    return [Category.from_record(row) for row in df.to_dict('records')]


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def add_transaction(
    txn_type: Union[TransactionType, str],
    amount: Any,
    category_id: Optional[str] = None,
    description: Optional[str] = None,
    txn_date: Any = None,
    db_path: PathLike = None,
) -> Transaction:
    """Insert a transaction dated ``txn_date`` (today when omitted)."""
    day = date.today() if txn_date is None else parse_day(txn_date)
    if day is None:
        raise InvalidRecordError(f"Invalid transaction date {txn_date!r}")
    txn = Transaction(
        id=_new_id(),
        type=txn_type,
        amount=to_decimal(amount),
        date=day,
        category_id=_sanitize_db_value(category_id),
        description=_sanitize_db_value(description),
    )
    stamp = _now()
    with connect(db_path) as conn:
        _check_category(conn, txn)
        conn.execute(
            "INSERT INTO transactions (id, category_id, type, amount, description, date, created_at, updated_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (txn.id, txn.category_id, txn.type.value, str(txn.amount), txn.description,
             txn.date.isoformat(), stamp, stamp),
        )
        conn.commit()
    logger.info("Added %s transaction of %s on %s", txn.type.value, txn.amount, txn.date)
    return txn


def update_transaction(
    transaction_id: str,
    txn_type: Union[TransactionType, str, None] = None,
    amount: Any = None,
    category_id: Optional[str] = None,
    description: Optional[str] = None,
    txn_date: Any = None,
    db_path: PathLike = None,
) -> bool:
    """Update a transaction in the database.

    ``None`` leaves a field unchanged; an empty string clears the category
    or the description.  Returns True if the row exists and was updated.
    """
    with connect(db_path) as conn:
        row = conn.execute(
            TRANSACTION_SELECT + " WHERE id = ?", (transaction_id,)
        ).fetchone()
        if row is None:
            return False
        current = Transaction.from_record(
            dict(zip(['id', 'category_id', 'type', 'amount', 'description', 'date'], row))
        )
        day = current.date if txn_date is None else parse_day(txn_date)
        if day is None:
            raise InvalidRecordError(f"Invalid transaction date {txn_date!r}")
        updated = Transaction(
            id=current.id,
            type=current.type if txn_type is None else txn_type,
            amount=current.amount if amount is None else to_decimal(amount),
            date=day,
            category_id=current.category_id if category_id is None else _sanitize_db_value(category_id),
            description=current.description if description is None else _sanitize_db_value(description),
        )
        _check_category(conn, updated)
        cursor = conn.execute(
            "UPDATE transactions SET category_id = ?, type = ?, amount = ?, description = ?, date = ?, "
            "updated_at = ? WHERE id = ?",
            (updated.category_id, updated.type.value, str(updated.amount), updated.description,
             updated.date.isoformat(), _now(), transaction_id),
        )
        conn.commit()
        return cursor.rowcount > 0


def delete_transaction(transaction_id: str, db_path: PathLike = None) -> bool:
    with connect(db_path) as conn:
        cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (transaction_id,))
        conn.commit()
        return cursor.rowcount > 0


def fetch_transactions(
    start_date: Any = None,
    end_date: Any = None,
    db_path: PathLike = None,
) -> List[Transaction]:
    """Return transactions newest first, optionally bounded by date."""
    where: List[str] = []
    params: List[Any] = []

    if start_date is not None:
        where.append("date >= ?")
        params.append(as_day(start_date).isoformat())
    if end_date is not None:
        where.append("date <= ?")
        params.append(as_day(end_date).isoformat())

    sql = TRANSACTION_SELECT
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY date DESC, created_at DESC"

    with connect(db_path) as conn:
        df = pd.read_sql_query(sql, conn, params=params)
    return [Transaction.from_record(row) for row in df.to_dict('records')]
