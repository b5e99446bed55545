#!/usr/bin/env python3
"""Fill an empty database with sample categories and transactions."""

from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker import db
from finance_tracker.logging_setup import configure_logging, get_logger

logger = get_logger("finance_tracker.scripts.seed")

DEMO_CATEGORIES = [
    ('Salary', 'income', '#22c55e'),
    ('Freelance', 'income', '#14b8a6'),
    ('Housing', 'expense', '#ef4444'),
    ('Groceries', 'expense', '#f97316'),
    ('Transport', 'expense', '#3b82f6'),
    ('Entertainment', 'expense', '#a855f7'),
]

# (days ago, category name, type, amount, description)
DEMO_TRANSACTIONS = [
    (75, 'Salary', 'income', '4200.00', 'Monthly salary'),
    (70, 'Housing', 'expense', '1450.00', 'Rent'),
    (62, 'Groceries', 'expense', '182.35', 'Weekly groceries'),
    (45, 'Salary', 'income', '4200.00', 'Monthly salary'),
    (40, 'Housing', 'expense', '1450.00', 'Rent'),
    (33, 'Freelance', 'income', '650.00', 'Logo design'),
    (28, 'Transport', 'expense', '64.20', 'Fuel'),
    (21, 'Entertainment', 'expense', '15.99', 'Streaming subscription'),
    (15, 'Salary', 'income', '4200.00', 'Monthly salary'),
    (10, 'Housing', 'expense', '1450.00', 'Rent'),
    (6, 'Groceries', 'expense', '96.48', 'Farmers market'),
    (2, None, 'expense', '12.50', 'Coffee'),
]


def main(db_path: Optional[str] = None, force: bool = False, today: Optional[date] = None) -> int:
    db.init_db(db_path)
    if db.fetch_transactions(db_path=db_path) and not force:
        print("Database already has transactions; use --force to add demo data anyway.")
        return 0

    today = today or date.today()
    ids = {}
    for name, txn_type, color in DEMO_CATEGORIES:
        ids[name] = db.add_category(name, txn_type, color, db_path=db_path).id

    for days_ago, category, txn_type, amount, description in DEMO_TRANSACTIONS:
        db.add_transaction(
            txn_type,
            amount,
            category_id=ids.get(category),
            description=description,
            txn_date=today - timedelta(days=days_ago),
            db_path=db_path,
        )
    print(f"Seeded {len(DEMO_CATEGORIES)} categories and {len(DEMO_TRANSACTIONS)} transactions.")
    return len(DEMO_TRANSACTIONS)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Seed the database with demo data.')
    parser.add_argument('--db-path', default=None, help='Database file (defaults to the configured path)')
    parser.add_argument('--force', action='store_true', help='Seed even if transactions exist')
    args = parser.parse_args()
    configure_logging()
    main(db_path=args.db_path, force=args.force)
