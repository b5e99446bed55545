#!/usr/bin/env python3
"""Export stored transactions to CSV, optionally filtered."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker import config, db
from finance_tracker.analytics import FinanceAnalytics
from finance_tracker.export import export_filename, write_csv
from finance_tracker.filters import FilterCriteria
from finance_tracker.formatting import format_currency
from finance_tracker.logging_setup import configure_logging, get_logger

logger = get_logger("finance_tracker.scripts.export")


def main(
    txn_type: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    output: Optional[str] = None,
) -> Path:
    db.init_db()
    analytics = FinanceAnalytics(db.fetch_transactions(), db.fetch_categories(), today=date.today())

    category_id = category
    if category and category != 'all':
        by_name = {c.name.lower(): c.id for c in analytics.categories}
        category_id = by_name.get(category.lower(), category)

    criteria = FilterCriteria.from_params(type=txn_type, category=category_id, search=search)
    rows = analytics.filtered(criteria)
    target = Path(output) if output else config.EXPORTS_DIR / export_filename(analytics.today)
    write_csv(rows, target)

    totals = analytics.summary(criteria)
    print(f"Exported {len(rows)} transaction(s) to {target}")
    print(
        f"Income {format_currency(totals.total_income)}, "
        f"expense {format_currency(totals.total_expense)}, "
        f"net {format_currency(totals.net)}"
    )
    return target


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Export transactions to CSV.')
    parser.add_argument('--type', choices=['all', 'income', 'expense'], default='all', help='Transaction type')
    parser.add_argument('--category', default=None, help='Category id or name')
    parser.add_argument('--search', default=None, help='Case-insensitive description search')
    parser.add_argument('--output', default=None, help='Output path (defaults to the exports directory)')
    parser.add_argument('--log-level', default=None, help='Logging level, e.g. DEBUG')
    return parser.parse_args(argv)


if __name__ == '__main__':
    args = parse_args()
    configure_logging(args.log_level)
    main(txn_type=args.type, category=args.category, search=args.search, output=args.output)
