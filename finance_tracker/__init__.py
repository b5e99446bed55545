"""Top‑level package for the Finance Tracker.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``analytics`` – ``FinanceAnalytics``, every derived view over one snapshot
* ``filters``, ``bucketing``, ``trends``, ``rollups``, ``ranking`` and
  ``summary`` – the pure calculators behind it
* ``db`` – SQLite storage for transactions and categories
* ``visualization`` – functions that generate Plotly figures
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run finance_tracker/dashboard.py
```
"""

from .analytics import FinanceAnalytics
from .errors import FinanceTrackerError, InvalidRangeError, InvalidRecordError
from .filters import FilterCriteria, filter_transactions
from .joins import CategoryView, ResolvedTransaction, resolve_transactions
from .models import Category, Transaction, TransactionType

__all__ = [
    "Category",
    "CategoryView",
    "FilterCriteria",
    "FinanceAnalytics",
    "FinanceTrackerError",
    "InvalidRangeError",
    "InvalidRecordError",
    "ResolvedTransaction",
    "Transaction",
    "TransactionType",
    "filter_transactions",
    "resolve_transactions",
]
