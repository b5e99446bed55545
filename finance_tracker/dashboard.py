"""Streamlit app for the finance tracker.

Four views share one sidebar: Dashboard (balance cards, balance trend,
recent transactions), Transactions (filters, totals, CSV export, edit and
delete), Categories (add, edit and delete labels) and Analytics (year to date
figures, monthly bars, spending by category).  Every view reads a fresh
:class:`FinanceAnalytics` built from the database on each rerun.

To run the dashboard from the command line::

    streamlit run finance_tracker/dashboard.py

or use ``python run_dashboard.py``.
"""

from __future__ import annotations

import os
import sys
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
import streamlit as st

# Conditional imports to support ``streamlit run finance_tracker/dashboard.py``
# (module executed without a package) as well as package imports in tests.
if __package__:
    from . import config, db
    from . import visualization as viz
    from .analytics import FinanceAnalytics
    from .errors import FinanceTrackerError
    from .export import export_filename, transactions_to_csv
    from .filters import ALL, FilterCriteria
    from .formatting import escape_dollar_for_markdown, format_currency, format_percent
    from .logging_setup import configure_logging
    from .models import Category, TransactionType, categories_of_type, to_decimal
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from finance_tracker import config, db  # type: ignore
    from finance_tracker import visualization as viz  # type: ignore
    from finance_tracker.analytics import FinanceAnalytics  # type: ignore
    from finance_tracker.errors import FinanceTrackerError  # type: ignore
    from finance_tracker.export import export_filename, transactions_to_csv  # type: ignore
    from finance_tracker.filters import ALL, FilterCriteria  # type: ignore
    from finance_tracker.formatting import escape_dollar_for_markdown, format_currency, format_percent  # type: ignore
    from finance_tracker.logging_setup import configure_logging  # type: ignore
    from finance_tracker.models import Category, TransactionType, categories_of_type, to_decimal  # type: ignore

TYPE_OPTIONS: Dict[str, str] = {
    "All types": ALL,
    "Income": TransactionType.INCOME.value,
    "Expense": TransactionType.EXPENSE.value,
}
ALL_CATEGORIES_LABEL = "All categories"
NO_CATEGORY_LABEL = "No category"
DEFAULT_COLORS = ["#22c55e", "#3b82f6", "#f97316", "#a855f7", "#ef4444", "#14b8a6", "#eab308"]
VIEWS = ["Dashboard", "Transactions", "Categories", "Analytics"]


# ---------------------------------------------------------------------------
# Helpers (no Streamlit calls)
# ---------------------------------------------------------------------------


def category_labels(categories: Iterable[Category]) -> Dict[str, str]:
    """Map unique select-box labels to category ids, in input order."""
    labels: Dict[str, str] = {}
    for category in categories:
        label = f"{category.name} ({category.type.value})"
        if label in labels:
            label = f"{label} [{category.id[:8]}]"
        labels[label] = category.id
    return labels


def criteria_from_inputs(
    type_label: str,
    category_label: str,
    search: str,
    labels: Dict[str, str],
) -> FilterCriteria:
    return FilterCriteria.from_params(
        type=TYPE_OPTIONS.get(type_label, ALL),
        category=labels.get(category_label, ALL),
        search=search.strip(),
    )


def transactions_table(transactions: Iterable, currency: Optional[str] = None) -> pd.DataFrame:
    """Display rows with signed, formatted amounts."""
    rows = []
    for txn in transactions:
        sign = "+" if txn.type is TransactionType.INCOME else "-"
        rows.append(
            {
                "Date": txn.date.isoformat(),
                "Type": txn.type.value.title(),
                "Category": txn.category_name or "Uncategorized",
                "Description": txn.description or "",
                "Amount": f"{sign}{format_currency(txn.amount, currency)}",
            }
        )
    return pd.DataFrame(rows, columns=["Date", "Type", "Category", "Description", "Amount"])


def transaction_choice_label(txn) -> str:
    text = txn.description or txn.category_name or txn.type.value
    return f"{txn.date.isoformat()} | {text} | {txn.amount}"


def transaction_choices(transactions: Iterable) -> Dict[str, Any]:
    """Map unique select-box labels to transactions, in input order."""
    choices: Dict[str, Any] = {}
    for txn in transactions:
        label = transaction_choice_label(txn)
        if label in choices:
            label = f"{label} [{txn.id[:8]}]"
        choices[label] = txn
    return choices


def label_for(labels: Dict[str, str], value: Optional[str], default: str) -> str:
    """First label mapped to ``value``, or ``default`` when none is."""
    return next((label for label, item in labels.items() if item == value), default)


def changed_amount(current: Decimal, entered: str) -> Optional[str]:
    """Amount text to store, or ``None`` when it equals ``current``.

    The edit form shows the exact stored decimal, so leaving it untouched
    never rewrites (or rounds) the amount.
    """
    text = entered.strip()
    if to_decimal(text) == current:
        return None
    return text


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


def load_analytics() -> FinanceAnalytics:
    db.init_db()
    return FinanceAnalytics(db.fetch_transactions(), db.fetch_categories())


def _transaction_form(key: str, categories: List[Category]) -> None:
    # outside the form so the category choices follow the selected type
    type_value = st.selectbox(
        "Type", options=[t.value for t in TransactionType], format_func=str.title, key=f"{key}_type"
    )
    labels = {NO_CATEGORY_LABEL: ""}
    labels.update(category_labels(categories_of_type(categories, type_value)))
    with st.form(key, clear_on_submit=True):
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        category_label = st.selectbox("Category", options=list(labels))
        description = st.text_input("Description")
        txn_date = st.date_input("Date")
        if st.form_submit_button("Add transaction"):
            try:
                db.add_transaction(
                    type_value,
                    f"{amount:.2f}",
                    category_id=labels[category_label],
                    description=description,
                    txn_date=txn_date,
                )
            except FinanceTrackerError as exc:  # pragma: no cover - UI display only
                st.error(f"Failed to add transaction: {exc}")
            else:
                st.success("Transaction added successfully")
                st.rerun()


def render_dashboard(analytics: FinanceAnalytics, currency: str) -> None:
    st.subheader("Dashboard")
    st.caption("Track your financial overview")
    stats = analytics.dashboard_stats()
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Balance", format_currency(stats.balance, currency))
    col2.metric("This Month Income", format_currency(stats.month_income, currency))
    col3.metric("This Month Expense", format_currency(stats.month_expense, currency))

    left, right = st.columns(2)
    with left:
        st.plotly_chart(viz.create_balance_trend_chart(analytics.balance_trend()), use_container_width=True)
    with right:
        st.markdown("**Recent Transactions**")
        recent = analytics.recent()
        if recent:
            st.dataframe(transactions_table(recent, currency), hide_index=True)
        else:
            st.info("No transactions yet. Add your first transaction to get started.")
    with st.expander("Add transaction"):
        _transaction_form("dashboard_add_transaction", list(analytics.categories))


def render_transactions(analytics: FinanceAnalytics, currency: str) -> None:
    st.subheader("Transactions")
    labels = category_labels(analytics.categories)
    col1, col2, col3 = st.columns(3)
    type_label = col1.selectbox("Type", options=list(TYPE_OPTIONS))
    category_label = col2.selectbox("Category", options=[ALL_CATEGORIES_LABEL] + list(labels))
    search = col3.text_input("Search descriptions")
    criteria = criteria_from_inputs(type_label, category_label, search, labels)

    filtered = analytics.filtered(criteria)
    totals = analytics.summary(criteria)
    m1, m2, m3 = st.columns(3)
    m1.metric("Income", format_currency(totals.total_income, currency))
    m2.metric("Expense", format_currency(totals.total_expense, currency))
    m3.metric("Net", format_currency(totals.net, currency))

    st.download_button(
        "Export CSV",
        data=transactions_to_csv(filtered),
        file_name=export_filename(analytics.today),
        mime="text/csv",
    )
    if not filtered:
        st.info("No transactions match the current filters.")
        return
    st.dataframe(transactions_table(filtered, currency), hide_index=True)

    choices = transaction_choices(filtered)
    selected_label = st.selectbox("Select a transaction", options=list(choices))
    _edit_transaction_form(choices[selected_label], list(analytics.categories))


def _edit_transaction_form(selected, categories: List[Category]) -> None:
    types = [t.value for t in TransactionType]
    type_value = st.selectbox(
        "Type",
        options=types,
        index=types.index(selected.type.value),
        format_func=str.title,
        key=f"edit_type_{selected.id}",
    )
    labels = {NO_CATEGORY_LABEL: ""}
    labels.update(category_labels(categories_of_type(categories, type_value)))
    options = list(labels)
    current = label_for(labels, selected.category_id, NO_CATEGORY_LABEL)
    with st.form("edit_transaction"):
        amount = st.text_input("Amount", value=str(selected.amount))
        category_label = st.selectbox("Category", options=options, index=options.index(current))
        description = st.text_input("Description", value=selected.description or "")
        txn_date = st.date_input("Date", value=selected.date)
        save, delete = st.columns(2)
        if save.form_submit_button("Save changes"):
            try:
                db.update_transaction(
                    selected.id,
                    txn_type=type_value,
                    amount=changed_amount(selected.amount, amount),
                    category_id=labels[category_label],
                    description=description,
                    txn_date=txn_date,
                )
            except FinanceTrackerError as exc:  # pragma: no cover - UI display only
                st.error(f"Failed to update transaction: {exc}")
            else:
                st.rerun()
        if delete.form_submit_button("Delete transaction"):
            db.delete_transaction(selected.id)
            st.rerun()


def render_categories(analytics: FinanceAnalytics) -> None:
    st.subheader("Categories")
    income_col, expense_col = st.columns(2)
    for column, title, items in (
        (income_col, "Income categories", analytics.income_categories),
        (expense_col, "Expense categories", analytics.expense_categories),
    ):
        column.markdown(f"**{title}**")
        if not items:
            column.caption("None yet")
        for category in items:
            column.markdown(
                f"<span style='color:{category.color}'>●</span> {category.name}", unsafe_allow_html=True
            )

    with st.form("add_category", clear_on_submit=True):
        name = st.text_input("Name")
        type_value = st.selectbox("Type", options=[t.value for t in TransactionType], format_func=str.title)
        color = st.color_picker("Color", value=DEFAULT_COLORS[len(analytics.categories) % len(DEFAULT_COLORS)])
        if st.form_submit_button("Add category"):
            try:
                db.add_category(name, type_value, color)
            except FinanceTrackerError as exc:  # pragma: no cover - UI display only
                st.error(f"Failed to add category: {exc}")
            else:
                st.rerun()

    labels = category_labels(analytics.categories)
    if labels:
        _edit_category_form(labels, {c.id: c for c in analytics.categories})
        to_delete = st.selectbox("Delete category", options=list(labels))
        st.caption("Transactions in a deleted category are kept and become uncategorized.")
        if st.button("Delete"):
            db.delete_category(labels[to_delete])
            st.rerun()


def _edit_category_form(labels: Dict[str, str], by_id: Dict[str, Category]) -> None:
    category = by_id[labels[st.selectbox("Edit category", options=list(labels), key="edit_category_choice")]]
    types = [t.value for t in TransactionType]
    with st.form("edit_category"):
        name = st.text_input("Name", value=category.name, key="edit_category_name")
        type_value = st.selectbox(
            "Type", options=types, index=types.index(category.type.value), format_func=str.title,
            key="edit_category_type",
        )
        color = st.color_picker("Color", value=category.color, key="edit_category_color")
        if st.form_submit_button("Save category"):
            try:
                db.update_category(category.id, name=name, txn_type=type_value, color=color)
            except FinanceTrackerError as exc:  # pragma: no cover - UI display only
                st.error(f"Failed to update category: {exc}")
            else:
                st.rerun()


def render_analytics(analytics: FinanceAnalytics, currency: str) -> None:
    st.subheader("Analytics")
    st.caption("Insights into your spending habits")
    ytd = analytics.year_summary()
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Income (YTD)", format_currency(ytd.ytd_income, currency, whole=True))
    c2.metric("Total Expense (YTD)", format_currency(ytd.ytd_expense, currency, whole=True))
    c3.metric("Savings Rate", format_percent(ytd.savings_rate))
    c4.metric("Avg Monthly Expense", format_currency(ytd.avg_monthly_expense, currency, whole=True))

    breakdown = analytics.category_breakdown()
    left, right = st.columns(2)
    with left:
        st.plotly_chart(viz.create_income_expense_chart(ytd.months), use_container_width=True)
    with right:
        if breakdown:
            totals = [item for item, _ in breakdown]
            st.plotly_chart(viz.create_category_pie_chart(totals), use_container_width=True)
        else:
            st.info("No expense data to display")

    st.markdown("**Top Spending Categories**")
    if not breakdown:
        st.caption("No expense data yet")
    for item, share in breakdown:
        amount = escape_dollar_for_markdown(format_currency(item.total, currency, whole=True))
        st.markdown(f"{item.name}: {amount} ({format_percent(share, 0)})")
        st.progress(min(float(share) / 100.0, 1.0))


def main() -> None:  # pragma: no cover - UI only
    """Entry point for the Streamlit app."""
    configure_logging()
    st.set_page_config(page_title="Finance Tracker", layout="wide", initial_sidebar_state="expanded")
    st.title("Finance Tracker")

    view = st.sidebar.radio("View", options=VIEWS)
    currency = st.sidebar.text_input("Currency", value=config.DEFAULT_CURRENCY).strip().upper() or "USD"
    analytics = load_analytics()

    if view == "Dashboard":
        render_dashboard(analytics, currency)
    elif view == "Transactions":
        render_transactions(analytics, currency)
    elif view == "Categories":
        render_categories(analytics)
    else:
        render_analytics(analytics, currency)


if __name__ == "__main__":  # pragma: no cover
    main()
