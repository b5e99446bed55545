"""Plotly visualisation helpers for the finance tracker.

Each function accepts the output of one calculator and returns a
`plotly.graph_objects.Figure` that Streamlit renders via
``st.plotly_chart``.  Amounts arrive as ``Decimal`` and are cast to float
only here, at the rendering boundary.
"""

from __future__ import annotations

from typing import Sequence

import plotly.express as px
import plotly.graph_objects as go

from .frames import balance_trend_frame, category_totals_frame, monthly_rollup_frame
from .ranking import CategoryTotal
from .rollups import MonthlyRollup
from .trends import BalancePoint

INCOME_COLOR = "#16a34a"
EXPENSE_COLOR = "#dc2626"
BALANCE_COLOR = "#2563eb"


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_balance_trend_chart(points: Sequence[BalancePoint], title: str | None = None) -> go.Figure:
    """Line chart of the running balance per day.

    Parameters
    ----------
    points : sequence of BalancePoint
        Output of :func:`trends.balance_trend`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Interactive line chart.
    """
    if not points:
        return _empty_figure()
    df = balance_trend_frame(points)
    df["Balance"] = df["Balance"].astype(float)
    fig = px.line(df, x="Date", y="Balance", color_discrete_sequence=[BALANCE_COLOR])
    fig.update_layout(
        title=title or "Balance Trend",
        xaxis_title="",
        yaxis_title="Balance",
    )
    return fig


def create_income_expense_chart(rollups: Sequence[MonthlyRollup], title: str | None = None) -> go.Figure:
    """Grouped bars of income and expense per month.

    All twelve months are drawn, including empty ones, so the x axis is
    stable across years.
    """
    if not rollups:
        return _empty_figure()
    df = monthly_rollup_frame(rollups)
    long_df = df.melt(id_vars="Month", value_vars=["Income", "Expense"], var_name="Flow", value_name="Amount")
    long_df["Amount"] = long_df["Amount"].astype(float)
    fig = px.bar(
        long_df,
        x="Month",
        y="Amount",
        color="Flow",
        barmode="group",
        color_discrete_map={"Income": INCOME_COLOR, "Expense": EXPENSE_COLOR},
    )
    fig.update_layout(
        title=title or "Income vs Expense",
        xaxis_title="",
        yaxis_title="Amount",
    )
    return fig


def create_category_pie_chart(totals: Sequence[CategoryTotal], title: str | None = None) -> go.Figure:
    """Pie chart of spending by category, drawn in each category's color.

    An empty ranking yields the "no data" figure rather than an empty pie.
    """
    if not totals:
        return _empty_figure("No expense data to display")
    df = category_totals_frame(totals)
    df["Total"] = df["Total"].astype(float)
    fig = px.pie(
        df,
        names="Category",
        values="Total",
        color="Category",
        color_discrete_map=dict(zip(df["Category"], df["Color"])),
    )
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(title=title or "Spending by Category")
    return fig
