"""Plotly and pandas helpers for the planner's result and history views.

The functions here turn :mod:`budget_planner.models` objects into
objects Streamlit can render directly: a Plotly pie chart for the
budget breakdown and a DataFrame for the history table.
"""

from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd
import plotly.graph_objects as go

from .config import CURRENCY_SYMBOL
from .models import BudgetResult, HistoryEntry

BREAKDOWN_LABELS = ["Expenses", "Savings", "Recommended Savings"]
BREAKDOWN_FILL_COLORS = [
    "rgba(255, 99, 132, 0.6)",
    "rgba(54, 162, 235, 0.6)",
    "rgba(255, 206, 86, 0.6)",
]
BREAKDOWN_LINE_COLORS = [
    "rgba(255, 99, 132, 1)",
    "rgba(54, 162, 235, 1)",
    "rgba(255, 206, 86, 1)",
]

HISTORY_COLUMNS = [
    "Date",
    f"Income ({CURRENCY_SYMBOL})",
    f"Expenses ({CURRENCY_SYMBOL})",
    f"Savings ({CURRENCY_SYMBOL})",
    f"Recommended Savings ({CURRENCY_SYMBOL})",
    "Message",
]


def budget_breakdown_series(expenses: Optional[float], result: Optional[BudgetResult]) -> pd.Series:
    """Collect the three slices of the budget pie chart.

    Parameters
    ----------
    expenses : float, optional
        Monthly expenses entered in the form.
    result : BudgetResult, optional
        Recommendation returned by the API.

    Returns
    -------
    pandas.Series
        Values indexed by :data:`BREAKDOWN_LABELS`; missing values are 0.
    """
    values = [
        float(expenses or 0),
        float(result.savings or 0) if result else 0.0,
        float(result.recommended_savings or 0) if result else 0.0,
    ]
    return pd.Series(values, index=BREAKDOWN_LABELS, name="Budget Breakdown")


def create_budget_pie_chart(series: pd.Series, title: str | None = None) -> go.Figure:
    """Generate the budget breakdown pie chart.

    Parameters
    ----------
    series : pandas.Series
        Output of :func:`budget_breakdown_series`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart with the planner's fixed palette.
    """
    if series.empty or not series.abs().sum():
        fig = go.Figure()
        fig.update_layout(title="No data to display")
        return fig
    fig = go.Figure(
        go.Pie(
            labels=list(series.index),
            values=[abs(v) for v in series.tolist()],
            name=series.name or "Budget Breakdown",
            marker=dict(
                colors=BREAKDOWN_FILL_COLORS[: len(series)],
                line=dict(color=BREAKDOWN_LINE_COLORS[: len(series)], width=1),
            ),
            sort=False,
        )
    )
    fig.update_layout(title=title or "Budget Breakdown")
    return fig


def _format_timestamp(value: str) -> str:
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return value
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def history_to_frame(entries: Iterable[HistoryEntry]) -> pd.DataFrame:
    """Shape history entries into the table shown under "Your Budget History"."""
    rows = [
        {
            HISTORY_COLUMNS[0]: _format_timestamp(entry.timestamp),
            HISTORY_COLUMNS[1]: entry.income,
            HISTORY_COLUMNS[2]: entry.expenses,
            HISTORY_COLUMNS[3]: entry.savings,
            HISTORY_COLUMNS[4]: entry.recommended_savings,
            HISTORY_COLUMNS[5]: entry.message,
        }
        for entry in entries
    ]
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)
