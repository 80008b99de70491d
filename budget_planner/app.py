"""Streamlit page for the WealthSync Budget Planner.

Requests run in two script runs.  Pressing a button queues the action
on :class:`PlannerState` and reruns, so the next run draws both
buttons disabled ("Loading...") before the blocking request starts.
When the request resolves the page reruns once more with the result
or the error message.

To run the planner from the command line::

    streamlit run budget_planner/Home.py

or use ``python run_budget_planner.py`` from the project root.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from . import config
from .actions import ActionOutcome, refresh_history, submit_budget
from .api_client import BudgetApiClient
from .formatting import format_percent, format_rupees
from .state import PlannerState, get_state
from .visualization import budget_breakdown_series, create_budget_pie_chart, history_to_frame

BUDGET_ACTION = "budget"
HISTORY_ACTION = "history"


def _escape(text: str) -> str:
    # Streamlit markdown treats "$" as a LaTeX delimiter.
    return text.replace("$", "\\$")


def _rerun() -> None:
    rerun_fn = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if rerun_fn:
        rerun_fn()


def _queue(state: PlannerState, action: str) -> None:
    state.loading = True
    state.pending = action
    _rerun()


def _run_pending(state: PlannerState, client: BudgetApiClient) -> None:
    """Perform the queued request and record its error, if any."""
    action, state.pending = state.pending, None
    try:
        if action == BUDGET_ACTION:
            with st.spinner("Calculating your budget..."):
                outcome = submit_budget(state, client)
        elif action == HISTORY_ACTION:
            with st.spinner("Fetching history..."):
                outcome = refresh_history(state, client)
        else:
            outcome = ActionOutcome(ok=True)
    finally:
        state.loading = False
    state.error = outcome.error


def render_form(state: PlannerState) -> bool:
    """Render the input form and return whether "Plan My Budget" was pressed."""
    symbol = config.CURRENCY_SYMBOL
    state.email = st.text_input("Your Email", key="email_input", placeholder="you@example.com")
    state.income = st.number_input(
        f"Monthly Income ({symbol})", min_value=0.0, step=1000.0, key="income_input"
    )
    state.expenses = st.number_input(
        f"Monthly Expenses ({symbol})", min_value=0.0, step=1000.0, key="expenses_input"
    )
    state.savings_goal = st.number_input(
        f"Savings Goal ({symbol})", min_value=0.0, step=1000.0, key="savings_goal_input"
    )
    return st.button(
        "Loading..." if state.loading else "Plan My Budget",
        disabled=state.loading,
        key="plan_budget",
    )


def render_result(state: PlannerState) -> None:
    result = state.result
    if result is None:
        return
    st.write(f"Your Savings: {format_rupees(result.savings)}")
    st.write(f"Recommended Savings: {format_rupees(result.recommended_savings)}")
    st.write(f"Inflation Rate in {config.INFLATION_REGION}: {format_percent(result.inflation)}")
    if result.message:
        st.write(_escape(result.message))

    st.subheader("Personalized Tips")
    if result.recommendations:
        st.markdown("\n".join(f"- {_escape(tip)}" for tip in result.recommendations))
    else:
        st.caption("No tips returned for this budget.")

    st.subheader("Budget Breakdown")
    series = budget_breakdown_series(state.expenses, result)
    st.plotly_chart(create_budget_pie_chart(series), use_container_width=True)


def render_history(state: PlannerState) -> bool:
    """Render the history block and return whether "View Budget History" was pressed."""
    st.subheader("Your Budget History")
    pressed = False
    if state.has_email:
        pressed = st.button(
            "Loading..." if state.loading else "View Budget History",
            disabled=state.loading,
            key="view_history",
        )
    else:
        st.info("Please enter your email to view history.")

    if state.history:
        st.dataframe(history_to_frame(state.history), use_container_width=True, hide_index=True)
    elif state.has_email:
        st.write("No budget history found for this email.")
    return pressed


def main(client: Optional[BudgetApiClient] = None) -> None:
    """Entry point for the Streamlit app."""
    config.configure_logging()
    st.set_page_config(page_title="WealthSync Budget Planner", page_icon="💰", layout="centered")
    st.title("WealthSync Budget Planner")

    state = get_state(st.session_state)
    client = client or BudgetApiClient()

    if state.loading and not state.pending:
        state.loading = False
    if state.error:
        st.error(state.error)
        state.error = None

    if render_form(state):
        _queue(state, BUDGET_ACTION)
        return
    render_result(state)
    if render_history(state):
        _queue(state, HISTORY_ACTION)
        return

    if state.pending:
        _run_pending(state, client)
        _rerun()
