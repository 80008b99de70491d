"""User actions triggered from the planner page.

These functions are the boundary between the API client and the UI:
they update :class:`PlannerState` and convert any failure into the
generic message shown to the user.  The page renders the returned
:class:`ActionOutcome`; nothing here touches Streamlit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .api_client import BudgetApiClient
from .state import PlannerState

logger = logging.getLogger(__name__)

BUDGET_ERROR_MESSAGE = (
    "Error calculating budget. The backend might be waking up, "
    "please try again in a few seconds."
)
HISTORY_ERROR_MESSAGE = (
    "Error fetching budget history. The backend might be waking up, "
    "please try again in a few seconds."
)


@dataclass(frozen=True)
class ActionOutcome:
    ok: bool
    error: Optional[str] = None


def refresh_history(state: PlannerState, client: BudgetApiClient) -> ActionOutcome:
    """Reload the history table for the email currently in the form."""
    try:
        state.history = client.fetch_history_sync(state.email.strip())
    except Exception:
        logger.exception("Fetching budget history failed for %s", state.email)
        return ActionOutcome(ok=False, error=HISTORY_ERROR_MESSAGE)
    return ActionOutcome(ok=True)


def submit_budget(state: PlannerState, client: BudgetApiClient) -> ActionOutcome:
    """Submit the form, store the recommendation, then refresh the history.

    The history request is only issued after the submission has
    resolved, so it always includes the calculation just made.
    """
    state.loading = True
    try:
        try:
            state.result = client.calculate_budget_sync(state.to_request())
        except Exception:
            logger.exception("Budget calculation failed for %s", state.email)
            return ActionOutcome(ok=False, error=BUDGET_ERROR_MESSAGE)
        return refresh_history(state, client)
    finally:
        state.loading = False
