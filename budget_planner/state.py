"""Application state for the planner page.

Streamlit re-executes the page script on every interaction, so the
form values, the latest result, the history and any queued request
live in one :class:`PlannerState` stored in ``st.session_state``.  Any mutable
mapping works, which keeps the handlers testable with a plain dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, MutableMapping, Optional

from .models import BudgetRequest, BudgetResult, HistoryEntry

STATE_KEY = "budget_planner_state"


@dataclass
class PlannerState:
    email: str = ""
    income: float = 0.0
    expenses: float = 0.0
    savings_goal: float = 0.0
    result: Optional[BudgetResult] = None
    history: List[HistoryEntry] = field(default_factory=list)
    loading: bool = False
    # Action queued for the next script run: "budget" or "history".
    pending: Optional[str] = None
    error: Optional[str] = None

    def to_request(self) -> BudgetRequest:
        return BudgetRequest(
            email=self.email.strip(),
            income=float(self.income or 0),
            expenses=float(self.expenses or 0),
            savings_goal=float(self.savings_goal or 0),
        )

    @property
    def has_email(self) -> bool:
        return bool(self.email.strip())


def get_state(session_state: MutableMapping) -> PlannerState:
    """Return the planner state held in ``session_state``, creating it if absent."""
    state = session_state.get(STATE_KEY)
    if not isinstance(state, PlannerState):
        state = PlannerState()
        session_state[STATE_KEY] = state
    return state
