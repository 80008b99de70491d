"""Request and response shapes exchanged with the budgeting API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class BudgetApiError(Exception):
    """Raised when the budgeting API returns a body we cannot interpret."""


def _to_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class BudgetRequest:
    """Inputs collected by the form, posted to ``/api/budget``."""

    email: str
    income: float
    expenses: float
    savings_goal: float

    def to_payload(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "income": self.income,
            "expenses": self.expenses,
            "savings_goal": self.savings_goal,
        }


@dataclass(frozen=True)
class BudgetResult:
    """Recommendation returned by the budgeting API."""

    savings: float = 0.0
    recommended_savings: float = 0.0
    inflation: Optional[float] = None
    message: str = ""
    recommendations: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "BudgetResult":
        if not isinstance(data, dict):
            raise BudgetApiError(
                f"Expected a JSON object from the budget endpoint, got {type(data).__name__}"
            )
        inflation = data.get("inflation")
        tips = data.get("recommendations") or []
        if not isinstance(tips, list):
            tips = [tips]
        return cls(
            savings=_to_float(data.get("savings")),
            recommended_savings=_to_float(data.get("recommended_savings")),
            inflation=None if inflation is None else _to_float(inflation),
            message=str(data.get("message") or ""),
            recommendations=[str(tip) for tip in tips],
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One past budget calculation stored by the backend for an email."""

    id: Any
    timestamp: str
    income: float
    expenses: float
    savings: float
    recommended_savings: float
    message: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=data.get("id"),
            timestamp=str(data.get("timestamp") or ""),
            income=_to_float(data.get("income")),
            expenses=_to_float(data.get("expenses")),
            savings=_to_float(data.get("savings")),
            recommended_savings=_to_float(data.get("recommended_savings")),
            message=str(data.get("message") or ""),
        )


def parse_history(payload: Any) -> List[HistoryEntry]:
    """Convert the history endpoint's JSON body into entries.

    Raises:
        BudgetApiError: If the body is not a list of objects.
    """
    if not isinstance(payload, list):
        raise BudgetApiError(
            f"Expected a JSON list from the history endpoint, got {type(payload).__name__}"
        )
    entries: List[HistoryEntry] = []
    for item in payload:
        if not isinstance(item, dict):
            raise BudgetApiError("History entries must be JSON objects")
        entries.append(HistoryEntry.from_dict(item))
    return entries
