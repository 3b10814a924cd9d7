from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from goaltime.utils.savings_models import SavingsPlan

SECONDS_PER_YEAR = 365.25 * 24 * 3600
DEFAULT_YEARS_TO_TARGET = 20.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


# -------------------------
# Stored goal records
# -------------------------

class LifeMilestone(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    target_age: int = Field(ge=0)
    target_amount: float = Field(ge=0)
    icon: str = "flag.fill"


class SavingsGoal(BaseModel):
    """Shape of a stored goal. Storage is owned by the caller, not by this package."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    target_amount: float = 0.0
    target_date: Optional[datetime] = None
    current_savings: float = 0.0
    monthly_deposit: float = 0.0
    expected_return: float = 7.0
    inflation_rate: float = 3.0
    currency: str = "USD"
    created_at: datetime = Field(default_factory=_utcnow)
    is_primary: bool = False
    user_age: int = 30
    milestones: List[LifeMilestone] = Field(default_factory=list)

    def years_to_target(self, now: Optional[datetime] = None) -> float:
        if self.target_date is None:
            return DEFAULT_YEARS_TO_TARGET
        now = _aware(now or _utcnow())
        interval = (_aware(self.target_date) - now).total_seconds()
        return max(1.0, interval / SECONDS_PER_YEAR)

    def plan(self, now: Optional[datetime] = None) -> SavingsPlan:
        return SavingsPlan(
            current_savings=self.current_savings,
            monthly_deposit=self.monthly_deposit,
            annual_return_rate=self.expected_return,
            annual_inflation_rate=self.inflation_rate,
            years=self.years_to_target(now),
        )

    def sorted_milestones(self) -> List[LifeMilestone]:
        return sorted(self.milestones, key=lambda m: m.target_age)


def primary_goal(goals: List[SavingsGoal]) -> Optional[SavingsGoal]:
    """The primary goal, else the most recently created one."""
    for g in goals:
        if g.is_primary:
            return g
    if not goals:
        return None
    return max(goals, key=lambda g: _aware(g.created_at))


# -------------------------
# Errors + reports
# -------------------------

class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class GoalReport(BaseModel):
    """Rendered report output.

    `tables` holds row dicts ready for a DataFrame; `answer_md` is the document body.
    """

    model_config = ConfigDict(extra="allow")

    title: str
    answer_md: str
    currency: str = "USD"
    generated_at: datetime = Field(default_factory=_utcnow)
    data: Dict[str, Any] = Field(default_factory=dict)
    tables: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)
    confidence: Literal["high", "medium", "low"] = "high"
    error: Optional[ErrorEnvelope] = None
