from __future__ import annotations

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    AT_RISK = "At Risk"
    CRITICAL = "Critical"


class AchievabilityStatus(str, Enum):
    AHEAD_OF_SCHEDULE = "ahead_of_schedule"
    ON_TRACK = "on_track"
    SLIGHTLY_BEHIND = "slightly_behind"
    BEHIND = "behind"
    SIGNIFICANTLY_BEHIND = "significantly_behind"

    @property
    def label(self) -> str:
        return {
            "ahead_of_schedule": "AHEAD",
            "on_track": "ON TRACK",
            "slightly_behind": "SLIGHTLY BEHIND",
            "behind": "BEHIND",
            "significantly_behind": "NEEDS ATTENTION",
        }[self.value]


class InsightColor(str, Enum):
    """Closed set of color categories. The UI owns the mapping to real colors."""

    GROWTH_GREEN = "growth_green"
    NEON_BLUE = "neon_blue"
    ORANGE = "orange"
    PURPLE = "purple"
    GOAL_GOLD = "goal_gold"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SavingsPlan(_Frozen):
    current_savings: float = Field(0.0, ge=0)
    monthly_deposit: float = Field(0.0, ge=0)
    annual_return_rate: float = Field(7.0, ge=0, description="Percent, e.g. 7.0")
    annual_inflation_rate: float = Field(3.0, ge=0, description="Percent, e.g. 3.0")
    years: float = Field(20.0, gt=0)


class GoalInput(SavingsPlan):
    target_amount: float = Field(0.0, ge=0)
    user_age: int = Field(30, ge=0, le=120)
    currency: str = "USD"
    start_year: Optional[int] = None


class GrowthPoint(_Frozen):
    month: int
    year: float
    nominal_value: float
    real_value: float
    total_deposited: float = Field(..., description="Current savings plus deposits, no compounding")


class TimeToGoalReason(str, Enum):
    ALREADY_MET = "already_met"
    REACHED = "reached"
    NO_CONTRIBUTION = "no_contribution"
    EXCEEDS_HORIZON = "exceeds_horizon"


class TimeToGoal(_Frozen):
    months: Optional[int] = None
    reason: TimeToGoalReason

    @property
    def reachable(self) -> bool:
        return self.months is not None


class YearBreakdownRow(_Frozen):
    year: int
    start_balance: float
    deposits_this_year: float
    interest_this_year: float
    end_balance: float
    total_interest: float
    total_deposited: float
    real_value: float
    daily_earnings: float


class YearMilestone(_Frozen):
    year: int
    years_from_now: int
    balance: float
    real_balance: float
    progress: float = Field(..., ge=0, le=1)
    goal_reached: bool


class IncrementalResult(_Frozen):
    base_value: float
    boosted_value: float
    extra_gain: float
    extra_gain_real: float
    total_extra_deposited: float
    compound_bonus: float


class Strategy(_Frozen):
    name: str
    annual_return: float
    description: str = ""
    icon: str = ""
    color: InsightColor = InsightColor.GROWTH_GREEN


class StrategyResult(_Frozen):
    strategy: Strategy
    future_value: float
    real_value: float


class SavingsHealthReport(_Frozen):
    overall: float
    funding: float
    time_buffer: float
    inflation_shield: float
    compound_power: float
    status: HealthStatus
    advice: str


class AchievabilityResult(_Frozen):
    ratio: float
    status: AchievabilityStatus
    message: str


class SavingsInsight(_Frozen):
    id: str
    icon: str
    title: str
    message: str
    color: InsightColor
    priority: int = Field(..., ge=1, description="1 = most important")


class ValidationIssue(BaseModel):
    level: str  # ERROR | WARN
    message: str
    field: Optional[str] = None


class ValidationReport(BaseModel):
    ok: bool = True
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    def add_error(self, msg: str, field: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(level="ERROR", message=msg, field=field))

    def add_warning(self, msg: str, field: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(level="WARN", message=msg, field=field))

    def finalize(self) -> "ValidationReport":
        self.ok = len(self.errors) == 0
        return self
