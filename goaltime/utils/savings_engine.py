from __future__ import annotations

import math
from typing import List, Optional, Sequence

from goaltime.utils.currency import format_compact, format_currency
from goaltime.utils.savings_models import (
    AchievabilityResult, AchievabilityStatus, GrowthPoint, HealthStatus,
    IncrementalResult, InsightColor, SavingsHealthReport, SavingsInsight,
    Strategy, StrategyResult, TimeToGoal, TimeToGoalReason,
    YearBreakdownRow, YearMilestone,
)

# 50 years of monthly steps
MONTHS_TO_GOAL_CAP = 600

RETIREMENT_AGE = 65
SMALL_BOOST_MONTHLY = 50.0
DAILY_EARNINGS_THRESHOLD = 10.0
# Assumes the deposit is one third of income; no income figure reaches the engine.
ASSUMED_INCOME_MULTIPLIER = 3.0

DEFAULT_STRATEGIES: List[Strategy] = [
    Strategy(
        name="Conservative",
        annual_return=2.5,
        description="Simulates low-return scenario (~2.5%/yr). For educational comparison only.",
        icon="shield.fill",
        color=InsightColor.NEON_BLUE,
    ),
    Strategy(
        name="Moderate",
        annual_return=6.0,
        description="Simulates medium-return scenario (~6%/yr). For educational comparison only.",
        icon="scale.3d",
        color=InsightColor.GROWTH_GREEN,
    ),
    Strategy(
        name="Aggressive",
        annual_return=10.0,
        description="Simulates high-return scenario (~10%/yr). For educational comparison only.",
        icon="bolt.fill",
        color=InsightColor.GOAL_GOLD,
    ),
]


def _monthly_rate(annual_return_rate: float) -> float:
    return annual_return_rate / 100.0 / 12.0


def _whole_months(years: float) -> int:
    return max(0, int(math.floor(years * 12)))


def _annuity_due_factor(r: float, months: int) -> float:
    return ((math.pow(1 + r, months) - 1) / r) * (1 + r)


def _principal(current_savings: float, monthly_deposit: float, years: float) -> float:
    return current_savings + monthly_deposit * years * 12


# -------------------------
# Core values
# -------------------------

def future_value(current_savings: float, monthly_deposit: float, annual_return_rate: float, years: float) -> float:
    """
    Future value of a lump sum plus an annuity due (deposits at the start of each month).

    FV = PV * (1+r)^n + P * (((1+r)^n - 1) / r) * (1+r)
    """
    months = _whole_months(years)
    r = _monthly_rate(annual_return_rate)

    if r == 0:
        return current_savings + monthly_deposit * months

    fv_existing = current_savings * math.pow(1 + r, months)
    fv_deposits = monthly_deposit * _annuity_due_factor(r, months)
    return fv_existing + fv_deposits


def real_value(future_value: float, annual_inflation_rate: float, years: float) -> float:
    """Today's purchasing power of a future amount. Deflation is not modeled."""
    if annual_inflation_rate <= 0:
        return future_value
    return future_value / math.pow(1 + annual_inflation_rate / 100.0, years)


def inflated_goal_cost(current_cost: float, annual_inflation_rate: float, years: float) -> float:
    return current_cost * math.pow(1 + annual_inflation_rate / 100.0, years)


def required_monthly_deposit(current_savings: float, target_amount: float, annual_return_rate: float, years: float) -> float:
    months = _whole_months(years)
    r = _monthly_rate(annual_return_rate)

    if months <= 0:
        return max(0.0, target_amount - current_savings)

    if r == 0:
        return max(0.0, (target_amount - current_savings) / months)

    remaining = target_amount - current_savings * math.pow(1 + r, months)
    if remaining <= 0:
        return 0.0

    return max(0.0, remaining / _annuity_due_factor(r, months))


def time_to_goal(
    current_savings: float,
    monthly_deposit: float,
    annual_return_rate: float,
    target_amount: float,
    *,
    max_months: int = MONTHS_TO_GOAL_CAP,
) -> TimeToGoal:
    """
    Month-by-month search for the first month the balance reaches the target.

    The search is bounded by `max_months`, so it always terminates. The reason
    field tells "nothing is being saved" apart from "not within the horizon".
    """
    if not (monthly_deposit > 0 or current_savings > 0):
        return TimeToGoal(months=None, reason=TimeToGoalReason.NO_CONTRIBUTION)
    if target_amount <= current_savings:
        return TimeToGoal(months=0, reason=TimeToGoalReason.ALREADY_MET)

    r = _monthly_rate(annual_return_rate)
    balance = current_savings
    for month in range(1, max_months + 1):
        balance = balance * (1 + r) + monthly_deposit
        if balance >= target_amount:
            return TimeToGoal(months=month, reason=TimeToGoalReason.REACHED)

    return TimeToGoal(months=None, reason=TimeToGoalReason.EXCEEDS_HORIZON)


def months_to_goal(
    current_savings: float,
    monthly_deposit: float,
    annual_return_rate: float,
    target_amount: float,
    *,
    max_months: int = MONTHS_TO_GOAL_CAP,
) -> Optional[int]:
    return time_to_goal(
        current_savings, monthly_deposit, annual_return_rate, target_amount, max_months=max_months
    ).months


def daily_passive_earnings(current_balance: float, annual_return_rate: float) -> float:
    return current_balance * annual_return_rate / 100.0 / 365.0


def doubling_years(annual_return_rate: float) -> Optional[float]:
    """Rule of 72. None when there is no growth to double."""
    if annual_return_rate <= 0:
        return None
    return 72.0 / annual_return_rate


# -------------------------
# Time series
# -------------------------

def growth_curve(
    current_savings: float,
    monthly_deposit: float,
    annual_return_rate: float,
    annual_inflation_rate: float,
    total_years: int,
) -> List[GrowthPoint]:
    """Every 3rd month from 0 to total_years*12, plus the final month."""
    total_months = int(total_years) * 12
    r = _monthly_rate(annual_return_rate)
    balance = current_savings
    points: List[GrowthPoint] = []

    for month in range(0, total_months + 1):
        if month % 3 == 0 or month == total_months:
            years = month / 12.0
            points.append(
                GrowthPoint(
                    month=month,
                    year=years,
                    nominal_value=balance,
                    real_value=real_value(balance, annual_inflation_rate, years),
                    total_deposited=current_savings + monthly_deposit * month,
                )
            )
        if month < total_months:
            balance = balance * (1 + r) + monthly_deposit

    return points


def yearly_breakdown(
    current_savings: float,
    monthly_deposit: float,
    annual_return_rate: float,
    annual_inflation_rate: float,
    total_years: int,
) -> List[YearBreakdownRow]:
    r = _monthly_rate(annual_return_rate)
    balance = current_savings
    total_interest = 0.0
    rows: List[YearBreakdownRow] = []

    for year in range(1, int(total_years) + 1):
        start_balance = balance
        year_interest = 0.0
        for _ in range(12):
            interest = balance * r
            year_interest += interest
            balance = balance + interest + monthly_deposit

        total_interest += year_interest
        rows.append(
            YearBreakdownRow(
                year=year,
                start_balance=start_balance,
                deposits_this_year=monthly_deposit * 12,
                interest_this_year=year_interest,
                end_balance=balance,
                total_interest=total_interest,
                total_deposited=current_savings + monthly_deposit * year * 12,
                real_value=real_value(balance, annual_inflation_rate, float(year)),
                daily_earnings=daily_passive_earnings(balance, annual_return_rate),
            )
        )

    return rows


def yearly_milestones(
    current_savings: float,
    monthly_deposit: float,
    annual_return_rate: float,
    annual_inflation_rate: float,
    target_amount: float,
    start_year: int,
    total_years: int,
) -> List[YearMilestone]:
    r = _monthly_rate(annual_return_rate)
    balance = current_savings
    goal_reached = False
    milestones: List[YearMilestone] = []

    for year in range(0, int(total_years) + 1):
        progress = min(max(balance / target_amount, 0.0), 1.0) if target_amount > 0 else 0.0
        # one-way latch: stays True for the rest of the sequence
        if balance >= target_amount:
            goal_reached = True

        milestones.append(
            YearMilestone(
                year=start_year + year,
                years_from_now=year,
                balance=balance,
                real_balance=real_value(balance, annual_inflation_rate, float(year)),
                progress=progress,
                goal_reached=goal_reached,
            )
        )

        if year < total_years:
            for _ in range(12):
                balance = balance * (1 + r) + monthly_deposit

    return milestones


def display_milestones(milestones: Sequence[YearMilestone], every: int = 5) -> List[YearMilestone]:
    """Year 0, every `every`-th year, plus the first year the goal is reached."""
    picked: List[YearMilestone] = []
    goal_added = False
    for m in milestones:
        on_step = m.years_from_now == 0 or (every > 0 and m.years_from_now % every == 0)
        if on_step:
            picked.append(m)
        if m.goal_reached and not goal_added and not on_step:
            picked.append(m)
            goal_added = True
    return sorted(picked, key=lambda m: m.years_from_now)


# -------------------------
# Comparisons
# -------------------------

def incremental_impact(
    current_savings: float,
    base_monthly_deposit: float,
    additional_monthly: float,
    annual_return_rate: float,
    annual_inflation_rate: float,
    years: float,
) -> IncrementalResult:
    base_fv = future_value(current_savings, base_monthly_deposit, annual_return_rate, years)
    boosted_fv = future_value(current_savings, base_monthly_deposit + additional_monthly, annual_return_rate, years)

    extra_gain = boosted_fv - base_fv
    total_extra = additional_monthly * years * 12

    return IncrementalResult(
        base_value=base_fv,
        boosted_value=boosted_fv,
        extra_gain=extra_gain,
        extra_gain_real=real_value(extra_gain, annual_inflation_rate, years),
        total_extra_deposited=total_extra,
        compound_bonus=extra_gain - total_extra,
    )


def compare_strategies(
    current_savings: float,
    monthly_deposit: float,
    annual_inflation_rate: float,
    years: float,
    strategies: Sequence[Strategy] = tuple(DEFAULT_STRATEGIES),
) -> List[StrategyResult]:
    results: List[StrategyResult] = []
    for s in strategies:
        fv = future_value(current_savings, monthly_deposit, s.annual_return, years)
        results.append(
            StrategyResult(strategy=s, future_value=fv, real_value=real_value(fv, annual_inflation_rate, years))
        )
    return results


# -------------------------
# Health score
# -------------------------

def _health_status(overall: float) -> HealthStatus:
    if overall >= 80:
        return HealthStatus.EXCELLENT
    if overall >= 60:
        return HealthStatus.GOOD
    if overall >= 40:
        return HealthStatus.FAIR
    if overall >= 20:
        return HealthStatus.AT_RISK
    return HealthStatus.CRITICAL


def health_score(
    current_savings: float,
    monthly_deposit: float,
    target_amount: float,
    annual_return_rate: float,
    annual_inflation_rate: float,
    years_to_target: float,
) -> SavingsHealthReport:
    """
    Composite 0-100 score:
    - funding (0-30): actual vs required monthly deposit
    - time buffer (0-25): months available vs months needed
    - inflation shield (0-20): step function of real return
    - compound power (0-25): compound gain relative to principal
    """
    if target_amount <= 0 or years_to_target <= 0:
        return SavingsHealthReport(
            overall=0.0,
            funding=0.0,
            time_buffer=0.0,
            inflation_shield=0.0,
            compound_power=0.0,
            status=HealthStatus.CRITICAL,
            advice="Set a savings goal to get your Health Score.",
        )

    required = required_monthly_deposit(current_savings, target_amount, annual_return_rate, years_to_target)
    funding_ratio = min(monthly_deposit / required, 1.5) if required > 0 else 1.5
    funding = min(30.0, funding_ratio * 20.0)

    needed = months_to_goal(current_savings, monthly_deposit, annual_return_rate, target_amount)
    available = _whole_months(years_to_target)
    if needed is None:
        buffer_ratio = 0.0
    elif needed > 0:
        buffer_ratio = available / needed
    else:
        buffer_ratio = 2.0
    time_buffer = min(25.0, buffer_ratio * 12.5)

    real_return = annual_return_rate - annual_inflation_rate
    if real_return >= 4:
        inflation_shield = 20.0
    elif real_return >= 2:
        inflation_shield = 15.0
    elif real_return >= 0:
        inflation_shield = 8.0
    else:
        inflation_shield = max(0.0, 5.0 + real_return)

    fv = future_value(current_savings, monthly_deposit, annual_return_rate, years_to_target)
    principal = _principal(current_savings, monthly_deposit, years_to_target)
    compound_ratio = (fv - principal) / principal if principal > 0 else 0.0
    compound_power = min(25.0, max(0.0, compound_ratio * 25.0))

    overall = min(100.0, funding + time_buffer + inflation_shield + compound_power)

    # weakest component first; only the first match is reported
    if funding < 15:
        advice = "Consider increasing your monthly deposit or extending your timeline."
    elif time_buffer < 10:
        advice = "Your timeline is tight. A small increase in deposits could add a safety buffer."
    elif inflation_shield < 10:
        advice = "Your expected return barely outpaces inflation. Review your assumptions."
    elif compound_power < 10:
        advice = "Starting earlier or increasing deposits will unlock more compound growth."
    else:
        advice = "Your savings plan looks well-balanced. Stay consistent!"

    return SavingsHealthReport(
        overall=overall,
        funding=funding,
        time_buffer=time_buffer,
        inflation_shield=inflation_shield,
        compound_power=compound_power,
        status=_health_status(overall),
        advice=advice,
    )


# -------------------------
# Achievability
# -------------------------

def achievability_status(
    current_savings: float,
    monthly_deposit: float,
    target_amount: float,
    annual_return_rate: float,
    years_to_target: float,
    *,
    currency: str = "USD",
) -> AchievabilityResult:
    fv = future_value(current_savings, monthly_deposit, annual_return_rate, years_to_target)
    ratio = fv / target_amount if target_amount > 0 else 0.0

    def top_up() -> float:
        req = required_monthly_deposit(current_savings, target_amount, annual_return_rate, years_to_target)
        return max(0.0, req - monthly_deposit)

    if ratio >= 1.2:
        status = AchievabilityStatus.AHEAD_OF_SCHEDULE
        message = f"You're projected to exceed your goal by {format_currency(fv - target_amount, currency)}!"
    elif ratio >= 1.0:
        status = AchievabilityStatus.ON_TRACK
        message = "You're on track to reach your goal on time."
    elif ratio >= 0.75:
        status = AchievabilityStatus.SLIGHTLY_BEHIND
        message = (
            f"You're {format_currency(target_amount - fv, currency)} short. "
            f"Adding {format_currency(top_up(), currency)}/mo would close the gap."
        )
    elif ratio >= 0.5:
        status = AchievabilityStatus.BEHIND
        message = f"You need {format_currency(top_up(), currency)} more per month, or extend your timeline."
    else:
        status = AchievabilityStatus.SIGNIFICANTLY_BEHIND
        message = "Consider a longer timeline or a higher monthly deposit."

    return AchievabilityResult(ratio=ratio, status=status, message=message)


# -------------------------
# Insights
# -------------------------

def generate_insights(
    current_savings: float,
    monthly_deposit: float,
    target_amount: float,
    annual_return_rate: float,
    annual_inflation_rate: float,
    years_to_target: float,
    user_age: int,
    *,
    currency: str = "USD",
) -> List[SavingsInsight]:
    """Evaluates every rule independently, then stable-sorts by priority (1 first)."""
    insights: List[SavingsInsight] = []

    fv = future_value(current_savings, monthly_deposit, annual_return_rate, years_to_target)
    principal = _principal(current_savings, monthly_deposit, years_to_target)
    compound_gain = fv - principal
    compound_ratio = compound_gain / principal if principal > 0 else 0.0

    doubling = doubling_years(annual_return_rate)
    if doubling is not None:
        insights.append(
            SavingsInsight(
                id="rule72",
                icon="divide.circle.fill",
                title=f"Money Doubles in ~{int(doubling)} Years",
                message=(
                    f"At {annual_return_rate:.1f}% return, your savings double approximately every "
                    f"{int(doubling)} years thanks to compound interest."
                ),
                color=InsightColor.GROWTH_GREEN,
                priority=2,
            )
        )

    if compound_ratio > 1.0:
        insights.append(
            SavingsInsight(
                id="compound_power",
                icon="sparkles",
                title="Compound Interest Exceeds Your Deposits!",
                message=(
                    f"By year {int(years_to_target)}, compound interest contributes "
                    f"{format_compact(compound_gain, currency)}, more than the "
                    f"{format_compact(principal, currency)} you deposit yourself."
                ),
                color=InsightColor.NEON_BLUE,
                priority=1,
            )
        )

    real_return = annual_return_rate - annual_inflation_rate
    if real_return < 1:
        insights.append(
            SavingsInsight(
                id="inflation_warning",
                icon="exclamationmark.triangle.fill",
                title="Inflation Is Catching Up",
                message=(
                    f"Your real return is only {real_return:.1f}%. Consider if your expected return "
                    "assumption adequately outpaces inflation."
                ),
                color=InsightColor.ORANGE,
                priority=1,
            )
        )
    elif real_return >= 4:
        insights.append(
            SavingsInsight(
                id="inflation_shield",
                icon="shield.fill",
                title="Strong Inflation Protection",
                message=f"Your {real_return:.1f}% real return provides a solid buffer against inflation erosion.",
                color=InsightColor.GROWTH_GREEN,
                priority=3,
            )
        )

    if user_age < 35:
        years_left = max(0, RETIREMENT_AGE - user_age)
        fv_retirement = future_value(current_savings, monthly_deposit, annual_return_rate, float(years_left))
        insights.append(
            SavingsInsight(
                id="early_start",
                icon="clock.fill",
                title="Time Is On Your Side",
                message=(
                    f"With {years_left} years until {RETIREMENT_AGE}, your "
                    f"{format_currency(monthly_deposit, currency)}/month could grow to "
                    f"{format_compact(fv_retirement, currency)}. Starting early is your biggest advantage."
                ),
                color=InsightColor.PURPLE,
                priority=2,
            )
        )

    boost = incremental_impact(
        current_savings, monthly_deposit, SMALL_BOOST_MONTHLY,
        annual_return_rate, annual_inflation_rate, years_to_target,
    )
    if boost.extra_gain > SMALL_BOOST_MONTHLY * 12 * years_to_target * 1.5:
        insights.append(
            SavingsInsight(
                id="small_boost",
                icon="plus.circle.fill",
                title="A Little Goes a Long Way",
                message=(
                    f"Adding just {format_currency(SMALL_BOOST_MONTHLY, currency)} more per month would generate "
                    f"an extra {format_compact(boost.extra_gain, currency)} by your goal date."
                ),
                color=InsightColor.GROWTH_GREEN,
                priority=2,
            )
        )

    daily = daily_passive_earnings(fv, annual_return_rate)
    if daily > DAILY_EARNINGS_THRESHOLD:
        insights.append(
            SavingsInsight(
                id="daily_earnings",
                icon="moon.stars.fill",
                title=f"Earning {format_currency(daily, currency)} Per Day Passively",
                message=(
                    f"At your projected balance, your money earns {format_currency(daily, currency)} per day "
                    "in compound interest, even while you sleep."
                ),
                color=InsightColor.PURPLE,
                priority=3,
            )
        )

    if monthly_deposit > 0:
        savings_rate_estimate = monthly_deposit / (monthly_deposit * ASSUMED_INCOME_MULTIPLIER) * 100
        if savings_rate_estimate > 25:
            insights.append(
                SavingsInsight(
                    id="strong_saver",
                    icon="star.fill",
                    title="Consistent Saver",
                    message=(
                        f"Your regular monthly deposit of {format_currency(monthly_deposit, currency)} shows strong "
                        "savings discipline, the most important factor in building long-term wealth."
                    ),
                    color=InsightColor.GOAL_GOLD,
                    priority=3,
                )
            )

    return sorted(insights, key=lambda i: i.priority)


# -------------------------
# Quick tools
# -------------------------

def savings_rate(monthly_income: float, monthly_savings: float) -> float:
    if monthly_income <= 0:
        return 0.0
    return monthly_savings / monthly_income * 100.0


def savings_rate_label(rate: float) -> str:
    if rate >= 30:
        return "Excellent"
    if rate >= 20:
        return "Good"
    if rate >= 10:
        return "Fair"
    if rate > 0:
        return "Needs Work"
    return "None"


def years_to_financial_independence(
    monthly_income: float,
    monthly_savings: float,
    annual_return_rate: float = 7.0,
) -> Optional[float]:
    """25x annual expenses (the 4% rule), funded from zero by monthly savings."""
    if monthly_savings <= 0:
        return None
    target = (monthly_income - monthly_savings) * 12 * 25
    if target <= 0:
        return 0.0
    months = months_to_goal(0.0, monthly_savings, annual_return_rate, target)
    if months is None:
        return None
    return months / 12.0
