from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from goaltime.utils import savings_engine as engine
from goaltime.utils.logging import get_logger
from goaltime.utils.savings_models import GoalInput, Strategy
from goaltime.utils.validators import validate_plan

log = get_logger(__name__)

# common aliases -> canonical GoalInput fields
_ALIASES = {
    "time_horizon_years": "years",
    "years_to_target": "years",
    "initial_investment": "current_savings",
    "monthly_contribution": "monthly_deposit",
    "monthly_investment": "monthly_deposit",
    "expected_return": "annual_return_rate",
    "expected_return_annual": "annual_return_rate",
    "inflation_rate": "annual_inflation_rate",
    "inflation_pct": "annual_inflation_rate",
}


def parse_goal_input(payload: Optional[Dict[str, Any]]) -> GoalInput:
    """Raises pydantic.ValidationError for malformed or out-of-range payloads."""
    p = dict(payload or {})
    for alias, canonical in _ALIASES.items():
        if canonical not in p and alias in p:
            p[canonical] = p.pop(alias)
        else:
            p.pop(alias, None)
    return GoalInput(**p)


def _horizon(g: GoalInput) -> int:
    return int(g.years)


def tool_project_plan(payload: Dict[str, Any]) -> Dict[str, Any]:
    g = parse_goal_input(payload)
    report = validate_plan(g)
    for w in report.warnings:
        log.warning(w.message, extra={"kv": {"field": w.field}})

    fv = engine.future_value(g.current_savings, g.monthly_deposit, g.annual_return_rate, g.years)
    principal = g.current_savings + g.monthly_deposit * g.years * 12
    out: Dict[str, Any] = {
        "currency": g.currency,
        "years": g.years,
        "future_value": fv,
        "real_value": engine.real_value(fv, g.annual_inflation_rate, g.years),
        "total_deposited": principal,
        "compound_gain": fv - principal,
        "growth_curve": [p.model_dump() for p in engine.growth_curve(
            g.current_savings, g.monthly_deposit, g.annual_return_rate, g.annual_inflation_rate, _horizon(g)
        )],
        "yearly_breakdown": [r.model_dump() for r in engine.yearly_breakdown(
            g.current_savings, g.monthly_deposit, g.annual_return_rate, g.annual_inflation_rate, _horizon(g)
        )],
        "warnings": [w.message for w in report.warnings],
    }

    if g.target_amount > 0:
        ttg = engine.time_to_goal(g.current_savings, g.monthly_deposit, g.annual_return_rate, g.target_amount)
        out["required_monthly_deposit"] = engine.required_monthly_deposit(
            g.current_savings, g.target_amount, g.annual_return_rate, g.years
        )
        out["months_to_goal"] = ttg.months
        out["time_to_goal_reason"] = ttg.reason.value
        out["inflated_goal_cost"] = engine.inflated_goal_cost(g.target_amount, g.annual_inflation_rate, g.years)

    log.info("projected plan", extra={"kv": {"years": g.years, "fv": fv}})
    return out


def tool_goal_dashboard(payload: Dict[str, Any], *, insight_limit: Optional[int] = 3) -> Dict[str, Any]:
    g = parse_goal_input(payload)
    start_year = g.start_year if g.start_year is not None else date.today().year

    health = engine.health_score(
        g.current_savings, g.monthly_deposit, g.target_amount,
        g.annual_return_rate, g.annual_inflation_rate, g.years,
    )
    status = engine.achievability_status(
        g.current_savings, g.monthly_deposit, g.target_amount,
        g.annual_return_rate, g.years, currency=g.currency,
    )
    insights = engine.generate_insights(
        g.current_savings, g.monthly_deposit, g.target_amount,
        g.annual_return_rate, g.annual_inflation_rate, g.years, g.user_age,
        currency=g.currency,
    )
    milestones = engine.yearly_milestones(
        g.current_savings, g.monthly_deposit, g.annual_return_rate, g.annual_inflation_rate,
        g.target_amount, start_year, min(_horizon(g) + 10, 50),
    )

    log.info("dashboard", extra={"kv": {"health": health.overall, "status": status.status.value, "insights": len(insights)}})
    return {
        "currency": g.currency,
        "health": health.model_dump(mode="json"),
        "achievability": status.model_dump(mode="json"),
        "insights": [i.model_dump(mode="json") for i in insights[:insight_limit]],
        "insight_count": len(insights),
        "milestones": [m.model_dump() for m in engine.display_milestones(milestones)],
    }


def tool_compare_strategies(
    payload: Dict[str, Any],
    strategies: Optional[Sequence[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    g = parse_goal_input(payload)
    chosen = [Strategy(**s) for s in strategies] if strategies else engine.DEFAULT_STRATEGIES
    results = engine.compare_strategies(g.current_savings, g.monthly_deposit, g.annual_inflation_rate, g.years, chosen)
    return [r.model_dump(mode="json") for r in results]


def tool_incremental_impact(payload: Dict[str, Any], additional_monthly: float) -> Dict[str, Any]:
    g = parse_goal_input(payload)
    res = engine.incremental_impact(
        g.current_savings, g.monthly_deposit, additional_monthly,
        g.annual_return_rate, g.annual_inflation_rate, g.years,
    )
    return res.model_dump()
