import pytest
from pydantic import ValidationError

from goaltime.tools.savings_tools import (
    parse_goal_input, tool_compare_strategies, tool_goal_dashboard, tool_incremental_impact, tool_project_plan,
)

GOAL = {
    "currency": "USD",
    "target_amount": "100000",
    "time_horizon_years": "10",
    "current_savings": "5000",
    "monthly_contribution": "500",
    "expected_return": "7",
    "inflation_rate": "3",
    "user_age": 30,
    "start_year": 2026,
}


def test_aliases_are_mapped():
    g = parse_goal_input(GOAL)
    assert g.years == 10
    assert g.monthly_deposit == 500
    assert g.annual_return_rate == 7
    assert g.annual_inflation_rate == 3


def test_invalid_payload_raises():
    with pytest.raises(ValidationError):
        parse_goal_input({**GOAL, "current_savings": "-1"})
    with pytest.raises(ValidationError):
        parse_goal_input({**GOAL, "time_horizon_years": "0"})


def test_project_plan():
    out = tool_project_plan(GOAL)
    assert out["future_value"] > out["real_value"] > 0
    assert out["compound_gain"] == pytest.approx(out["future_value"] - 65_000)
    assert out["growth_curve"][-1]["month"] == 120
    assert len(out["yearly_breakdown"]) == 10
    assert out["required_monthly_deposit"] > 0
    assert out["time_to_goal_reason"] == "reached"
    assert out["months_to_goal"] > 120
    assert out["warnings"] == []


def test_project_plan_without_target():
    out = tool_project_plan({k: v for k, v in GOAL.items() if k != "target_amount"})
    assert "required_monthly_deposit" not in out
    assert "months_to_goal" not in out


def test_goal_dashboard():
    out = tool_goal_dashboard(GOAL)
    assert 0 <= out["health"]["overall"] <= 100
    assert out["achievability"]["status"] in {
        "ahead_of_schedule", "on_track", "slightly_behind", "behind", "significantly_behind",
    }
    assert len(out["insights"]) <= 3
    assert out["insight_count"] >= len(out["insights"])
    assert out["milestones"][0]["year"] == 2026

    everything = tool_goal_dashboard(GOAL, insight_limit=None)
    assert len(everything["insights"]) == everything["insight_count"]


def test_compare_and_impact():
    default = tool_compare_strategies(GOAL)
    assert [r["strategy"]["name"] for r in default] == ["Conservative", "Moderate", "Aggressive"]

    custom = tool_compare_strategies(GOAL, strategies=[{"name": "Flat", "annual_return": 0}])
    assert custom[0]["future_value"] == pytest.approx(5000 + 500 * 120)

    impact = tool_incremental_impact(GOAL, 100)
    assert impact["total_extra_deposited"] == pytest.approx(12_000)
    assert impact["compound_bonus"] > 0
