from datetime import datetime, timedelta, timezone

import pandas as pd

from goaltime.core.schemas import SavingsGoal
from goaltime.reports.goal_report import build_goal_report, curve_frame, export_table_csv, table_csv
from goaltime.utils.savings_engine import achievability_status, generate_insights, growth_curve, health_score
from goaltime.utils.savings_models import SavingsPlan


def _goal() -> SavingsGoal:
    return SavingsGoal(
        name="House",
        target_amount=150_000,
        target_date=datetime.now(timezone.utc) + timedelta(days=365.25 * 10),
        current_savings=10_000,
        monthly_deposit=800,
        expected_return=6,
        inflation_rate=2.5,
        currency="EUR",
    )


def test_report_uses_curve_figures():
    g = _goal()
    curve = growth_curve(g.current_savings, g.monthly_deposit, g.expected_return, g.inflation_rate, 10)
    health = health_score(g.current_savings, g.monthly_deposit, g.target_amount, g.expected_return, g.inflation_rate, 10)
    status = achievability_status(g.current_savings, g.monthly_deposit, g.target_amount, g.expected_return, 10, currency="EUR")
    insights = generate_insights(g.current_savings, g.monthly_deposit, g.target_amount, g.expected_return, g.inflation_rate, 10, 30, currency="EUR")

    rep = build_goal_report(g, curve, health=health, achievability=status, insights=insights[:3])
    assert rep.error is None
    assert rep.title == "Savings Report: House"
    assert rep.currency == "EUR"
    assert "### Health score" in rep.answer_md
    assert status.status.label in rep.answer_md
    assert "€" in rep.answer_md

    yearly = rep.tables["yearly"]
    assert [r["year"] for r in yearly] == [float(y) for y in range(0, 11)]
    assert yearly[-1]["balance"] == round(curve[-1].nominal_value, 2)


def test_report_for_bare_plan():
    plan = SavingsPlan(current_savings=0, monthly_deposit=100, annual_return_rate=0, annual_inflation_rate=0, years=2)
    rep = build_goal_report(plan, growth_curve(0, 100, 0, 0, 2))
    assert rep.title == "Savings Report"
    assert rep.currency == "USD"
    assert "$2,400" in rep.answer_md
    assert "### Health score" not in rep.answer_md


def test_report_empty_curve():
    rep = build_goal_report(_goal(), [])
    assert rep.warnings == ["EMPTY_GROWTH_CURVE"]
    assert rep.confidence == "medium"
    assert rep.tables["yearly"] == []


def test_report_failure_is_wrapped():
    rep = build_goal_report(_goal(), [object()])
    assert rep.error is not None
    assert rep.error.code == "REPORT_FAILED"
    assert rep.confidence == "low"


def test_curve_frame_and_csv_export(tmp_path):
    curve = growth_curve(1000, 100, 5, 2, 3)
    df = curve_frame(curve)
    assert list(df["month"]) == [p.month for p in curve]
    assert (df["compound_gain"] >= 0).all()

    rep = build_goal_report(SavingsPlan(years=3), curve)
    path = export_table_csv(rep, tmp_path / "yearly.csv")
    back = pd.read_csv(path)
    assert list(back.columns) == ["year", "balance", "real_value", "deposited"]
    assert len(back) == 4


def test_table_csv_matches_exported_file(tmp_path):
    plan = SavingsPlan(current_savings=0, monthly_deposit=100, annual_return_rate=0, annual_inflation_rate=0, years=2)
    rep = build_goal_report(plan, growth_curve(0, 100, 0, 0, 2))
    text = table_csv(rep)
    lines = text.splitlines()
    assert lines[0] == "year,balance,real_value,deposited"
    assert lines[-1] == "2.0,2400.0,2400.0,2400.0"
    assert export_table_csv(rep, tmp_path / "out.csv").read_text(encoding="utf-8") == text
