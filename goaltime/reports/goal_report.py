from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd

from goaltime.core.schemas import ErrorEnvelope, GoalReport, SavingsGoal
from goaltime.utils.currency import format_currency
from goaltime.utils.logging import get_logger
from goaltime.utils.savings_models import (
    AchievabilityResult, GrowthPoint, SavingsHealthReport, SavingsInsight, SavingsPlan,
)

log = get_logger(__name__)

GoalLike = Union[SavingsGoal, SavingsPlan]


def curve_frame(curve: Sequence[GrowthPoint]) -> pd.DataFrame:
    """Growth curve as a DataFrame; compound gain is nominal minus deposited."""
    df = pd.DataFrame([p.model_dump() for p in curve], columns=list(GrowthPoint.model_fields))
    df["compound_gain"] = df["nominal_value"] - df["total_deposited"]
    return df


def _year_rows(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df
    last_month = int(df["month"].max())
    return df[(df["month"] % 12 == 0) | (df["month"] == last_month)]


def _plan_lines(goal: GoalLike, currency: str) -> List[str]:
    if isinstance(goal, SavingsGoal):
        return [
            f"- Goal: **{goal.name or 'My Goal'}**, target **{format_currency(goal.target_amount, currency)}**",
            f"- Current savings: {format_currency(goal.current_savings, currency)}",
            f"- Monthly deposit: {format_currency(goal.monthly_deposit, currency)}",
            f"- Expected return: {goal.expected_return:.1f}% / inflation: {goal.inflation_rate:.1f}%",
        ]
    return [
        f"- Current savings: {format_currency(goal.current_savings, currency)}",
        f"- Monthly deposit: {format_currency(goal.monthly_deposit, currency)}",
        f"- Expected return: {goal.annual_return_rate:.1f}% / inflation: {goal.annual_inflation_rate:.1f}%",
        f"- Horizon: {goal.years:g} years",
    ]


def build_goal_report(
    goal: GoalLike,
    curve: Sequence[GrowthPoint],
    *,
    currency: Optional[str] = None,
    health: Optional[SavingsHealthReport] = None,
    achievability: Optional[AchievabilityResult] = None,
    insights: Optional[Sequence[SavingsInsight]] = None,
) -> GoalReport:
    """
    Lays out already-computed engine output as a document.

    Nothing here recomputes a projection: figures come from `curve` and the
    optional result objects passed in.
    """
    cur = currency or getattr(goal, "currency", None) or "USD"
    title = f"Savings Report: {goal.name}" if isinstance(goal, SavingsGoal) and goal.name else "Savings Report"

    try:
        df = curve_frame(curve)
        warnings: List[str] = []
        if df.empty:
            warnings.append("EMPTY_GROWTH_CURVE")

        lines = [f"## {title}", "", "### Plan", *_plan_lines(goal, cur), ""]

        if not df.empty:
            final = df.iloc[-1]
            lines += [
                "### Projection",
                f"- Projected balance after {final['year']:g} years: **{format_currency(final['nominal_value'], cur)}**",
                f"- In today's money: **{format_currency(final['real_value'], cur)}**",
                f"- Total deposited: {format_currency(final['total_deposited'], cur)}",
                f"- Compound gain: {format_currency(final['compound_gain'], cur)}",
                "",
            ]

        if health is not None:
            lines += [
                "### Health score",
                f"- **{health.overall:.0f}/100** ({health.status.value})",
                f"- Funding {health.funding:.0f}/30, time buffer {health.time_buffer:.0f}/25, "
                f"inflation shield {health.inflation_shield:.0f}/20, compound power {health.compound_power:.0f}/25",
                f"- {health.advice}",
                "",
            ]

        if achievability is not None:
            lines += ["### Status", f"- **{achievability.status.label}**: {achievability.message}", ""]

        if insights:
            lines.append("### Insights")
            lines += [f"- **{i.title}**: {i.message}" for i in insights]
            lines.append("")

        yearly = _year_rows(df)
        table = [
            {
                "year": round(float(r["year"]), 2),
                "balance": round(float(r["nominal_value"]), 2),
                "real_value": round(float(r["real_value"]), 2),
                "deposited": round(float(r["total_deposited"]), 2),
            }
            for _, r in yearly.iterrows()
        ]

        log.info("built report", extra={"kv": {"title": title, "rows": len(table)}})
        return GoalReport(
            title=title,
            answer_md="\n".join(lines).rstrip() + "\n",
            currency=cur,
            data={"points": len(df)},
            tables={"yearly": table},
            warnings=warnings,
            confidence="high" if not warnings else "medium",
        )
    except Exception as e:
        log.exception("report generation failed")
        return GoalReport(
            title=title,
            answer_md="Report generation failed.",
            currency=cur,
            warnings=["REPORT_FAILED"],
            confidence="low",
            error=ErrorEnvelope(code="REPORT_FAILED", message=str(e)),
        )


def table_csv(report: GoalReport, table: str = "yearly") -> str:
    """CSV text for one report table; an unknown table has no rows."""
    return pd.DataFrame(report.tables.get(table, [])).to_csv(index=False)


def export_table_csv(report: GoalReport, path: Union[str, Path], table: str = "yearly") -> Path:
    p = Path(path)
    p.write_text(table_csv(report, table), encoding="utf-8")
    return p
