import streamlit as st
import pandas as pd
from datetime import date

from goaltime.core.config import SETTINGS
from goaltime.core.schemas import SavingsGoal
from goaltime.reports.goal_report import build_goal_report, table_csv
from goaltime.utils import savings_engine as engine
from goaltime.utils.currency import format_currency
from goaltime.utils.logging import get_logger, set_screen
from goaltime.utils.savings_models import SavingsPlan
from goaltime.web_app.ui_helpers import HEALTH_KIND, STATUS_KIND, _badge, _insight_card, current_goal

log = get_logger(__name__)


def _life_milestones(goal: SavingsGoal, plan: SavingsPlan) -> None:
    st.markdown("### Life milestones")
    milestones = goal.sorted_milestones()
    if not milestones:
        st.caption("No life milestones yet. Add one from the sidebar.")
        return
    rows = []
    for m in milestones:
        years_away = max(0, m.target_age - goal.user_age)
        projected = engine.future_value(plan.current_savings, plan.monthly_deposit, plan.annual_return_rate, years_away)
        rows.append(
            {
                "Milestone": m.name,
                "Age": m.target_age,
                "Needed": format_currency(m.target_amount, goal.currency),
                "Projected": format_currency(projected, goal.currency),
                "Covered": "yes" if projected >= m.target_amount else "",
            }
        )
    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def render():
    set_screen("my_goal")
    goal = current_goal()
    plan = goal.plan()
    cur = goal.currency

    st.subheader(goal.name or "My Goal")

    health = engine.health_score(
        plan.current_savings, plan.monthly_deposit, goal.target_amount,
        plan.annual_return_rate, plan.annual_inflation_rate, plan.years,
    )
    status = engine.achievability_status(
        plan.current_savings, plan.monthly_deposit, goal.target_amount,
        plan.annual_return_rate, plan.years, currency=cur,
    )
    insights = engine.generate_insights(
        plan.current_savings, plan.monthly_deposit, goal.target_amount,
        plan.annual_return_rate, plan.annual_inflation_rate, plan.years, goal.user_age, currency=cur,
    )

    col_l, col_r = st.columns([0.45, 0.55], gap="large")

    with col_l:
        st.metric("Health score", f"{health.overall:.0f} / 100")
        _badge(health.status.value, HEALTH_KIND[health.status])
        st.caption(health.advice)

        st.progress(min(1.0, health.funding / 30), text=f"Funding {health.funding:.0f}/30")
        st.progress(min(1.0, health.time_buffer / 25), text=f"Time buffer {health.time_buffer:.0f}/25")
        st.progress(min(1.0, health.inflation_shield / 20), text=f"Inflation shield {health.inflation_shield:.0f}/20")
        st.progress(min(1.0, health.compound_power / 25), text=f"Compound power {health.compound_power:.0f}/25")

        st.divider()
        _badge(status.status.label, STATUS_KIND[status.status])
        st.write(status.message)

    with col_r:
        st.markdown("### Insights")
        for i in insights[: SETTINGS.insight_display_limit]:
            _insight_card(i.title, i.message, i.color)

        st.markdown("### Milestones")
        milestones = engine.yearly_milestones(
            plan.current_savings, plan.monthly_deposit, plan.annual_return_rate, plan.annual_inflation_rate,
            goal.target_amount, date.today().year, min(int(plan.years) + 10, 50),
        )
        shown = engine.display_milestones(milestones, every=SETTINGS.milestone_every_years)
        df = pd.DataFrame(
            [
                {
                    "Year": m.year,
                    "Age": goal.user_age + m.years_from_now,
                    "Balance": format_currency(m.balance, cur),
                    "Today's money": format_currency(m.real_balance, cur),
                    "Progress": f"{m.progress * 100:.0f}%",
                    "Goal reached": "yes" if m.goal_reached else "",
                }
                for m in shown
            ]
        )
        st.dataframe(df, use_container_width=True, hide_index=True)

        _life_milestones(goal, plan)

        if st.button("Build report"):
            curve = engine.growth_curve(
                plan.current_savings, plan.monthly_deposit, plan.annual_return_rate, plan.annual_inflation_rate, int(plan.years)
            )
            report = build_goal_report(goal, curve, health=health, achievability=status, insights=insights[: SETTINGS.insight_display_limit])
            if report.error:
                st.error(report.error.message)
            else:
                st.markdown(report.answer_md)
                st.download_button(
                    "Download yearly table (CSV)",
                    data=table_csv(report),
                    file_name="savings_report.csv",
                    mime="text/csv",
                )
            log.info("report requested", extra={"kv": {"rows": len(report.tables.get("yearly", []))}})
