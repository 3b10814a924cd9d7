import streamlit as st
import pandas as pd
import plotly.express as px

from goaltime.utils import savings_engine as engine
from goaltime.utils.currency import format_currency
from goaltime.utils.logging import set_screen
from goaltime.web_app.ui_helpers import current_goal


def render():
    set_screen("strategies")
    goal = current_goal()
    plan = goal.plan()
    years = plan.years
    cur = goal.currency

    st.subheader("Strategy presets")
    st.caption("Fixed-return scenarios for educational comparison only.")

    results = engine.compare_strategies(plan.current_savings, plan.monthly_deposit, plan.annual_inflation_rate, years)
    df = pd.DataFrame(
        [
            {
                "Strategy": r.strategy.name,
                "Return %": r.strategy.annual_return,
                "Future value": r.future_value,
                "Real value": r.real_value,
            }
            for r in results
        ]
    )
    fig = px.bar(df, x="Strategy", y=["Future value", "Real value"], barmode="group", title=f"After {years:.0f} years")
    st.plotly_chart(fig, use_container_width=True)

    st.divider()
    st.subheader("What if I saved a little more?")
    extra = st.number_input("Extra per month", min_value=0.0, value=50.0, step=10.0)
    impact = engine.incremental_impact(
        plan.current_savings, plan.monthly_deposit, extra, plan.annual_return_rate, plan.annual_inflation_rate, years
    )
    c1, c2, c3 = st.columns(3)
    c1.metric("Extra gain", format_currency(impact.extra_gain, cur))
    c2.metric("In today's money", format_currency(impact.extra_gain_real, cur))
    c3.metric("Compound bonus", format_currency(impact.compound_bonus, cur))
    st.caption(f"You would deposit {format_currency(impact.total_extra_deposited, cur)} more in total.")
