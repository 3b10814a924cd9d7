import streamlit as st

from goaltime.utils import savings_engine as engine
from goaltime.utils.currency import format_currency
from goaltime.utils.logging import set_screen
from goaltime.web_app.ui_helpers import _growth_chart, breakdown_frame, current_goal


def render():
    set_screen("time_machine")
    goal = current_goal()
    plan = goal.plan()
    cur = goal.currency

    st.subheader("Time machine")
    years = st.slider("Years", min_value=1, max_value=50, value=int(min(plan.years, 50)))

    fv = engine.future_value(plan.current_savings, plan.monthly_deposit, plan.annual_return_rate, years)
    rv = engine.real_value(fv, plan.annual_inflation_rate, years)
    deposited = plan.current_savings + plan.monthly_deposit * years * 12

    c1, c2, c3 = st.columns(3)
    c1.metric("Projected balance", format_currency(fv, cur))
    c2.metric("In today's money", format_currency(rv, cur))
    c3.metric("Compound gain", format_currency(fv - deposited, cur))

    curve = engine.growth_curve(plan.current_savings, plan.monthly_deposit, plan.annual_return_rate, plan.annual_inflation_rate, years)
    _growth_chart(curve, f"Growth over {years} years")

    st.markdown("### Year by year")
    rows = engine.yearly_breakdown(plan.current_savings, plan.monthly_deposit, plan.annual_return_rate, plan.annual_inflation_rate, years)
    st.dataframe(breakdown_frame(rows), use_container_width=True, hide_index=True)
