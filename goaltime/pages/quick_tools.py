import streamlit as st

from goaltime.utils import savings_engine as engine
from goaltime.utils.currency import format_currency
from goaltime.utils.logging import set_screen
from goaltime.web_app.ui_helpers import current_goal


def _rule_of_72() -> None:
    st.markdown("### Rule of 72")
    rate = st.slider("Annual return %", min_value=0.5, max_value=20.0, value=7.0, step=0.5)
    doubling = engine.doubling_years(rate)
    if doubling is None:
        st.caption("No growth, no doubling.")
        return
    st.metric("Years to double", f"~{doubling:.1f}")
    st.caption(" -> ".join(f"x{2 ** (i + 1)} at year {int(doubling * (i + 1))}" for i in range(4)))


def _inflation_adjuster(cur: str, inflation: float) -> None:
    st.markdown("### Inflation adjuster")
    cost = st.number_input("Cost today", min_value=0.0, value=10000.0, step=500.0)
    years = st.slider("In how many years", min_value=1, max_value=50, value=10)
    future_cost = engine.inflated_goal_cost(cost, inflation, years)
    st.metric("Future cost", format_currency(future_cost, cur))
    st.caption(f"{format_currency(cost, cur)} in {years} years buys what {format_currency(engine.real_value(cost, inflation, years), cur)} buys today.")


def _savings_rate(cur: str) -> None:
    st.markdown("### Savings rate")
    income = st.number_input("Monthly income", min_value=0.0, value=5000.0, step=100.0)
    saved = st.number_input("Monthly savings", min_value=0.0, value=1000.0, step=50.0)
    rate = engine.savings_rate(income, saved)
    st.metric("Savings rate", f"{rate:.0f}%", help=engine.savings_rate_label(rate))
    fi = engine.years_to_financial_independence(income, saved)
    if fi is not None:
        st.caption(f"~{int(fi)} years to financial independence (25x annual expenses at 7%).")
    else:
        st.caption(f"Not reachable within 50 years saving {format_currency(saved, cur)}/month.")


def render():
    set_screen("quick_tools")
    goal = current_goal()
    st.subheader("Quick tools")
    _rule_of_72()
    st.divider()
    _inflation_adjuster(goal.currency, goal.plan().annual_inflation_rate)
    st.divider()
    _savings_rate(goal.currency)
