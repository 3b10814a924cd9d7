import streamlit as st
import uuid
from datetime import datetime, timedelta, timezone

from goaltime.core.config import SETTINGS
from goaltime.core.schemas import LifeMilestone, SavingsGoal
from goaltime.utils.currency import CURRENCIES
from goaltime.utils.logging import setup_logging, set_log_context
from goaltime.utils.validators import validate_plan
from goaltime.web_app.ui_helpers import current_goal
from goaltime.pages import my_goal, time_machine, strategies, quick_tools

# Setup logging
setup_logging(SETTINGS.log_level)

st.set_page_config(page_title="GoalTime Savings Simulator", layout="wide")


# Session initialization
def _init_session() -> None:
    st.session_state.setdefault("session_id", str(uuid.uuid4()))
    st.session_state.setdefault(
        "goals",
        [
            SavingsGoal(
                name="My Goal",
                target_amount=100000.0,
                target_date=datetime.now(timezone.utc) + timedelta(days=365.25 * SETTINGS.default_years),
                current_savings=5000.0,
                monthly_deposit=500.0,
                expected_return=SETTINGS.default_return_rate,
                inflation_rate=SETTINGS.default_inflation_rate,
                currency=SETTINGS.default_currency,
                is_primary=True,
                user_age=SETTINGS.default_user_age,
            )
        ],
    )


_init_session()

# Sidebar for the goal
with st.sidebar:
    st.subheader("Goal")
    g = current_goal()
    set_log_context(session_id=st.session_state["session_id"], goal_id=g.id)

    codes = [c.code for c in CURRENCIES]
    g.name = st.text_input("Name", value=g.name)
    g.currency = st.selectbox("Currency", codes, index=codes.index(g.currency) if g.currency in codes else 0)
    g.target_amount = st.number_input("Target amount", min_value=0.0, value=float(g.target_amount), step=1000.0)
    years = st.slider("Years to target", min_value=1, max_value=50, value=min(50, int(round(g.years_to_target()))))
    g.target_date = datetime.now(timezone.utc) + timedelta(days=365.25 * years)
    g.current_savings = st.number_input("Current savings", min_value=0.0, value=float(g.current_savings), step=100.0)
    g.monthly_deposit = st.number_input("Monthly deposit", min_value=0.0, value=float(g.monthly_deposit), step=50.0)
    g.expected_return = st.slider("Expected return %", min_value=0.0, max_value=20.0, value=float(g.expected_return), step=0.5)
    g.inflation_rate = st.slider("Inflation %", min_value=0.0, max_value=15.0, value=float(g.inflation_rate), step=0.5)
    g.user_age = st.number_input("Your age", min_value=0, max_value=120, value=int(g.user_age), step=1)

    check = validate_plan(g.plan())
    for w in check.warnings:
        st.caption(w.message)

    with st.expander("Life milestones"):
        with st.form("add_milestone", clear_on_submit=True):
            m_name = st.text_input("Milestone")
            m_age = st.number_input("At age", min_value=0, max_value=120, value=int(g.user_age) + 10, step=1)
            m_amount = st.number_input("Amount needed", min_value=0.0, value=10000.0, step=1000.0)
            if st.form_submit_button("Add") and m_name:
                g.milestones.append(LifeMilestone(name=m_name, target_age=int(m_age), target_amount=m_amount))

    st.divider()
    st.caption(f"Session: {st.session_state['session_id']}")

# Main UI
st.title("GoalTime Savings Simulator")

tab_goal, tab_time, tab_strat, tab_tools = st.tabs(["My Goal", "Time Machine", "Strategies", "Quick Tools"])

with tab_goal:
    my_goal.render()

with tab_time:
    time_machine.render()

with tab_strat:
    strategies.render()

with tab_tools:
    quick_tools.render()
