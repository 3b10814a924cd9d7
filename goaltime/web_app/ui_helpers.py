from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import streamlit as st

from goaltime.core.schemas import SavingsGoal, primary_goal
from goaltime.utils.savings_models import (
    AchievabilityStatus, GrowthPoint, HealthStatus, InsightColor, YearBreakdownRow,
)

# Presentation-owned lookup for engine color categories.
COLOR_HEX = {
    InsightColor.GROWTH_GREEN: "#0f9d58",
    InsightColor.NEON_BLUE: "#4285f4",
    InsightColor.ORANGE: "#f4b400",
    InsightColor.PURPLE: "#9c27b0",
    InsightColor.GOAL_GOLD: "#d4a017",
}

HEALTH_KIND = {
    HealthStatus.EXCELLENT: "ok",
    HealthStatus.GOOD: "ok",
    HealthStatus.FAIR: "info",
    HealthStatus.AT_RISK: "warn",
    HealthStatus.CRITICAL: "bad",
}

STATUS_KIND = {
    AchievabilityStatus.AHEAD_OF_SCHEDULE: "ok",
    AchievabilityStatus.ON_TRACK: "ok",
    AchievabilityStatus.SLIGHTLY_BEHIND: "warn",
    AchievabilityStatus.BEHIND: "warn",
    AchievabilityStatus.SIGNIFICANTLY_BEHIND: "bad",
}


def current_goal() -> SavingsGoal:
    """The goal every tab renders: the primary one in the session list."""
    goal = primary_goal(st.session_state["goals"])
    if goal is None:
        raise RuntimeError("session has no savings goal")
    return goal


def _badge(text: str, kind: str = "info") -> None:
    """Small colored badge using HTML."""
    color = {
        "ok": "#0f9d58",
        "warn": "#f4b400",
        "bad": "#db4437",
        "info": "#4285f4",
    }.get(kind, "#4285f4")
    st.markdown(
        f"""
        <span style="display:inline-block;padding:2px 10px;border-radius:999px;font-size:12px;background:{color};color:white;">
          {text}
        </span>
        """,
        unsafe_allow_html=True,
    )


def _insight_card(title: str, message: str, color: InsightColor) -> None:
    hex_color = COLOR_HEX.get(color, "#4285f4")
    st.markdown(
        f"""
        <div style="border-left:4px solid {hex_color};padding:6px 12px;margin-bottom:8px;">
          <strong>{title}</strong><br/><span style="font-size:13px;">{message}</span>
        </div>
        """,
        unsafe_allow_html=True,
    )


def growth_frame(curve: Sequence[GrowthPoint]) -> pd.DataFrame:
    df = pd.DataFrame([p.model_dump() for p in curve])
    if df.empty:
        return df
    return df.melt(
        id_vars=["year"],
        value_vars=["nominal_value", "real_value", "total_deposited"],
        var_name="series",
        value_name="value",
    )


def breakdown_frame(rows: Sequence[YearBreakdownRow]) -> pd.DataFrame:
    return pd.DataFrame([r.model_dump() for r in rows])


def _growth_chart(curve: Sequence[GrowthPoint], title: str) -> None:
    df = growth_frame(curve)
    if df.empty:
        st.caption("Projection chart unavailable for current inputs.")
        return
    fig = px.line(df, x="year", y="value", color="series", title=title)
    st.plotly_chart(fig, use_container_width=True)
