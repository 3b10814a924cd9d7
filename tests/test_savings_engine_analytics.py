import pytest

from goaltime.utils import savings_engine as engine
from goaltime.utils.savings_engine import (
    DEFAULT_STRATEGIES, achievability_status, compare_strategies, future_value,
    generate_insights, health_score, incremental_impact,
)
from goaltime.utils.savings_models import AchievabilityStatus, HealthStatus, InsightColor, Strategy


# -------------------------
# Comparisons
# -------------------------

def test_incremental_impact_without_returns_has_no_compound_bonus():
    res = incremental_impact(1000, 200, 50, 0, 3, 10)
    assert res.extra_gain == pytest.approx(6000)
    assert res.total_extra_deposited == pytest.approx(6000)
    assert res.compound_bonus == pytest.approx(0)
    assert res.extra_gain_real == pytest.approx(6000 / 1.03 ** 10)


def test_incremental_impact_with_returns():
    res = incremental_impact(1000, 200, 50, 7, 2, 20)
    assert res.base_value == pytest.approx(future_value(1000, 200, 7, 20))
    assert res.boosted_value == pytest.approx(future_value(1000, 250, 7, 20))
    assert res.compound_bonus == pytest.approx(res.extra_gain - 50 * 20 * 12)
    assert res.compound_bonus > 0


def test_compare_strategies_preserves_order():
    strategies = [Strategy(name="High", annual_return=9), Strategy(name="None", annual_return=0), Strategy(name="Low", annual_return=3)]
    out = compare_strategies(1000, 100, 2, 10, strategies)
    assert [r.strategy.name for r in out] == ["High", "None", "Low"]
    assert out[1].future_value == 1000 + 100 * 120
    assert out[0].future_value == pytest.approx(future_value(1000, 100, 9, 10))
    assert out[2].real_value == pytest.approx(out[2].future_value / 1.02 ** 10)


def test_default_strategies():
    out = compare_strategies(0, 500, 3, 20)
    assert [r.strategy.name for r in out] == ["Conservative", "Moderate", "Aggressive"]
    assert [s.annual_return for s in DEFAULT_STRATEGIES] == [2.5, 6.0, 10.0]
    assert out[0].future_value < out[1].future_value < out[2].future_value


# -------------------------
# Health score
# -------------------------

@pytest.mark.parametrize("target,years", [(0, 10), (-5, 10), (10_000, 0), (10_000, -1)])
def test_health_score_without_goal(target, years):
    rep = health_score(5000, 500, target, 7, 3, years)
    assert rep.overall == 0
    assert rep.status == HealthStatus.CRITICAL
    assert "Set a savings goal" in rep.advice


def test_health_score_strong_plan():
    rep = health_score(0, 1000, 100_000, 8, 2, 20)
    assert rep.funding == 30
    assert rep.time_buffer == 25
    assert rep.inflation_shield == 20
    assert rep.compound_power == 25
    assert rep.overall == 100
    assert rep.status == HealthStatus.EXCELLENT
    assert "well-balanced" in rep.advice


def test_health_score_weak_plan():
    rep = health_score(0, 10, 100_000, 2, 3, 5)
    assert rep.time_buffer == 0  # unreachable within the cap
    assert rep.inflation_shield == pytest.approx(4)
    assert rep.funding < 15
    assert rep.status == HealthStatus.CRITICAL
    assert rep.advice.startswith("Consider increasing your monthly deposit")


def test_health_score_already_funded():
    rep = health_score(200_000, 0, 100_000, 5, 2, 10)
    assert rep.funding == 30
    assert rep.time_buffer == 25
    assert rep.inflation_shield == 15


def test_health_score_inflation_advice():
    rep = health_score(0, 1000, 50_000, 3, 3, 10)
    assert rep.funding >= 15 and rep.time_buffer >= 10
    assert rep.inflation_shield == 8
    assert "barely outpaces inflation" in rep.advice


@pytest.mark.parametrize(
    "args,advice",
    [
        ((0, 760, 12_000, 0, 0, 1), "Your timeline is tight. A small increase in deposits could add a safety buffer."),
        ((0, 1000, 12_000, 8, 2, 1), "Starting earlier or increasing deposits will unlock more compound growth."),
    ],
)
def test_health_score_advice_priority_chain(args, advice):
    rep = health_score(*args)
    assert rep.funding >= 15
    assert rep.advice == advice


def test_health_score_tight_timeline_components():
    rep = health_score(0, 760, 12_000, 0, 0, 1)
    assert rep.funding == pytest.approx(15.2)
    assert rep.time_buffer == pytest.approx(9.375)  # 12 of 16 months needed


def test_health_score_weak_compounding_components():
    rep = health_score(0, 1000, 12_000, 8, 2, 1)
    assert rep.time_buffer >= 10
    assert rep.inflation_shield == 20
    assert rep.compound_power == pytest.approx(1.11, abs=0.05)


def test_health_score_components_bounded():
    for args in [(0, 50, 1_000_000, 15, 1, 40), (10_000, 0, 20_000, 1, 10, 3), (500, 500, 5000, 0, 0, 1)]:
        rep = health_score(*args)
        assert 0 <= rep.funding <= 30
        assert 0 <= rep.time_buffer <= 25
        assert 0 <= rep.inflation_shield <= 20
        assert 0 <= rep.compound_power <= 25
        assert 0 <= rep.overall <= 100


@pytest.mark.parametrize(
    "overall,status",
    [(100, HealthStatus.EXCELLENT), (80, HealthStatus.EXCELLENT), (79.9, HealthStatus.GOOD), (60, HealthStatus.GOOD),
     (40, HealthStatus.FAIR), (20, HealthStatus.AT_RISK), (19.99, HealthStatus.CRITICAL), (0, HealthStatus.CRITICAL)],
)
def test_health_status_tiers(overall, status):
    assert engine._health_status(overall) == status


# -------------------------
# Achievability
# -------------------------

@pytest.mark.parametrize(
    "current,status",
    [(1300, AchievabilityStatus.AHEAD_OF_SCHEDULE), (1200, AchievabilityStatus.AHEAD_OF_SCHEDULE),
     (1000, AchievabilityStatus.ON_TRACK), (800, AchievabilityStatus.SLIGHTLY_BEHIND),
     (750, AchievabilityStatus.SLIGHTLY_BEHIND), (600, AchievabilityStatus.BEHIND),
     (500, AchievabilityStatus.BEHIND), (100, AchievabilityStatus.SIGNIFICANTLY_BEHIND),
     (0, AchievabilityStatus.SIGNIFICANTLY_BEHIND)],
)
def test_achievability_buckets(current, status):
    # zero return and zero deposit: projected value equals current savings
    res = achievability_status(current, 0, 1000, 0, 1)
    assert res.ratio == pytest.approx(current / 1000)
    assert res.status == status


def test_achievability_messages_embed_figures():
    assert "$300" in achievability_status(1300, 0, 1000, 0, 1).message
    slightly = achievability_status(800, 0, 1000, 0, 1).message
    assert "$200 short" in slightly and "$17/mo" in slightly
    assert "$33 more per month" in achievability_status(600, 0, 1000, 0, 1).message
    assert "€300" in achievability_status(1300, 0, 1000, 0, 1, currency="EUR").message


def test_achievability_without_target():
    res = achievability_status(5000, 100, 0, 5, 10)
    assert res.ratio == 0
    assert res.status == AchievabilityStatus.SIGNIFICANTLY_BEHIND
    assert res.status.label == "NEEDS ATTENTION"


# -------------------------
# Insights
# -------------------------

def test_insights_full_rule_set_sorted_by_priority():
    out = generate_insights(0, 500, 600_000, 7, 3, 30, 25)
    assert [i.id for i in out] == [
        "compound_power",
        "rule72", "early_start", "small_boost",
        "inflation_shield", "daily_earnings", "strong_saver",
    ]
    assert [i.priority for i in out] == sorted(i.priority for i in out)


def test_insights_inflation_warning_plan():
    out = generate_insights(1000, 0, 5000, 2, 3, 5, 40)
    assert [i.id for i in out] == ["inflation_warning", "rule72"]
    assert out[0].color == InsightColor.ORANGE
    assert "-1.0%" in out[0].message


def test_rule_of_72_insight():
    rule = next(i for i in generate_insights(1000, 100, 10_000, 6, 2, 10, 50) if i.id == "rule72")
    assert rule.title == "Money Doubles in ~12 Years"
    assert "every 12 years" in rule.message


def test_no_rule_of_72_without_returns():
    ids = [i.id for i in generate_insights(1000, 100, 10_000, 0, 0, 10, 50)]
    assert "rule72" not in ids
    assert "inflation_warning" in ids


def test_real_return_middle_band_emits_neither():
    ids = [i.id for i in generate_insights(1000, 100, 10_000, 5, 3, 10, 50)]
    assert "inflation_warning" not in ids
    assert "inflation_shield" not in ids


def test_early_start_message():
    early = next(i for i in generate_insights(0, 500, 100_000, 7, 3, 10, 30) if i.id == "early_start")
    assert "35 years until 65" in early.message
    assert "$500/month" in early.message


# -------------------------
# Quick tools
# -------------------------

def test_savings_rate_and_label():
    assert engine.savings_rate(5000, 1000) == pytest.approx(20)
    assert engine.savings_rate(0, 1000) == 0
    assert engine.savings_rate_label(35) == "Excellent"
    assert engine.savings_rate_label(20) == "Good"
    assert engine.savings_rate_label(10) == "Fair"
    assert engine.savings_rate_label(1) == "Needs Work"
    assert engine.savings_rate_label(0) == "None"


def test_years_to_financial_independence():
    fi = engine.years_to_financial_independence(5000, 1000)
    assert fi is not None and 29 < fi < 31
    assert engine.years_to_financial_independence(5000, 0) is None
    assert engine.years_to_financial_independence(1000, 1000) == 0
    assert engine.years_to_financial_independence(100_000, 10, 0) is None
