import logging

from goaltime.core.config import load_settings
from goaltime.utils.logging import ContextFilter, GoalLogFormatter, format_kv, set_log_context

_KEYS = [
    "APP_ENV", "LOG_LEVEL", "DEFAULT_CURRENCY", "DEFAULT_RETURN_RATE", "DEFAULT_INFLATION_RATE",
    "DEFAULT_USER_AGE", "DEFAULT_YEARS", "INSIGHT_DISPLAY_LIMIT", "MILESTONE_EVERY_YEARS",
]


def _clear_env(monkeypatch):
    for k in _KEYS:
        monkeypatch.delenv(k, raising=False)


def test_defaults_without_config(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    s = load_settings(str(tmp_path / "missing.yaml"))
    assert s.env == "dev"
    assert s.default_currency == "USD"
    assert s.default_return_rate == 7.0
    assert s.insight_display_limit == 3


def test_yaml_then_env_override(tmp_path, monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    cfg = tmp_path / "config.yaml"
    cfg.write_text("defaults:\n  currency: gbp\n  return_rate: 5.5\nui:\n  insight_display_limit: 5\n", encoding="utf-8")

    s = load_settings(str(cfg))
    assert s.default_currency == "GBP"
    assert s.default_return_rate == 5.5
    assert s.insight_display_limit == 5

    monkeypatch.setenv("DEFAULT_CURRENCY", "eur")
    monkeypatch.setenv("DEFAULT_RETURN_RATE", "")  # empty means not set
    s = load_settings(str(cfg))
    assert s.default_currency == "EUR"
    assert s.default_return_rate == 5.5


def test_structured_log_line():
    set_log_context(session_id="s-1", goal_id="g-9", screen="my_goal")
    record = logging.LogRecord("goaltime.test", logging.INFO, __file__, 1, "health=%d", (87,), None)
    assert ContextFilter().filter(record)
    line = GoalLogFormatter().format(record)
    assert "level=INFO" in line
    assert "session_id=s-1 goal_id=g-9 screen=my_goal" in line
    assert line.endswith("msg=health=87")


def test_log_line_carries_sorted_kv_fields():
    set_log_context(session_id="s-2", goal_id="g-1", screen="strategies")
    record = logging.LogRecord("goaltime.tools", logging.INFO, __file__, 1, "projected plan", (), None)
    record.kv = {"years": 20, "fv": 613543.837, "status": "on_track"}
    ContextFilter().filter(record)
    line = GoalLogFormatter().format(record)
    assert "screen=strategies fv=613543.84 status=on_track years=20 msg=projected plan" in line


def test_format_kv_values():
    assert format_kv(None) == ""
    assert format_kv({"b": True, "a": "two words"}) == ' a="two words" b=true'
