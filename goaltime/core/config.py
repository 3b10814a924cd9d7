from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str

    default_currency: str
    default_return_rate: float
    default_inflation_rate: float
    default_user_age: int
    default_years: int

    insight_display_limit: int
    milestone_every_years: int


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.

    Settings only seed UI defaults and logging; engine results never depend on them.
    """
    load_dotenv()  # loads .env into env vars

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set".
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")

    default_currency = str(_env_or_cfg("DEFAULT_CURRENCY", "defaults.currency", "USD")).strip().upper()
    default_return_rate = float(_env_or_cfg("DEFAULT_RETURN_RATE", "defaults.return_rate", 7.0))
    default_inflation_rate = float(_env_or_cfg("DEFAULT_INFLATION_RATE", "defaults.inflation_rate", 3.0))
    default_user_age = int(_env_or_cfg("DEFAULT_USER_AGE", "defaults.user_age", 30))
    default_years = int(_env_or_cfg("DEFAULT_YEARS", "defaults.years", 20))

    insight_display_limit = int(_env_or_cfg("INSIGHT_DISPLAY_LIMIT", "ui.insight_display_limit", 3))
    milestone_every_years = int(_env_or_cfg("MILESTONE_EVERY_YEARS", "ui.milestone_every_years", 5))

    return Settings(
        env=env,
        log_level=log_level,
        default_currency=default_currency,
        default_return_rate=default_return_rate,
        default_inflation_rate=default_inflation_rate,
        default_user_age=default_user_age,
        default_years=default_years,
        insight_display_limit=insight_display_limit,
        milestone_every_years=milestone_every_years,
    )


# Optional convenience singleton
SETTINGS = load_settings()
