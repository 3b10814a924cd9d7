from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

# Per-session context stamped on every record
session_id_var: ContextVar[str] = ContextVar("session_id", default="-")
goal_id_var: ContextVar[str] = ContextVar("goal_id", default="-")
screen_var: ContextVar[str] = ContextVar("screen", default="-")


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = session_id_var.get()
        record.goal_id = goal_id_var.get()
        record.screen = screen_var.get()
        return True


def _kv_value(v: Any) -> str:
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, float):
        return f"{v:.2f}"
    text = str(v)
    return f'"{text}"' if " " in text else text


def format_kv(fields: Optional[Mapping[str, Any]]) -> str:
    """Sorted ` key=value` pairs; money-like floats at two decimals, spaced strings quoted."""
    if not fields:
        return ""
    return "".join(f" {k}={_kv_value(fields[k])}" for k in sorted(fields))


class GoalLogFormatter(logging.Formatter):
    """
    One line per record:

        <ts> level=.. logger=.. session_id=.. goal_id=.. screen=.. [k=v ...] msg=..

    Projection figures go in `extra={"kv": {...}}` so they stay greppable.
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
        line = (
            f"{ts} level={record.levelname} logger={record.name} "
            f"session_id={getattr(record, 'session_id', '-')} goal_id={getattr(record, 'goal_id', '-')} "
            f"screen={getattr(record, 'screen', '-')}"
            f"{format_kv(getattr(record, 'kv', None))} "
            f"msg={record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Streamlit reruns the script; replace rather than stack handlers
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(lvl)
    handler.addFilter(ContextFilter())
    handler.setFormatter(GoalLogFormatter())

    root.addHandler(handler)


def set_log_context(*, session_id: str, goal_id: Optional[str] = None, screen: Optional[str] = None) -> None:
    session_id_var.set(session_id)
    if goal_id is not None:
        goal_id_var.set(str(goal_id))
    if screen is not None:
        screen_var.set(screen)


def set_screen(screen_name: str) -> None:
    screen_var.set(screen_name)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
