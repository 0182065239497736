# ♥♥─── Utils Init ───────────────────────────────────────────────────────────────
from __future__ import annotations

from .json_handler import load_json, save_json, write_text_atomic, load_pydantic_model, save_pydantic_model
from .datetime_handler import (
    LOCAL_TZ,
    DateTimeHandler,
    to_local,
    week_days,
    local_date,
    month_label,
    is_same_day,
    start_of_day,
    start_of_week,
    weekday_label,
    start_of_month,
    with_current_time,
    truncate_to_minute,
)


__all__ = [
    "LOCAL_TZ",
    "DateTimeHandler",
    "is_same_day",
    "load_json",
    "load_pydantic_model",
    "local_date",
    "month_label",
    "save_json",
    "save_pydantic_model",
    "start_of_day",
    "start_of_month",
    "start_of_week",
    "to_local",
    "truncate_to_minute",
    "week_days",
    "weekday_label",
    "with_current_time",
    "write_text_atomic",
]
