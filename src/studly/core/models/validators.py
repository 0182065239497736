# ♥♥─── Model Validators and Helpers ───────────────────────────────────
"""Validation functions and decode helpers for planner records."""

from __future__ import annotations

from typing import Any
from uuid import uuid4
import datetime

from studly.utils import DateTimeHandler, to_local

from .base_enums import Recurrence


# ─── Text Validators ──────────────────────────────────────────────────────────
def clean_text(value: Any) -> str:
    """Collapse surrounding whitespace and reject blank text."""
    cleaned = str(value or "").strip()
    if not cleaned:
        msg = "text must not be empty or blank"
        raise ValueError(msg)
    return cleaned


# ─── Datetime Validators ──────────────────────────────────────────────────────
def parse_datetime(value: Any) -> datetime.datetime | None:
    """Parse an ISO string, epoch number or datetime into an aware local datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return to_local(value)
    parsed = DateTimeHandler(timestamp=value).local_datetime
    if parsed is None:
        msg = f"unrecognised timestamp: {value!r}"
        raise ValueError(msg)
    return parsed


# ─── Stored Record Defaults ───────────────────────────────────────────────────
def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def apply_task_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Fill decode defaults that depend on other fields of a stored task.

    - ``createdAt`` falls back to ``dueDate`` for records written before it existed.
    - ``completedAt`` is dropped when the task is not done.
    - ``seriesID`` is cleared for one-off tasks; a repeating task without one starts its own series.

    :param data: Raw task mapping, keyed by alias or by field name.
    :returns: A new mapping with the defaults applied.
    """
    data = dict(data)
    if _first_present(data, "createdAt", "created_at") is None:
        due = _first_present(data, "dueDate", "due_date")
        if due is not None:
            data["created_at"] = due
            data.pop("createdAt", None)
    if not _first_present(data, "isDone", "is_done"):
        for key in ("completedAt", "completed_at"):
            if key in data:
                data[key] = None
    if Recurrence(_first_present(data, "recurrence") or Recurrence.NONE) == Recurrence.NONE:
        for key in ("seriesID", "series_id"):
            if key in data:
                data[key] = None
    elif _first_present(data, "seriesID", "series_id") is None:
        data["series_id"] = uuid4()
        data.pop("seriesID", None)
    return data
