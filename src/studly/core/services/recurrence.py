# ♥♥─── Recurrence Expander ──────────────────────────────────────────────────────
"""Materialize a task template into its dated occurrences."""

from __future__ import annotations

from uuid import uuid4
from typing import TYPE_CHECKING

from studly.utils import to_local
from studly.core.models import Task, Recurrence
from studly.custom_logger import log


if TYPE_CHECKING:
    from datetime import datetime
    from collections.abc import Iterator

    from studly.core.models import TaskCreate


def nth_occurrence(start: datetime, recurrence: Recurrence, index: int) -> datetime | None:
    """Due instant of occurrence ``index`` (0-based) of a series starting at ``start``.

    Calendar steps are measured from ``start`` so the day of month stays fixed;
    dateutil clamps to the last day of shorter months (Jan 31 -> Feb 28/29 -> Mar 31).

    :returns: The date, or None when the cadence has no step or the calendar overflows.
    """
    if index == 0:
        return to_local(start)
    step = recurrence.step
    if step is None:
        return None
    try:
        return to_local(to_local(start) + step * index)
    except (OverflowError, ValueError) as e:
        log.warning("Cannot step {} occurrence {} from {}: {}", recurrence, index, start, e)
        return None


def occurrence_dates(start: datetime, recurrence: Recurrence) -> Iterator[datetime]:
    """Yield up to ``recurrence.occurrence_limit`` due dates, stopping early if stepping fails."""
    for index in range(recurrence.occurrence_limit):
        due = nth_occurrence(start, recurrence, index)
        if due is None:
            return
        yield due


def expand_template(template: TaskCreate, now: datetime) -> list[Task]:
    """Turn a template into independent task records sharing one series id.

    :param template: The validated creation form.
    :param now: Creation instant recorded as ``created_at`` on every occurrence.
    :returns: One task for ``none``, otherwise one per occurrence up to the cadence cap.
    """
    recurrence = Recurrence(template.recurrence)
    series_id = None if recurrence == Recurrence.NONE else uuid4()

    tasks = [
        Task(
            title=template.title,
            kind=template.kind,
            due_date=due,
            created_at=now,
            subject_id=template.subject_id,
            is_pinned=template.is_pinned,
            recurrence=recurrence,
            series_id=series_id,
            attachments=[attachment.model_copy(deep=True) for attachment in template.attachments],
        )
        for due in occurrence_dates(template.due_date, recurrence)
    ]
    log.debug("Expanded '{}' ({}) into {} occurrence(s)", template.title, recurrence, len(tasks))
    return tasks
