# ♥♥─── Metrics Engine ───────────────────────────────────────────────────────────
"""Completion, on-time and missed counts plus the weighted completion percentage.

Every function here is pure: the task snapshot and the current instant come in
as arguments, nothing reads the clock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from studly.utils import to_local, is_same_day
from studly.core.models import TaskMetrics


if TYPE_CHECKING:
    from datetime import datetime
    from collections.abc import Iterable

    from studly.core.models import Task

ON_TIME_BONUS_POINTS: float = 12.0
MAX_PERCENT: float = 100.0
COMPLETION_WEIGHT: float = 0.72
ON_TIME_WEIGHT: float = 0.28


def is_on_time(task: Task) -> bool:
    """A done task counts as on time when it was completed on the calendar day it was created.

    This compares against ``created_at``, not ``due_date``.
    """
    if not task.is_done or task.completed_at is None:
        return False
    return is_same_day(task.completed_at, task.created_at)


def is_missed(task: Task, now: datetime) -> bool:
    return not task.is_done and to_local(task.due_date) < to_local(now)


def weighted_percent(total: int, completed: int, on_time: int) -> int:
    """Completion ratio plus up to 12 bonus points for the on-time share, capped at 100.

    >>> weighted_percent(4, 2, 1)
    56
    """
    if total == 0:
        return 0
    base = MAX_PERCENT * completed / total
    bonus_share = on_time / completed if completed else 0.0
    bonus = bonus_share * ON_TIME_BONUS_POINTS
    return int(round_half_away(min(MAX_PERCENT, base + bonus)))


def round_half_away(value: float) -> float:
    """Round to the nearest integer with halves going away from zero (``round`` would go to even)."""
    return float(int(value + 0.5)) if value >= 0 else -float(int(-value + 0.5))


def compute_metrics(tasks: Iterable[Task], now: datetime) -> TaskMetrics:
    """Score a task snapshot.

    :param tasks: The tasks in scope.
    :param now: Instant used to decide which open tasks are already missed.
    :returns: Missed, completed, on-time counts, total and the weighted percent.
    """
    tasks = list(tasks)
    completed = sum(1 for task in tasks if task.is_done)
    on_time = sum(1 for task in tasks if is_on_time(task))
    missed = sum(1 for task in tasks if is_missed(task, now))
    return TaskMetrics(
        missed=missed,
        completed=completed,
        on_time=on_time,
        percent=weighted_percent(len(tasks), completed, on_time),
        total=len(tasks),
    )


def completion_rate(metrics: TaskMetrics) -> float:
    return metrics.completed / max(metrics.total, 1)


def on_time_rate(metrics: TaskMetrics) -> float:
    return metrics.on_time / max(metrics.completed, 1)


def ranking_score(metrics: TaskMetrics) -> float:
    """Composite score subjects are ranked by: 72% completion rate, 28% on-time rate."""
    return COMPLETION_WEIGHT * completion_rate(metrics) + ON_TIME_WEIGHT * on_time_rate(metrics)
