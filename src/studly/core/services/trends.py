# ♥♥─── Trend Aggregator ─────────────────────────────────────────────────────────
"""Month and weekday buckets, segment directions and the subject ranking."""

from __future__ import annotations

from typing import TYPE_CHECKING
from collections import defaultdict

from studly.utils import to_local, week_days, month_label, is_same_day, weekday_label, start_of_month
from studly.core.models import TrendMode, TrendPoint, SubjectStat, TrendSegment

from .metrics import on_time_rate, ranking_score, compute_metrics, completion_rate


if TYPE_CHECKING:
    from uuid import UUID
    from datetime import datetime
    from collections.abc import Iterable, Sequence

    from studly.core.models import Task, Subject

MONTHLY_POINT_LIMIT: int = 6


def monthly_trend(tasks: Iterable[Task], now: datetime, limit: int = MONTHLY_POINT_LIMIT) -> list[TrendPoint]:
    """Score each calendar month that has tasks, from the current month onwards.

    Tasks due before the start of the current month are dropped; months without
    tasks produce no point. Points are chronological and only the last ``limit``
    are kept.
    """
    current_month = start_of_month(now)
    buckets: defaultdict[datetime, list[Task]] = defaultdict(list)
    for task in tasks:
        if to_local(task.due_date) >= current_month:
            buckets[start_of_month(task.due_date)].append(task)

    months = sorted(buckets)[-limit:] if limit > 0 else []
    return [TrendPoint(label=month_label(month), score=float(compute_metrics(buckets[month], now).percent), period_start=month) for month in months]


def weekly_trend(tasks: Iterable[Task], now: datetime) -> list[TrendPoint]:
    """Score each day of the current Monday-based week; empty days score 0 and are kept."""
    tasks = list(tasks)
    points: list[TrendPoint] = []
    for day in week_days(now):
        day_tasks = [task for task in tasks if is_same_day(task.due_date, day)]
        points.append(TrendPoint(label=weekday_label(day), score=float(compute_metrics(day_tasks, now).percent), period_start=day))
    return points


def trend_points(tasks: Iterable[Task], now: datetime, mode: TrendMode) -> list[TrendPoint]:
    if TrendMode(mode) == TrendMode.WEEK:
        return weekly_trend(tasks, now)
    return monthly_trend(tasks, now)


def trend_segments(points: Sequence[TrendPoint]) -> list[TrendSegment]:
    """Pair consecutive points; the segment direction follows from the two scores alone."""
    return [
        TrendSegment(start_label=start.label, end_label=end.label, start_score=start.score, end_score=end.score)
        for start, end in zip(points, points[1:], strict=False)
    ]


def rank_subjects(tasks: Iterable[Task], subjects: Iterable[Subject], now: datetime) -> list[SubjectStat]:
    """Build per-subject statistics, best first.

    Subjects without tasks in ``tasks`` are left out entirely. Ties on the
    ranking score are broken by the raw completed count, higher first.
    """
    grouped: defaultdict[UUID | None, list[Task]] = defaultdict(list)
    for task in tasks:
        grouped[task.subject_id].append(task)

    stats: list[SubjectStat] = []
    for subject in subjects:
        subject_tasks = grouped.get(subject.id)
        if not subject_tasks:
            continue
        metrics = compute_metrics(subject_tasks, now)
        stats.append(
            SubjectStat(
                subject_id=subject.id,
                title=subject.name,
                color=subject.color,
                metrics=metrics,
                completion_rate=completion_rate(metrics),
                on_time_rate=on_time_rate(metrics),
                ranking_score=ranking_score(metrics),
                monthly=monthly_trend(subject_tasks, now),
            ),
        )

    return sorted(stats, key=lambda stat: (stat.ranking_score, stat.metrics.completed), reverse=True)
