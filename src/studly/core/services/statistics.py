# ♥♥─── Statistics Report ────────────────────────────────────────────────────────
from __future__ import annotations

from typing import TYPE_CHECKING

from studly.utils import to_local
from studly.core.models import TrendMode, StatisticsReport
from studly.custom_logger import log, logged

from .trends import trend_points, rank_subjects, trend_segments
from .metrics import compute_metrics
from .checkpoint import scope_tasks


if TYPE_CHECKING:
    from datetime import datetime
    from collections.abc import Iterable, Sequence

    from studly.core.models import Task, Subject, StatsCheckpoint, SubjectStat

STRONG_PACE_PERCENT: int = 85
DECENT_PACE_PERCENT: int = 65

EMPTY_MESSAGE = "No data since the last reset yet. Add tasks and watch the trend."
STRONG_MESSAGE = "Great job, you are keeping a very strong pace."
DECENT_MESSAGE = "Decent pace. A few fewer misses and it will be excellent."
WEAK_MESSAGE = "Lots of misses so far. Focus on 2-3 tasks a day."
NO_SUBJECTS_MESSAGE = "Add tasks with subjects to see statistics for each subject."


def summary_message(has_tasks: bool, percent: int) -> str:
    if not has_tasks:
        return EMPTY_MESSAGE
    if percent >= STRONG_PACE_PERCENT:
        return STRONG_MESSAGE
    if percent >= DECENT_PACE_PERCENT:
        return DECENT_MESSAGE
    return WEAK_MESSAGE


def subject_summary(ranked: Sequence[SubjectStat]) -> str:
    """Describe the subject ranking in one sentence.

    :param ranked: Subject statistics, best first.
    :returns: A prompt when nothing is ranked, the lone subject's counts, or the best and weakest subjects.
    """
    if not ranked:
        return NO_SUBJECTS_MESSAGE
    best = ranked[0]
    if len(ranked) == 1:
        return f"Most consistent subject right now: {best.title}. Completed {best.metrics.completed} of {best.total}, {best.metrics.on_time} on time."
    worst = ranked[-1]
    return f"Best subject: {best.title} ({best.metrics.percent}%). Room to grow: {worst.title} ({worst.metrics.percent}%)."


@logged
def build_statistics_report(
    tasks: Iterable[Task],
    subjects: Iterable[Subject],
    checkpoint: StatsCheckpoint,
    now: datetime,
    mode: TrendMode = TrendMode.MONTH,
) -> StatisticsReport:
    """Compute everything the statistics screen shows from one snapshot.

    :param tasks: The full task collection; it is scoped by ``checkpoint`` first.
    :param subjects: Subjects to rank.
    :param checkpoint: The reset cutoff.
    :param now: The current instant.
    :param mode: Monthly or weekly trend.
    :returns: The report.
    """
    scoped = scope_tasks(tasks, checkpoint)
    overall = compute_metrics(scoped, now)
    points = trend_points(scoped, now, mode)
    ranked = rank_subjects(scoped, subjects, now)
    log.debug("Statistics over {} scoped task(s), {} trend point(s)", len(scoped), len(points))
    return StatisticsReport(
        generated_at=to_local(now),
        checkpoint=checkpoint,
        mode=TrendMode(mode),
        overall=overall,
        points=points,
        segments=trend_segments(points),
        subjects=ranked,
        summary=summary_message(bool(scoped), overall.percent),
        subject_summary=subject_summary(ranked),
    )
