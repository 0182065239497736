# ♥♥─── Statistics View ──────────────────────────────────────────────────────────
"""Render planner data with rich tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from rich.table import Table
from rich.console import Group

from studly.utils import to_local
from studly.core.models import TaskKind, TrendDirection


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from rich.console import RenderableType

    from studly.core.models import Task, Subject, SubjectColor, StatisticsReport

TREND_ARROWS: dict[TrendDirection, str] = {
    TrendDirection.UP: "↗",
    TrendDirection.DOWN: "↘",
    TrendDirection.FLAT: "→",
}
NO_SUBJECT_DOT = "[muted]●[/muted]"


def color_dot(color: SubjectColor | None) -> str:
    if color is None:
        return NO_SUBJECT_DOT
    return f"[{color.to_hex()}]●[/]"


def _overall_table(report: StatisticsReport) -> Table:
    grid = Table(expand=False, padding=(0, 2), show_header=False, show_lines=False)
    grid.add_column(justify="right")
    grid.add_column(justify="left")
    overall = report.overall
    grid.add_row("[primary]Completion[/primary]", f"[b]{overall.percent}%[/b]")
    grid.add_row("[success]Completed[/success]", str(overall.completed))
    grid.add_row("[success]On time[/success]", str(overall.on_time))
    grid.add_row("[error]Missed[/error]", str(overall.missed))
    grid.add_row("[muted]Tasks[/muted]", str(overall.total))
    if report.checkpoint.reset_date is not None:
        grid.add_row("[muted]Since[/muted]", to_local(report.checkpoint.reset_date).strftime("%d %b %Y, %H:%M"))
    return grid


def _trend_table(report: StatisticsReport) -> Table:
    table = Table(title=f"Trend ({report.mode})", header_style="table.header", expand=False)
    table.add_column("Period")
    table.add_column("Score", justify="right")
    table.add_column("", justify="center")

    directions = [segment.direction for segment in report.segments]
    for index, point in enumerate(report.points):
        arrow = ""
        if index > 0:
            direction = directions[index - 1]
            arrow = f"[trend.{direction}]{TREND_ARROWS[direction]}[/trend.{direction}]"
        table.add_row(point.label, f"{point.score:.0f}%", arrow)
    return table


def _subjects_table(report: StatisticsReport) -> Table:
    table = Table(title="Subjects", caption=report.subject_summary, header_style="table.header", expand=False)
    table.add_column("#", justify="right")
    table.add_column("Subject")
    table.add_column("Done", justify="right")
    table.add_column("On time", justify="right")
    table.add_column("Missed", justify="right")
    table.add_column("Score", justify="right")
    for rank, stat in enumerate(report.subjects, start=1):
        table.add_row(
            str(rank),
            f"{color_dot(stat.color)} {stat.title}",
            f"{stat.metrics.completed}/{stat.total}",
            f"{stat.on_time_rate:.0%}",
            str(stat.metrics.missed),
            f"{stat.ranking_score * 100:.0f}",
        )
    return table


def render_report(report: StatisticsReport) -> RenderableType:
    """Build the statistics screen: overall badges, the trend and the subject ranking."""
    parts: list[RenderableType] = [_overall_table(report), Text(report.summary, style="muted")]
    if report.points:
        parts.append(_trend_table(report))
    if report.subjects:
        parts.append(_subjects_table(report))
    else:
        parts.append(Text(report.subject_summary, style="muted"))
    return Group(*parts)


def render_tasks(tasks: Iterable[Task], subject_for: Callable[[Task], Subject | None], title: str = "Tasks") -> Table:
    """List tasks with their due time, kind, subject and state."""
    table = Table(title=title, header_style="table.header", expand=False)
    table.add_column("Due")
    table.add_column("Title")
    table.add_column("Kind")
    table.add_column("Subject")
    table.add_column("", justify="center")
    for task in tasks:
        subject = subject_for(task)
        kind_style = "homework" if task.kind == TaskKind.HOMEWORK else "reminder"
        title_text = f"[pinned]★[/pinned] {task.title}" if task.is_pinned else task.title
        table.add_row(
            to_local(task.due_date).strftime("%d %b %Y %H:%M"),
            title_text,
            f"[{kind_style}]{task.kind.label}[/{kind_style}]",
            f"{color_dot(subject.color if subject else None)} {subject.name if subject else '-'}",
            "[success]✓[/success]" if task.is_done else "",
        )
    return table
