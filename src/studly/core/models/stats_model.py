# ♥♥─── Studly Statistics Models ──────────────────────────────────────────────
"""Read-side records produced by the metrics and trend projections."""

from __future__ import annotations

from uuid import UUID
from datetime import UTC, datetime

from pydantic import Field, computed_field

from .base_enums import TrendMode, TrendDirection
from .base_model import StudlyBaseModel
from .subject_model import SubjectColor


# ─── Metrics ──────────────────────────────────────────────────────────────────
class TaskMetrics(StudlyBaseModel):
    """Counts and weighted completion percentage of one task scope."""

    missed: int = 0
    completed: int = 0
    on_time: int = 0
    percent: int = 0
    total: int = 0


# ─── Trend ────────────────────────────────────────────────────────────────────
class TrendPoint(StudlyBaseModel):
    """One chart point: a month or a weekday bucket and its score."""

    label: str
    score: float
    period_start: datetime


class TrendSegment(StudlyBaseModel):
    """The line between two consecutive trend points."""

    start_label: str
    end_label: str
    start_score: float
    end_score: float

    @computed_field
    @property
    def direction(self) -> TrendDirection:
        if self.end_score > self.start_score:
            return TrendDirection.UP
        if self.end_score < self.start_score:
            return TrendDirection.DOWN
        return TrendDirection.FLAT


# ─── Subjects ─────────────────────────────────────────────────────────────────
class SubjectStat(StudlyBaseModel):
    """Scoped metrics of one subject plus the composite score it is ranked by."""

    subject_id: UUID = Field(alias="subjectID")
    title: str
    color: SubjectColor
    metrics: TaskMetrics
    completion_rate: float
    on_time_rate: float
    ranking_score: float
    monthly: list[TrendPoint] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.metrics.total


# ─── Checkpoint ───────────────────────────────────────────────────────────────
class StatsCheckpoint(StudlyBaseModel):
    """Epoch-seconds cutoff of the scoring window; 0 means all history is scored."""

    stats_reset_at: float = Field(default=0.0, ge=0.0)

    @property
    def is_active(self) -> bool:
        return self.stats_reset_at > 0

    @property
    def reset_date(self) -> datetime | None:
        if not self.is_active:
            return None
        return datetime.fromtimestamp(self.stats_reset_at, tz=UTC)


# ─── Report ───────────────────────────────────────────────────────────────────
class StatisticsReport(StudlyBaseModel):
    """Everything the statistics screen shows, computed from one snapshot."""

    generated_at: datetime
    checkpoint: StatsCheckpoint
    mode: TrendMode
    overall: TaskMetrics
    points: list[TrendPoint] = Field(default_factory=list)
    segments: list[TrendSegment] = Field(default_factory=list)
    subjects: list[SubjectStat] = Field(default_factory=list)
    summary: str
    subject_summary: str = ""
