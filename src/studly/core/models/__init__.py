# ♥♥─── Studly Model Initialization ─────────────────────────────────────────────
"""Planner records: tasks, subjects, attachments and statistics results."""

from __future__ import annotations

from .base_enums import TaskKind, TrendMode, Recurrence, AttachmentKind, TrendDirection
from .base_model import StudlyBaseModel
from .task_model import Task, TaskCreate, TaskUpdate, Attachment
from .stats_model import TaskMetrics, TrendPoint, SubjectStat, TrendSegment, StatsCheckpoint, StatisticsReport
from .subject_model import Subject, SubjectColor


__all__ = [
    "Attachment",
    "AttachmentKind",
    "Recurrence",
    "StatisticsReport",
    "StatsCheckpoint",
    "StudlyBaseModel",
    "Subject",
    "SubjectColor",
    "SubjectStat",
    "Task",
    "TaskCreate",
    "TaskKind",
    "TaskMetrics",
    "TaskUpdate",
    "TrendDirection",
    "TrendMode",
    "TrendPoint",
    "TrendSegment",
]
