from __future__ import annotations

from .trends import trend_points, weekly_trend, monthly_trend, rank_subjects, trend_segments
from .metrics import is_missed, is_on_time, compute_metrics, weighted_percent
from .checkpoint import CheckpointManager, scope_tasks
from .data_vault import PlannerVault
from .recurrence import nth_occurrence, expand_template, occurrence_dates
from .statistics import summary_message, build_statistics_report
from .task_board import TaskBoard
from .reminder_service import ReminderRequest, ReminderService, InMemoryReminderService, build_reminder_request
from .attachment_storage import AttachmentStorage, FileAttachmentStorage, classify_file


__all__ = [
    "AttachmentStorage",
    "CheckpointManager",
    "FileAttachmentStorage",
    "InMemoryReminderService",
    "PlannerVault",
    "ReminderRequest",
    "ReminderService",
    "TaskBoard",
    "build_reminder_request",
    "build_statistics_report",
    "classify_file",
    "compute_metrics",
    "expand_template",
    "is_missed",
    "is_on_time",
    "monthly_trend",
    "nth_occurrence",
    "occurrence_dates",
    "rank_subjects",
    "scope_tasks",
    "summary_message",
    "trend_points",
    "trend_segments",
    "weekly_trend",
    "weighted_percent",
]
