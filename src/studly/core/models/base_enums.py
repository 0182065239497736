# ♥♥─── Model Enums ────────────────────────────────────────────────────
from __future__ import annotations

from enum import StrEnum

from dateutil.relativedelta import relativedelta


class TaskKind(StrEnum):
    """What a task represents."""

    HOMEWORK = "homework"
    REMINDER = "reminder"

    @property
    def label(self) -> str:
        return {TaskKind.HOMEWORK: "Homework", TaskKind.REMINDER: "Reminder"}[self]


class Recurrence(StrEnum):
    """The fixed cadences a task can repeat on."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def label(self) -> str:
        labels = {
            Recurrence.NONE: "Does not repeat",
            Recurrence.DAILY: "Every day",
            Recurrence.WEEKLY: "Every week",
            Recurrence.MONTHLY: "Every month",
            Recurrence.YEARLY: "Every year",
        }
        return labels[self]

    @property
    def occurrence_limit(self) -> int:
        """Hard cap on how many occurrences one expansion materializes."""
        limits = {
            Recurrence.NONE: 1,
            Recurrence.DAILY: 120,
            Recurrence.WEEKLY: 104,
            Recurrence.MONTHLY: 36,
            Recurrence.YEARLY: 8,
        }
        return limits[self]

    @property
    def step(self) -> relativedelta | None:
        """Distance between two consecutive occurrences, None for non-recurring tasks."""
        steps = {
            Recurrence.DAILY: relativedelta(days=1),
            Recurrence.WEEKLY: relativedelta(days=7),
            Recurrence.MONTHLY: relativedelta(months=1),
            Recurrence.YEARLY: relativedelta(years=1),
        }
        return steps.get(self)


class AttachmentKind(StrEnum):
    """Classification of a stored attachment blob."""

    PHOTO = "photo"
    AUDIO = "audio"
    FILE = "file"


class TrendDirection(StrEnum):
    """Direction of one segment between two consecutive trend points."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class TrendMode(StrEnum):
    """Bucketing used for the main statistics chart."""

    MONTH = "month"
    WEEK = "week"
