# ♥♥─── Reminder Service ─────────────────────────────────────────────────────────
"""Contract of the local reminder collaborator and an in-process implementation."""

from __future__ import annotations

from uuid import UUID
from typing import Protocol
from datetime import datetime

from studly.utils import truncate_to_minute
from studly.core.models import Task, TaskKind, StudlyBaseModel
from studly.custom_logger import log


# ─── Contract ─────────────────────────────────────────────────────────────────
class ReminderService(Protocol):
    """Schedules and cancels one pending reminder per task id."""

    def schedule(self, task: Task) -> None: ...

    def cancel(self, task_id: UUID) -> None: ...


class ReminderRequest(StudlyBaseModel):
    """What would be handed to the OS notification centre for one task."""

    identifier: UUID
    title: str
    body: str
    fire_at: datetime
    pinned: bool = False


def build_reminder_request(task: Task) -> ReminderRequest:
    """Describe the reminder of ``task``: fires at its due minute, titled by kind."""
    title = "Homework reminder" if task.kind == TaskKind.HOMEWORK else "Reminder"
    return ReminderRequest(
        identifier=task.id,
        title=title,
        body=task.title,
        fire_at=truncate_to_minute(task.due_date),
        pinned=task.is_pinned,
    )


# ─── In-Memory Implementation ─────────────────────────────────────────────────
class InMemoryReminderService:
    """Keeps pending reminders in a dict keyed by task id.

    Scheduling the same task twice replaces the earlier request. Past due
    dates are accepted; deciding whether to fire them is not this layer's job.
    """

    def __init__(self) -> None:
        self.pending: dict[UUID, ReminderRequest] = {}

    def schedule(self, task: Task) -> None:
        request = build_reminder_request(task)
        self.pending[task.id] = request
        log.debug("Reminder scheduled for {} at {}", task.id, request.fire_at.isoformat())

    def cancel(self, task_id: UUID) -> None:
        if self.pending.pop(task_id, None) is not None:
            log.debug("Reminder cancelled for {}", task_id)

    def due_before(self, instant: datetime) -> list[ReminderRequest]:
        """Pending requests that should have fired by ``instant``, earliest first."""
        return sorted((r for r in self.pending.values() if r.fire_at <= instant), key=lambda r: r.fire_at)
