"""Reminder requests and the in-memory reminder service."""

from __future__ import annotations

from uuid import uuid4

from studly.core.models import TaskKind
from studly.core.services import InMemoryReminderService, build_reminder_request
from tests.conftest import local


class TestReminderRequest:
    """Content derived from the task."""

    def test_homework_reminder(self, make_task):
        task = make_task("Essay", due_date=local(2026, 3, 20, 9, 15).replace(second=42, microsecond=7))
        request = build_reminder_request(task)
        assert request.identifier == task.id
        assert request.title == "Homework reminder"
        assert request.body == "Essay"
        assert request.fire_at == local(2026, 3, 20, 9, 15)
        assert not request.pinned

    def test_plain_reminder(self, make_task):
        task = make_task("Bring calculator", kind=TaskKind.REMINDER, is_pinned=True)
        request = build_reminder_request(task)
        assert request.title == "Reminder"
        assert request.pinned


class TestInMemoryReminderService:
    """Idempotent scheduling and silent cancellation."""

    def test_schedule_is_idempotent_per_task(self, reminders, make_task):
        task = make_task()
        reminders.schedule(task)
        reminders.schedule(task)
        assert list(reminders.pending) == [task.id]

    def test_cancel_unknown_is_a_no_op(self, reminders):
        reminders.cancel(uuid4())
        assert reminders.pending == {}

    def test_due_before(self, reminders, make_task, now):
        past = make_task("past", due_date=local(2026, 3, 1, 8))
        future = make_task("future", due_date=local(2026, 5, 1, 8))
        reminders.schedule(future)
        reminders.schedule(past)
        assert [r.body for r in reminders.due_before(now)] == ["past"]
