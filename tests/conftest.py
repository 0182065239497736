"""Shared fixtures for the planner test suite.

Every fixture works on a fixed local instant and on ``tmp_path`` so no test
touches the real clock, OS notifications or the user's data directory.
"""

# pylint: disable=redefined-outer-name

from __future__ import annotations

from uuid import UUID, uuid4
from typing import Any
from datetime import datetime
from collections.abc import Callable

import pytest

from studly.utils import LOCAL_TZ
from studly.core.models import Task, Subject, Attachment, SubjectColor
from studly.core.services import TaskBoard, FileAttachmentStorage, InMemoryReminderService
from studly.core.repositories import TaskVault, SubjectVault, DebouncedSaver, CheckpointVault


# ============================================================================
# Clock
# ============================================================================


@pytest.fixture
def now() -> datetime:
    """Wednesday 18 March 2026, 14:30:45 local time."""
    return datetime(2026, 3, 18, 14, 30, 45, tzinfo=LOCAL_TZ)


def local(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=LOCAL_TZ)


# ============================================================================
# Records
# ============================================================================


@pytest.fixture
def make_task(now: datetime) -> Callable[..., Task]:
    """Factory building a task due one hour after ``now`` unless overridden."""

    def _make(title: str = "Essay", **overrides: Any) -> Task:
        data: dict[str, Any] = {"title": title, "due_date": now.replace(hour=15, minute=30, second=0), "created_at": now}
        data.update(overrides)
        return Task(**data)

    return _make


@pytest.fixture
def make_series(make_task: Callable[..., Task]) -> Callable[..., list[Task]]:
    """Factory building ``count`` daily occurrences sharing one series id."""

    def _make(count: int = 3, start: datetime | None = None, **overrides: Any) -> list[Task]:
        series_id = uuid4()
        first = start or local(2026, 3, 20, 9)
        return [
            make_task(
                due_date=first.replace(day=first.day + offset),
                recurrence="daily",
                series_id=series_id,
                **overrides,
            )
            for offset in range(count)
        ]

    return _make


@pytest.fixture
def math() -> Subject:
    return Subject(name="Mathematics", color=SubjectColor.from_hex("#ff0000"))


@pytest.fixture
def physics() -> Subject:
    return Subject(name="Physics", color=SubjectColor.from_hex("#00ff00"))


# ============================================================================
# Collaborators
# ============================================================================


@pytest.fixture
def reminders() -> InMemoryReminderService:
    return InMemoryReminderService()


@pytest.fixture
def storage(tmp_path) -> FileAttachmentStorage:
    return FileAttachmentStorage(tmp_path / "attachments")


@pytest.fixture
def stored_attachment(storage: FileAttachmentStorage) -> Attachment:
    """A photo that really exists in ``storage``."""
    return storage.save(b"\x89PNG fake image", "board.png")


class ChangeCounter:
    """Callable recording how many times the board reported a change."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def changes() -> ChangeCounter:
    return ChangeCounter()


@pytest.fixture
def board(reminders, storage, changes, now) -> TaskBoard:
    """Empty board wired to in-memory reminders, tmp storage and a fixed clock."""
    return TaskBoard(reminders=reminders, attachments=storage, on_change=changes, clock=lambda: now)


# ============================================================================
# Persistence
# ============================================================================


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def task_vault(data_dir) -> TaskVault:
    return TaskVault(file_path=data_dir / "tasks.json")


@pytest.fixture
def subject_vault(data_dir) -> SubjectVault:
    return SubjectVault(file_path=data_dir / "subjects.json")


@pytest.fixture
def checkpoint_vault(data_dir) -> CheckpointVault:
    return CheckpointVault(file_path=data_dir / "state.json")


@pytest.fixture
def saver() -> DebouncedSaver:
    instance = DebouncedSaver(delay=0.05, name="test-saver")
    yield instance
    instance.cancel()


def ids(tasks: list[Task]) -> set[UUID]:
    return {task.id for task in tasks}
