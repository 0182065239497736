"""Task board: series deletion, attachment cleanup, edits, toggles and queries."""

# pylint: disable=redefined-outer-name

from __future__ import annotations

from uuid import uuid4
from datetime import timedelta

import pytest
from pydantic import ValidationError

from studly.core.models import Subject, TaskKind, Recurrence, TaskCreate, TaskUpdate
from studly.core.services import TaskBoard
from tests.conftest import ids, local


# ============================================================================
# Creation
# ============================================================================


class TestCreate:
    """Creating tasks expands the template, schedules reminders and reports a change."""

    def test_create_adds_every_occurrence(self, board, reminders, changes, now):
        created = board.create(TaskCreate(title="Vocabulary", due_date=local(2026, 3, 20, 9), recurrence=Recurrence.WEEKLY))
        assert len(created) == 104
        assert ids(board.tasks) == ids(created)
        assert set(reminders.pending) == ids(created)
        assert changes.calls == 1
        assert all(task.created_at == now for task in created)

    def test_create_rejects_blank_title(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="   ", due_date=local(2026, 3, 20, 9))


# ============================================================================
# Deletion
# ============================================================================


class TestSeriesDeletion:
    """Single occurrence versus whole series removal."""

    def test_delete_one_of_three_leaves_two(self, board, make_series, reminders):
        series = make_series(3)
        board.add_tasks(series)
        board.delete_occurrence(series[1].id)
        remaining = board.series(series[0].series_id)
        assert [task.id for task in remaining] == [series[0].id, series[2].id]
        assert series[1].id not in reminders.pending

    def test_delete_series_leaves_none(self, board, make_series, make_task, reminders):
        series = make_series(3)
        other = make_task("Unrelated")
        board.add_tasks([*series, other])
        removed = board.delete_series(series[0].id)
        assert ids(removed) == ids(series)
        assert board.series(series[0].series_id) == []
        assert ids(board.tasks) == {other.id}
        assert set(reminders.pending) == {other.id}

    def test_delete_series_of_single_task_removes_only_it(self, board, make_task):
        single, other = make_task("One"), make_task("Two")
        board.add_tasks([single, other])
        assert board.delete_series(single.id) == [single]
        assert ids(board.tasks) == {other.id}

    def test_unknown_id_is_a_no_op(self, board, make_task, changes):
        board.add_tasks([make_task()])
        calls = changes.calls
        assert board.delete_occurrence(uuid4()) is None
        assert board.delete_series(uuid4()) == []
        assert len(board.tasks) == 1
        assert changes.calls == calls

    def test_delete_all(self, board, make_series, make_task, storage, stored_attachment, reminders):
        board.add_tasks([*make_series(2, attachments=[stored_attachment]), make_task()])
        removed = board.delete_all()
        assert len(removed) == 3
        assert board.tasks == []
        assert reminders.pending == {}
        assert not storage.resolve_location(stored_attachment).exists()


class TestAttachmentCleanup:
    """Stored blobs are deleted only once nothing references them."""

    def test_shared_blob_survives_partial_delete(self, board, make_series, storage, stored_attachment):
        first, second = make_series(2, attachments=[stored_attachment])
        board.add_tasks([first, second])
        location = storage.resolve_location(stored_attachment)

        board.delete_occurrence(first.id)
        assert location.exists()

        board.delete_occurrence(second.id)
        assert not location.exists()

    def test_series_delete_removes_shared_blob(self, board, make_series, storage, stored_attachment):
        series = make_series(3, attachments=[stored_attachment])
        board.add_tasks(series)
        board.delete_series(series[0].id)
        assert not storage.resolve_location(stored_attachment).exists()

    def test_blob_referenced_outside_the_series_survives(self, board, make_series, make_task, storage, stored_attachment):
        series = make_series(2, attachments=[stored_attachment])
        keeper = make_task("Keeper", attachments=[stored_attachment])
        board.add_tasks([*series, keeper])
        board.delete_series(series[0].id)
        assert storage.resolve_location(stored_attachment).exists()

    def test_missing_blob_does_not_break_deletion(self, board, make_task, storage, stored_attachment):
        storage.resolve_location(stored_attachment).unlink()
        task = make_task(attachments=[stored_attachment])
        board.add_tasks([task])
        assert board.delete_occurrence(task.id) == task
        assert board.tasks == []


# ============================================================================
# Editing
# ============================================================================


class TestEdit:
    """Edits touch one record; recurrence changes manage the series id."""

    def test_edit_does_not_propagate_to_siblings(self, board, make_series):
        series = make_series(3)
        board.add_tasks(series)
        edited = board.edit(series[0].id, TaskUpdate(title="Renamed", kind=TaskKind.REMINDER))
        assert edited.title == "Renamed"
        assert edited.kind == TaskKind.REMINDER
        assert [board.get(task.id).title for task in series[1:]] == ["Essay", "Essay"]
        assert edited.series_id == series[0].series_id

    def test_enabling_recurrence_assigns_series_without_expanding(self, board, make_task):
        task = make_task()
        board.add_tasks([task])
        edited = board.edit(task.id, TaskUpdate(recurrence=Recurrence.DAILY))
        assert edited.series_id is not None
        assert len(board.tasks) == 1

    def test_disabling_recurrence_clears_series(self, board, make_series):
        series = make_series(2)
        board.add_tasks(series)
        edited = board.edit(series[0].id, TaskUpdate(recurrence=Recurrence.NONE))
        assert edited.series_id is None
        assert board.get(series[1].id).series_id == series[1].series_id

    def test_changing_cadence_keeps_series(self, board, make_series):
        series = make_series(2)
        board.add_tasks(series)
        assert board.edit(series[0].id, TaskUpdate(recurrence=Recurrence.WEEKLY)).series_id == series[0].series_id

    def test_subject_can_be_cleared(self, board, make_task, math):
        task = make_task(subject_id=math.id)
        board.add_tasks([task])
        assert board.edit(task.id, TaskUpdate(subject_id=None)).subject_id is None

    def test_untouched_fields_survive(self, board, make_task, math, now):
        task = make_task(subject_id=math.id, is_done=True, completed_at=now)
        board.add_tasks([task])
        edited = board.edit(task.id, TaskUpdate(title="Only the title"))
        assert edited.subject_id == math.id
        assert edited.is_done
        assert edited.completed_at == now

    def test_edit_reschedules_reminder(self, board, make_task, reminders):
        task = make_task()
        board.add_tasks([task])
        new_due = local(2026, 4, 2, 17, 45)
        board.edit(task.id, TaskUpdate(due_date=new_due))
        assert reminders.pending[task.id].fire_at == new_due

    def test_dropped_attachment_deleted_unless_shared(self, board, make_series, storage, stored_attachment):
        extra = storage.save(b"second", "notes.jpg")
        first, second = make_series(2, attachments=[stored_attachment])
        board.add_tasks([first, second])
        board.edit(first.id, TaskUpdate(attachments=[extra]))
        assert storage.resolve_location(stored_attachment).exists()

        board.edit(second.id, TaskUpdate(attachments=[]))
        assert not storage.resolve_location(stored_attachment).exists()
        assert storage.resolve_location(extra).exists()

    def test_unknown_task(self, board):
        assert board.edit(uuid4(), TaskUpdate(title="x")) is None


# ============================================================================
# Toggles
# ============================================================================


class TestToggles:
    """Done and pinned flags."""

    def test_toggle_done_sets_and_clears_completion(self, board, make_task, now):
        task = make_task()
        board.add_tasks([task])
        done = board.toggle_done(task.id)
        assert done.is_done
        assert done.completed_at == now

        reopened = board.toggle_done(task.id)
        assert not reopened.is_done
        assert reopened.completed_at is None

    def test_toggle_done_twice_restores_original(self, board, make_task, now):
        task = make_task(is_done=True, completed_at=now - timedelta(days=2))
        board.add_tasks([task])
        board.toggle_done(task.id, now)
        restored = board.toggle_done(task.id, now)
        assert restored.is_done
        assert restored.completed_at == now

        original_open = make_task()
        board.add_tasks([original_open])
        board.toggle_done(original_open.id)
        again = board.toggle_done(original_open.id)
        assert (again.is_done, again.completed_at) == (original_open.is_done, original_open.completed_at)

    def test_toggle_pinned_reschedules_reminder(self, board, make_task, reminders):
        task = make_task()
        board.add_tasks([task])
        assert not reminders.pending[task.id].pinned
        board.toggle_pinned(task.id)
        assert reminders.pending[task.id].pinned
        assert board.get(task.id).is_pinned

    def test_toggle_unknown(self, board):
        assert board.toggle_done(uuid4()) is None
        assert board.toggle_pinned(uuid4()) is None


# ============================================================================
# Queries and subjects
# ============================================================================


class TestQueries:
    """Day lists, indicators and search."""

    def test_tasks_for_day_sorted(self, board, make_task):
        late = make_task("late", due_date=local(2026, 3, 20, 18))
        early = make_task("early", due_date=local(2026, 3, 20, 8))
        board.add_tasks([late, make_task("other day", due_date=local(2026, 3, 21, 8)), early])
        assert [task.title for task in board.tasks_for_day(local(2026, 3, 20, 0).date())] == ["early", "late"]

    def test_day_indicators_distinct_and_capped(self, make_task, math, physics):
        chemistry = Subject(name="Chemistry")
        board = TaskBoard(subjects=[math, physics, chemistry])
        day = local(2026, 3, 20)
        board.add_tasks(
            [
                make_task(due_date=day.replace(hour=8), subject_id=math.id),
                make_task(due_date=day.replace(hour=9), subject_id=math.id),
                make_task(due_date=day.replace(hour=10)),
                make_task(due_date=day.replace(hour=11), subject_id=uuid4()),
                make_task(due_date=day.replace(hour=12), subject_id=physics.id),
                make_task(due_date=day.replace(hour=13), subject_id=chemistry.id),
            ],
        )
        assert board.day_indicators(day) == [math.color, None, physics.color]

    def test_search_fields(self, make_task, math):
        board = TaskBoard(subjects=[math])
        essay = make_task("Essay on Tolstoy", due_date=local(2026, 3, 20, 9, 5))
        algebra = make_task("Worksheet", due_date=local(2026, 3, 23, 16), subject_id=math.id)
        board.add_tasks([algebra, essay])
        assert board.search("  TOLSTOY ") == [essay]
        assert board.search("mathem") == [algebra]
        assert board.search("09:05") == [essay]
        assert board.search("friday") == [essay]
        assert board.search("march") == [essay, algebra]

    def test_blank_search_returns_nothing(self, board, make_task):
        board.add_tasks([make_task()])
        assert board.search("   ") == []


class TestSubjects:
    """Subjects are referenced, never owned, by tasks."""

    def test_add_subject_trims_and_defaults_color(self, board, changes):
        subject = board.add_subject("  Biology ")
        assert subject.name == "Biology"
        assert subject.color.to_hex() == "#408ff2"
        assert changes.calls == 1

    def test_blank_subject_rejected(self, board):
        with pytest.raises(ValidationError):
            board.add_subject("  ")

    def test_delete_subject_does_not_cascade(self, board, make_task):
        subject = board.add_subject("History")
        task = make_task(subject_id=subject.id)
        board.add_tasks([task])
        assert board.delete_subject(subject.id) == subject
        assert board.get(task.id).subject_id == subject.id
        assert board.subject_for(board.get(task.id)) is None
        assert board.day_indicators(task.due_date) == [None]
        assert board.delete_subject(subject.id) is None
