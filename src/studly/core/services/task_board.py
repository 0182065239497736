# ♥♥─── Task Board ───────────────────────────────────────────────────────────────
"""The in-memory task and subject collections and every mutation applied to them.

Each mutation computes the surviving collection first, runs its side effects
(blob deletion, reminder cancellation) and then swaps the collection in one
assignment, so readers only ever see the state before or after it.
"""

from __future__ import annotations

from uuid import UUID, uuid4
from typing import TYPE_CHECKING, Any
from datetime import datetime

from studly.utils import to_local, local_date
from studly.core.models import Task, Subject, Recurrence, SubjectColor
from studly.custom_logger import log

from .recurrence import expand_template


if TYPE_CHECKING:
    from datetime import date
    from collections.abc import Callable, Iterable, Sequence

    from studly.core.models import TaskCreate, TaskUpdate, Attachment

    from .reminder_service import ReminderService
    from .attachment_storage import AttachmentStorage

MAX_DAY_INDICATORS: int = 3

DATE_TIME_FORMAT = "%d %B %Y, %H:%M"
DAY_HEADER_FORMAT = "%A, %d %B"
TIME_FORMAT = "%H:%M"


def unreferenced_attachments(removed: Iterable[Attachment], remaining: Sequence[Task]) -> list[Attachment]:
    """Attachments whose stored file no task in ``remaining`` points at, one per stored file."""
    seen: set[str] = set()
    orphans: list[Attachment] = []
    for attachment in removed:
        name = attachment.stored_file_name
        if name in seen:
            continue
        seen.add(name)
        if not any(task.references_file(name) for task in remaining):
            orphans.append(attachment)
    return orphans


def search_haystack(task: Task, subject: Subject | None) -> list[str]:
    """Lower-cased texts a search query is matched against."""
    due = to_local(task.due_date)
    texts = [task.title, due.strftime(DATE_TIME_FORMAT), due.strftime(DAY_HEADER_FORMAT), due.strftime(TIME_FORMAT)]
    if subject is not None:
        texts.append(subject.name)
    return [text.lower() for text in texts]


class TaskBoard:
    """Owns the task and subject lists and applies create, edit, toggle and delete to them.

    :param tasks: Initial tasks, typically loaded from disk.
    :param subjects: Initial subjects.
    :param reminders: Collaborator that schedules and cancels reminders.
    :param attachments: Collaborator that deletes attachment blobs; None skips blob cleanup.
    :param on_change: Called after every mutation (used to request a save).
    :param clock: Source of the current instant.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        subjects: Iterable[Subject] = (),
        *,
        reminders: ReminderService | None = None,
        attachments: AttachmentStorage | None = None,
        on_change: Callable[[], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._tasks: list[Task] = list(tasks)
        self._subjects: list[Subject] = list(subjects)
        self.reminders = reminders
        self.attachments = attachments
        self.on_change = on_change
        self.clock = clock or (lambda: datetime.now().astimezone())

    # ─── Collections ──────────────────────────────────────────────────────────
    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def subjects(self) -> list[Subject]:
        return list(self._subjects)

    def get(self, task_id: UUID) -> Task | None:
        return next((task for task in self._tasks if task.id == task_id), None)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _replace(self, updated: Task) -> None:
        self._tasks = [updated if task.id == updated.id else task for task in self._tasks]

    # ─── Creation ─────────────────────────────────────────────────────────────
    def create(self, template: TaskCreate, now: datetime | None = None) -> list[Task]:
        """Expand a template into its occurrences, add them and schedule their reminders.

        :param template: The creation form.
        :param now: Creation instant; the board clock when omitted.
        :returns: The new tasks, in due order.
        """
        created = expand_template(template, now or self.clock())
        self.add_tasks(created)
        log.info("Created {} task(s) '{}'", len(created), template.title)
        return created

    def add_tasks(self, tasks: Iterable[Task]) -> None:
        """Append already built tasks and schedule a reminder for each."""
        new_tasks = list(tasks)
        if not new_tasks:
            return
        self._tasks = [*self._tasks, *new_tasks]
        if self.reminders is not None:
            for task in new_tasks:
                self.reminders.schedule(task)
        self._changed()

    # ─── Deletion ─────────────────────────────────────────────────────────────
    def delete_occurrence(self, task_id: UUID) -> Task | None:
        """Remove exactly one task.

        :returns: The removed task, or None for an unknown id.
        """
        task = self.get(task_id)
        if task is None:
            log.debug("delete_occurrence: unknown task {}", task_id)
            return None
        self._remove([task])
        log.info("Deleted task '{}'", task.title)
        return task

    def delete_series(self, task_id: UUID) -> list[Task]:
        """Remove every task sharing the series of ``task_id``.

        A task without a series is removed on its own.

        :returns: The removed tasks, empty for an unknown id.
        """
        task = self.get(task_id)
        if task is None:
            log.debug("delete_series: unknown task {}", task_id)
            return []
        if task.series_id is None:
            self._remove([task])
            return [task]

        members = [candidate for candidate in self._tasks if candidate.series_id == task.series_id]
        self._remove(members)
        log.info("Deleted series {} ({} task(s))", task.series_id, len(members))
        return members

    def delete_all(self) -> list[Task]:
        """Remove every task, every stored blob they reference and every reminder."""
        removed = list(self._tasks)
        if removed:
            self._remove(removed)
            log.info("Deleted all {} task(s)", len(removed))
        return removed

    def _remove(self, doomed: Sequence[Task]) -> None:
        doomed_ids = {task.id for task in doomed}
        remaining = [task for task in self._tasks if task.id not in doomed_ids]

        removed_attachments = [attachment for task in doomed for attachment in task.attachments]
        self._delete_blobs(unreferenced_attachments(removed_attachments, remaining))
        if self.reminders is not None:
            for task in doomed:
                self.reminders.cancel(task.id)

        self._tasks = remaining
        self._changed()

    def _delete_blobs(self, orphans: Iterable[Attachment]) -> None:
        if self.attachments is None:
            return
        for attachment in orphans:
            self.attachments.delete(attachment)

    # ─── Editing ──────────────────────────────────────────────────────────────
    def edit(self, task_id: UUID, update: TaskUpdate) -> Task | None:
        """Apply a partial edit to one task only; siblings in its series are untouched.

        Switching recurrence on assigns a new series id when the task had none;
        switching it off clears the series id. Attachments dropped by the edit
        are deleted unless another task still references their stored file.

        :returns: The edited task, or None for an unknown id.
        """
        task = self.get(task_id)
        if task is None:
            log.debug("edit: unknown task {}", task_id)
            return None

        changes: dict[str, Any] = {name: value for name, value in update.changes().items() if value is not None or name == "subject_id"}
        recurrence = Recurrence(changes.get("recurrence", task.recurrence))
        if recurrence == Recurrence.NONE:
            changes["series_id"] = None
        elif task.series_id is None:
            changes["series_id"] = uuid4()

        updated = Task.model_validate({**task.model_dump(), **changes})

        kept = {attachment.stored_file_name for attachment in updated.attachments}
        dropped = [attachment for attachment in task.attachments if attachment.stored_file_name not in kept]
        others = [candidate for candidate in self._tasks if candidate.id != task.id]
        self._delete_blobs(unreferenced_attachments(dropped, others))

        self._replace(updated)
        self._reschedule(updated)
        self._changed()
        log.info("Edited task '{}' ({})", updated.title, ", ".join(sorted(changes)) or "no changes")
        return updated

    def toggle_done(self, task_id: UUID, now: datetime | None = None) -> Task | None:
        """Flip the done flag; completion time is set when done and cleared when reopened."""
        task = self.get(task_id)
        if task is None:
            return None
        is_done = not task.is_done
        updated = Task.model_validate({**task.model_dump(), "is_done": is_done, "completed_at": (now or self.clock()) if is_done else None})
        self._replace(updated)
        self._changed()
        log.debug("Task '{}' marked {}", updated.title, "done" if is_done else "open")
        return updated

    def toggle_pinned(self, task_id: UUID) -> Task | None:
        """Flip the pinned flag and reschedule the reminder, whose content reflects it."""
        task = self.get(task_id)
        if task is None:
            return None
        updated = Task.model_validate({**task.model_dump(), "is_pinned": not task.is_pinned})
        self._replace(updated)
        self._reschedule(updated)
        self._changed()
        return updated

    def _reschedule(self, task: Task) -> None:
        if self.reminders is None:
            return
        self.reminders.cancel(task.id)
        self.reminders.schedule(task)

    # ─── Queries ──────────────────────────────────────────────────────────────
    def tasks_for_day(self, day: datetime | date) -> list[Task]:
        """Tasks due on the local calendar day of ``day``, earliest first."""
        target = local_date(day) if isinstance(day, datetime) else day
        return sorted((task for task in self._tasks if local_date(task.due_date) == target), key=lambda task: task.due_date)

    def series(self, series_id: UUID) -> list[Task]:
        return sorted((task for task in self._tasks if task.series_id == series_id), key=lambda task: task.due_date)

    def day_indicators(self, day: datetime | date) -> list[SubjectColor | None]:
        """Up to three distinct subject colours for a day; None stands for "no subject"."""
        indicators: list[SubjectColor | None] = []
        seen: set[UUID | None] = set()
        for task in self.tasks_for_day(day):
            if len(indicators) >= MAX_DAY_INDICATORS:
                break
            subject = self.subject_for(task)
            key = subject.id if subject is not None else None
            if key in seen:
                continue
            seen.add(key)
            indicators.append(subject.color if subject is not None else None)
        return indicators

    def search(self, query: str) -> list[Task]:
        """Case-insensitive search over titles, due date texts and subject names.

        :param query: Free text; a blank query returns nothing.
        :returns: Matching tasks, earliest due first.
        """
        needle = query.strip().lower()
        if not needle:
            return []
        matches = [task for task in self._tasks if any(needle in text for text in search_haystack(task, self.subject_for(task)))]
        return sorted(matches, key=lambda task: task.due_date)

    # ─── Subjects ─────────────────────────────────────────────────────────────
    def subject_for(self, task: Task) -> Subject | None:
        """The subject a task points at, or None when unset or deleted."""
        if task.subject_id is None:
            return None
        return next((subject for subject in self._subjects if subject.id == task.subject_id), None)

    def add_subject(self, name: str, color: SubjectColor | None = None) -> Subject:
        """Add a subject; a blank name raises ``pydantic.ValidationError``."""
        subject = Subject(name=name, color=color or SubjectColor.default_blue())
        self._subjects = [*self._subjects, subject]
        self._changed()
        log.info("Added subject '{}'", subject.name)
        return subject

    def delete_subject(self, subject_id: UUID) -> Subject | None:
        """Remove a subject; tasks keep their now dangling reference."""
        subject = next((candidate for candidate in self._subjects if candidate.id == subject_id), None)
        if subject is None:
            return None
        self._subjects = [candidate for candidate in self._subjects if candidate.id != subject_id]
        self._changed()
        log.info("Deleted subject '{}'", subject.name)
        return subject
