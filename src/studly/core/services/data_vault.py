# ♥♥─── Planner Vault ────────────────────────────────────────────────────────────
from __future__ import annotations

from typing import TYPE_CHECKING, Self

from studly.custom_logger import log, logged
from studly.config.app_config import get_settings
from studly.core.repositories import TaskVault, SubjectVault, DebouncedSaver, CheckpointVault

from .checkpoint import CheckpointManager
from .task_board import TaskBoard
from .reminder_service import InMemoryReminderService
from .attachment_storage import FileAttachmentStorage


if TYPE_CHECKING:
    from datetime import datetime
    from collections.abc import Callable

    from studly.core.models import Task, Subject

    from .reminder_service import ReminderService
    from .attachment_storage import AttachmentStorage


class PlannerVault:
    """Loads and saves the planner state: tasks, subjects and the statistics checkpoint.

    Collections are saved through a debounced saver so bursts of edits end up as
    one write; the checkpoint is written as soon as it changes.
    """

    # ─── Initialization ───────────────────────────────────────────────────────
    def __init__(
        self,
        task_vault: TaskVault | None = None,
        subject_vault: SubjectVault | None = None,
        checkpoint_vault: CheckpointVault | None = None,
        saver: DebouncedSaver | None = None,
    ) -> None:
        """Initialize the PlannerVault; omitted parts are built from the application settings."""
        if saver is None:
            saver = DebouncedSaver(get_settings().persistence.save_debounce_seconds, name="planner")
        self.task_vault: TaskVault = task_vault or TaskVault()
        self.subject_vault: SubjectVault = subject_vault or SubjectVault()
        self.checkpoint_vault: CheckpointVault = checkpoint_vault or CheckpointVault()
        self.saver: DebouncedSaver = saver
        self.board: TaskBoard | None = None
        self.checkpoints: CheckpointManager = CheckpointManager(self.checkpoint_vault)

        log.debug("Planner vault initialized (tasks: {}, subjects: {})", self.task_vault.file_path, self.subject_vault.file_path)

    # ─── Loading ──────────────────────────────────────────────────────────────
    @logged
    def load(self) -> tuple[list[Task], list[Subject]]:
        """Read both collections; each falls back to empty on its own when missing or corrupt."""
        tasks = self.task_vault.load()
        subjects = self.subject_vault.load()
        log.success("Loaded {} task(s) and {} subject(s)", len(tasks), len(subjects))
        return tasks, subjects

    def open_board(
        self,
        reminders: ReminderService | None = None,
        attachments: AttachmentStorage | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> TaskBoard:
        """Load the collections into a board whose every change requests a save.

        :param reminders: Reminder collaborator; an in-memory one when omitted.
        :param attachments: Blob storage; a folder storage under the configured directory when omitted.
        :param clock: Source of the current instant.
        :returns: The board, also kept as ``self.board``.
        """
        tasks, subjects = self.load()
        if attachments is None:
            attachments = FileAttachmentStorage(get_settings().storage.get_attachments_directory())
        self.board = TaskBoard(
            tasks,
            subjects,
            reminders=reminders if reminders is not None else InMemoryReminderService(),
            attachments=attachments,
            on_change=self.request_save,
            clock=clock,
        )
        return self.board

    # ─── Saving ───────────────────────────────────────────────────────────────
    def request_save(self) -> None:
        """Schedule a save of the board's current collections, superseding any pending one."""
        if self.board is None:
            log.warning("Save requested before a board was opened")
            return
        self.saver.schedule(self._write_board)

    def flush(self) -> bool:
        """Write a pending save immediately.

        :returns: True if there was a pending save.
        """
        return self.saver.flush()

    def save(self, tasks: list[Task], subjects: list[Subject]) -> bool:
        """Write both collections now; each file is replaced atomically."""
        tasks_saved = self.task_vault.save(tasks)
        subjects_saved = self.subject_vault.save(subjects)
        if tasks_saved and subjects_saved:
            log.info("Saved {} task(s) and {} subject(s)", len(tasks), len(subjects))
        return tasks_saved and subjects_saved

    def _write_board(self) -> None:
        if self.board is not None:
            self.save(self.board.tasks, self.board.subjects)

    # ─── Context Manager Protocol ─────────────────────────────────────────────
    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: object) -> None:
        """Flush any pending save on the way out."""
        if exc_type:
            log.error("Leaving planner vault due to exception: {}", exc_val)
        self.flush()
