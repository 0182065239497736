# ♥♥─── Studly Task Models ────────────────────────────────────────────────────
"""Task, attachment and task-creation records."""

from __future__ import annotations

from uuid import UUID, uuid4
from typing import Any
from datetime import datetime

from pydantic import Field, field_validator, model_validator

from .base_enums import TaskKind, Recurrence, AttachmentKind
from .base_model import StudlyBaseModel
from .validators import clean_text, parse_datetime, apply_task_defaults


# ─── Attachment ───────────────────────────────────────────────────────────────
class Attachment(StudlyBaseModel):
    """Reference to a stored blob.

    Occurrences expanded from one template carry copies of the same attachment,
    so several tasks may point at one ``stored_file_name``.
    """

    id: UUID = Field(default_factory=uuid4)
    original_name: str
    stored_file_name: str
    kind: AttachmentKind = AttachmentKind.FILE


# ─── Task ─────────────────────────────────────────────────────────────────────
class Task(StudlyBaseModel):
    """A homework assignment or reminder, possibly one occurrence of a series."""

    id: UUID = Field(default_factory=uuid4)
    title: str
    kind: TaskKind = TaskKind.HOMEWORK
    due_date: datetime
    created_at: datetime
    subject_id: UUID | None = Field(default=None, alias="subjectID")
    is_done: bool = False
    completed_at: datetime | None = None
    is_pinned: bool = False
    recurrence: Recurrence = Recurrence.NONE
    series_id: UUID | None = Field(default=None, alias="seriesID")
    attachments: list[Attachment] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _apply_stored_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return apply_task_defaults(data)
        return data

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, v: Any) -> str:
        return clean_text(v)

    @field_validator("due_date", "created_at", "completed_at", mode="before")
    @classmethod
    def _parse_timestamps(cls, v: Any) -> datetime | None:
        return parse_datetime(v)

    @property
    def is_recurring(self) -> bool:
        return self.recurrence != Recurrence.NONE and self.series_id is not None

    def references_file(self, stored_file_name: str) -> bool:
        """Check whether any attachment of this task points at ``stored_file_name``."""
        return any(attachment.stored_file_name == stored_file_name for attachment in self.attachments)


# ─── Task Creation ────────────────────────────────────────────────────────────
class TaskCreate(StudlyBaseModel):
    """Template the recurrence expander turns into one or more tasks.

    :param title: Title shared by every occurrence; blank titles are rejected.
    :param due_date: Due instant of the first occurrence.
    :param recurrence: Cadence of the series, ``none`` for a single task.
    """

    title: str
    kind: TaskKind = TaskKind.HOMEWORK
    due_date: datetime
    subject_id: UUID | None = Field(default=None, alias="subjectID")
    is_pinned: bool = False
    recurrence: Recurrence = Recurrence.NONE
    attachments: list[Attachment] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, v: Any) -> str:
        return clean_text(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, v: Any) -> datetime | None:
        return parse_datetime(v)


class TaskUpdate(StudlyBaseModel):
    """Partial edit of a single task; only explicitly supplied fields are applied."""

    title: str | None = None
    kind: TaskKind | None = None
    due_date: datetime | None = None
    subject_id: UUID | None = Field(default=None, alias="subjectID")
    is_pinned: bool | None = None
    recurrence: Recurrence | None = None
    attachments: list[Attachment] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _clean_title(cls, v: Any) -> str | None:
        return None if v is None else clean_text(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, v: Any) -> datetime | None:
        return parse_datetime(v)

    def changes(self) -> dict[str, Any]:
        """Fields the caller set, including an explicit ``subject_id=None`` to clear the subject."""
        return {name: getattr(self, name) for name in self.model_fields_set}
