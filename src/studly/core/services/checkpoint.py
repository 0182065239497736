# ♥♥─── Reset Checkpoint ─────────────────────────────────────────────────────────
"""Narrow the scoring window to "since the last reset" without deleting tasks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from studly.utils import to_local
from studly.core.models import StatsCheckpoint
from studly.custom_logger import log


if TYPE_CHECKING:
    from datetime import datetime
    from collections.abc import Iterable

    from studly.core.models import Task
    from studly.core.repositories import CheckpointVault


def scope_tasks(tasks: Iterable[Task], checkpoint: StatsCheckpoint) -> list[Task]:
    """Tasks created at or after the checkpoint; every task when no checkpoint is set."""
    reset_date = checkpoint.reset_date
    if reset_date is None:
        return list(tasks)
    return [task for task in tasks if to_local(task.created_at) >= reset_date]


class CheckpointManager:
    """Holds the current checkpoint and writes every change through to its vault."""

    def __init__(self, vault: CheckpointVault | None = None, checkpoint: StatsCheckpoint | None = None) -> None:
        """Initialize the manager.

        :param vault: Where the checkpoint is persisted; None keeps it in memory only.
        :param checkpoint: Starting value; read from ``vault`` when omitted.
        """
        self.vault = vault
        if checkpoint is None:
            checkpoint = vault.load() if vault is not None else StatsCheckpoint()
        self.checkpoint = checkpoint

    def scope(self, tasks: Iterable[Task]) -> list[Task]:
        return scope_tasks(tasks, self.checkpoint)

    def reset(self, now: datetime) -> StatsCheckpoint:
        """Start a fresh scoring window at ``now``."""
        self._store(StatsCheckpoint(stats_reset_at=max(0.0, to_local(now).timestamp())))
        log.info("Statistics reset at {}", to_local(now).isoformat())
        return self.checkpoint

    def rebuild(self) -> StatsCheckpoint:
        """Drop the checkpoint so all history is scored again."""
        self._store(StatsCheckpoint())
        log.info("Statistics rebuilt from full history")
        return self.checkpoint

    def _store(self, checkpoint: StatsCheckpoint) -> None:
        self.checkpoint = checkpoint
        if self.vault is not None and not self.vault.save(checkpoint):
            log.warning("Checkpoint could not be written; keeping it in memory")
