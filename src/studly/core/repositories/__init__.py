from __future__ import annotations

from .base_vault import BaseVault
from .task_vault import TaskVault
from .subject_vault import SubjectVault
from .save_scheduler import DebouncedSaver
from .checkpoint_vault import CheckpointVault


__all__ = ["BaseVault", "CheckpointVault", "DebouncedSaver", "SubjectVault", "TaskVault"]
