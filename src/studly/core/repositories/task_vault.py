# ♥♥─── Task Vault ────────────────────────────────────────────────────────────
from __future__ import annotations

from pathlib import Path

from studly.core.models import Task
from studly.config.app_config import get_settings

from .base_vault import BaseVault


class TaskVault(BaseVault[Task]):
    """Vault for the task collection (``tasks.json``)."""

    def __init__(self, vault_name: str = "task_vault", file_path: Path | None = None) -> None:
        """Initialize the TaskVault.

        :param vault_name: The name of this vault instance.
        :param file_path: Location of the JSON file (uses the configured path if None).
        """
        if file_path is None:
            file_path = get_settings().storage.get_tasks_file_path()
        super().__init__(vault_name=vault_name, file_path=file_path)

    def get_model_class(self) -> type[Task]:
        return Task
