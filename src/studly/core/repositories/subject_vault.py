# ♥♥─── Subject Vault ─────────────────────────────────────────────────────────
from __future__ import annotations

from pathlib import Path

from studly.core.models import Subject
from studly.config.app_config import get_settings

from .base_vault import BaseVault


class SubjectVault(BaseVault[Subject]):
    """Vault for the subject collection (``subjects.json``)."""

    def __init__(self, vault_name: str = "subject_vault", file_path: Path | None = None) -> None:
        if file_path is None:
            file_path = get_settings().storage.get_subjects_file_path()
        super().__init__(vault_name=vault_name, file_path=file_path)

    def get_model_class(self) -> type[Subject]:
        return Subject
