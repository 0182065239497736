# ♥♥─── Checkpoint Vault ──────────────────────────────────────────────────────
from __future__ import annotations

from pathlib import Path

from studly.utils import load_pydantic_model, save_pydantic_model
from studly.core.models import StatsCheckpoint
from studly.config.app_config import get_settings


class CheckpointVault:
    """Stores the statistics checkpoint as a small JSON object (``state.json``)."""

    def __init__(self, vault_name: str = "checkpoint_vault", file_path: Path | None = None) -> None:
        if file_path is None:
            file_path = get_settings().storage.get_state_file_path()
        self.vault_name = vault_name
        self.file_path = Path(file_path)

    def load(self) -> StatsCheckpoint:
        """Read the checkpoint; anything missing or invalid means "no checkpoint"."""
        return load_pydantic_model(StatsCheckpoint, self.file_path) or StatsCheckpoint()

    def save(self, checkpoint: StatsCheckpoint) -> bool:
        return save_pydantic_model(checkpoint, self.file_path)
