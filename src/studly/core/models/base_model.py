# ♥♥─── Studly Base Models ──────────────────────────────────────────────────────
"""Common Pydantic configuration shared by every planner record."""

from __future__ import annotations

from typing import Any, Self

from humps import camelize
from pydantic import BaseModel, ConfigDict


# ─── Common Model Configuration ────────────────────────────────────────────────
STUDLY_MODEL_CONFIG = ConfigDict(
    extra="ignore",
    populate_by_name=True,
    alias_generator=camelize,
    arbitrary_types_allowed=True,
    validate_assignment=True,
)


# ─── Base Models ──────────────────────────────────────────────────────────────
class StudlyBaseModel(BaseModel):
    """Base Pydantic model with shared project configuration."""

    model_config = STUDLY_MODEL_CONFIG

    @classmethod
    def from_stored_dict(cls, data: dict[str, Any]) -> Self:
        """Create a model instance from a persisted (camelCase) dictionary.

        :param data: The input dictionary.
        :returns: An instance of the model.
        """
        return cls.model_validate(data)

    def to_stored_dict(self) -> dict[str, Any]:
        """Dump the model with its persisted keys and JSON-safe values."""
        return self.model_dump(mode="json", by_alias=True)
