# ♥♥─── Studly Subject Models ─────────────────────────────────────────────────
"""Subjects tasks can be filed under, each with an indicator colour."""

from __future__ import annotations

from uuid import UUID, uuid4
from typing import Any, Self

from pydantic import Field, field_validator

from .base_model import StudlyBaseModel
from .validators import clean_text


COLOR_CHANNEL_MAX: int = 255


class SubjectColor(StudlyBaseModel):
    """RGBA colour with channels in the 0..1 range."""

    red: float = Field(ge=0.0, le=1.0)
    green: float = Field(ge=0.0, le=1.0)
    blue: float = Field(ge=0.0, le=1.0)
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)

    @classmethod
    def default_blue(cls) -> Self:
        return cls(red=0.25, green=0.56, blue=0.95, opacity=1.0)

    @classmethod
    def from_hex(cls, value: str) -> Self:
        """Build a colour from ``#RRGGBB`` or ``#RRGGBBAA``."""
        digits = value.strip().removeprefix("#")
        if len(digits) not in {6, 8}:
            msg = f"expected #RRGGBB or #RRGGBBAA, got {value!r}"
            raise ValueError(msg)
        channels = [int(digits[i : i + 2], 16) / COLOR_CHANNEL_MAX for i in range(0, len(digits), 2)]
        return cls(red=channels[0], green=channels[1], blue=channels[2], opacity=channels[3] if len(channels) == 4 else 1.0)  # noqa: PLR2004

    def to_hex(self) -> str:
        """Render the colour as ``#RRGGBB`` (opacity is not represented)."""
        return "#" + "".join(f"{round(channel * COLOR_CHANNEL_MAX):02x}" for channel in (self.red, self.green, self.blue))


class Subject(StudlyBaseModel):
    """A discipline such as Mathematics, referenced by tasks through ``subjectID``."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    color: SubjectColor = Field(default_factory=SubjectColor.default_blue)

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, v: Any) -> str:
        return clean_text(v)
