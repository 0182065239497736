# ♥♥─── UI Init ──────────────────────────────────────────────────────────────
from __future__ import annotations

from .console import clear, print, console  # noqa: A004


__all__ = ["clear", "console", "print"]
