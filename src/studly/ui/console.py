# ♥♥─── Global Console ───────────────────────────────────────────────────────────
from typing import Any

from rich.traceback import install as install_rich_traceback

from .theme_manager import ConsoleManager


# ─── Initialization ────────────────────────────────────────────────────────────
theme_manager = ConsoleManager()
console = theme_manager.create_console("rose_pine")

install_rich_traceback(console=console, show_locals=False, word_wrap=True, extra_lines=3, suppress=[])


# ─── Console Utilities ─────────────────────────────────────────────────────────
def print(*args: Any, **kwargs: Any) -> None:  # noqa: A001
    """Print to the console using Rich."""
    console.print(*args, **kwargs)


def clear() -> None:
    """Clear the console screen."""
    console.clear()
