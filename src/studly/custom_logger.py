# ♥♥─── Planner Logger Configuration ─────────────────────────────────────────────
from __future__ import annotations

from typing import TYPE_CHECKING, Any
from pathlib import Path
from functools import wraps

from loguru import logger
import logging

from rich.text import Text

from .ui.console import console


if TYPE_CHECKING:
    from collections.abc import Callable

# ─── Configuration ─────────────────────────────────────────────────────────────

LEVEL_CONFIG: dict[str, dict[str, str]] = {
    "TRACE": {"icon": "·", "color": "#908caa"},
    "DEBUG": {"icon": "›", "color": "#6e6a86"},
    "INFO": {"icon": "•", "color": "#31748f"},
    "SUCCESS": {"icon": "✓", "color": "#9ccfd8"},
    "WARNING": {"icon": "!", "color": "#f6c177"},
    "ERROR": {"icon": "✗", "color": "#eb6f92"},
    "CRITICAL": {"icon": "‼", "color": "#eb6f92"},
}
PROJECT_MARKERS: tuple[str, ...] = ("pyproject.toml", ".git")


# ─── Utility Functions ─────────────────────────────────────────────────────────


def get_project_root() -> Path:
    """Walk up from the working directory until a project marker file is found."""
    current_path = Path.cwd()
    for parent in [current_path, *current_path.parents]:
        if any((parent / marker).exists() for marker in PROJECT_MARKERS):
            return parent
    return current_path


def get_log_dir() -> Path:
    """Return the planner log directory, creating it on first use."""
    log_directory = get_project_root() / "app_data" / "logs"
    log_directory.mkdir(parents=True, exist_ok=True)
    return log_directory


# ─── Logger Class ──────────────────────────────────────────────────────────────


class MinimalLogger:
    """Own the loguru sinks used by the planner."""

    def __init__(self) -> None:
        self._configured: bool = False
        self._sink_ids: list[int] = []
        self.console: Any = console
        self.path: Path = get_log_dir()

        self.setup()

    def setup(
        self,
        console_level: str = "INFO",
        file_level: str = "INFO",
        log_file: str = "studly.log",
        rotation: str = "10 MB",
        retention: str = "7 days",
        *,
        force: bool = False,
    ) -> None:
        """
        Configure the console and file sinks.

        :param console_level: Minimum level printed to the terminal.
        :param file_level: Minimum level written to the log file.
        :param log_file: Name of the log file inside ``app_data/logs``.
        :param rotation: Loguru rotation policy.
        :param retention: Loguru retention policy.
        :param force: Reconfigure even if sinks were already installed.
        """
        if self._configured and not force:
            return

        for sink_id in self._sink_ids:
            logger.remove(sink_id)
        self._sink_ids.clear()
        if not self._configured:
            logger.remove()

        self._sink_ids.append(
            logger.add(
                sink=self._console_sink,  # type: ignore[arg-type]
                level=console_level,
                format="{time:HH:mm:ss}|{module}|{level.name}|{message}",
                colorize=True,
                backtrace=False,
                diagnose=False,
            ),
        )
        self._sink_ids.append(
            logger.add(
                sink=self.path / log_file,
                level=file_level,
                format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
                backtrace=True,
                diagnose=False,
                rotation=rotation,
                retention=retention,
                compression="zip",
                encoding="utf-8",
            ),
        )

        if not self._configured:
            self._setup_stdlib_logging()
        self._configured = True

    def _console_sink(self, message: Any) -> None:
        """Print one record on the rich console."""
        record = message.record
        level_name = record["level"].name
        level_config = LEVEL_CONFIG.get(level_name, {"icon": "•", "color": "white"})
        style = f"log.level.{level_name.lower()}"

        self.console.print(
            Text(record["time"].strftime("%H:%M:%S"), style="log.time"),
            Text("|", style="log.separator"),
            Text(record["module"], style="log.module"),
            Text(f"{level_config['icon']:<2}", style=style),
            Text.from_markup(record["message"], style=style),
            sep=" ",
            end="\n",
        )

    def _setup_stdlib_logging(self) -> None:
        """Route standard library logging records through loguru."""

        class LoguruHandler(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                try:
                    level: str | int = logger.level(record.levelname).name
                except ValueError:
                    level = record.levelno

                # Attribute the record to the original caller, not the logging module
                frame = logging.currentframe()
                depth = 2
                while frame and frame.f_code.co_filename == logging.__file__:
                    frame = frame.f_back
                    depth += 1

                logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

        logging.basicConfig(handlers=[LoguruHandler()], level=0, force=True)


# ─── Global Logger Instance and Helper Functions ───────────────────────────────

logger_instance = MinimalLogger()


def setup_logging(console_level: str = "INFO", file_level: str = "INFO", log_file: str = "studly.log", **kwargs: Any) -> None:
    """
    Reconfigure the global sinks, e.g. with levels taken from the settings.

    :param console_level: Minimum level for console output.
    :param file_level: Minimum level for file output.
    :param log_file: Name of the log file.
    :param kwargs: Extra arguments for :meth:`MinimalLogger.setup` (rotation, retention).
    """
    logger_instance.setup(console_level, file_level, log_file, force=True, **kwargs)


def logged(func: Callable) -> Callable:
    """Log entry into and completion of ``func``; errors are logged and re-raised."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        func_name = f"[i]{func.__module__}.{func.__name__}[/i]"
        logger.debug(f"→ Calling {func_name}")

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Error in {func_name}: {e}")
            raise
        else:
            logger.debug(f"{LEVEL_CONFIG['SUCCESS']['icon']} Completed {func_name}")
            return result

    return wrapper


log = logger
