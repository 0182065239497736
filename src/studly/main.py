# ♥♥─── Studly CLI ───────────────────────────────────────────────────────────────
from __future__ import annotations

from typing import TYPE_CHECKING
import argparse
from datetime import datetime

from dateutil.parser import isoparse

from studly.ui import console
from studly.utils import to_local
from studly.custom_logger import log, setup_logging
from studly.ui.stats_view import render_tasks, render_report
from studly.core.models import TrendMode
from studly.config.app_config import get_settings
from studly.core.services import PlannerVault, build_statistics_report


if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="studly", description="Homework planner statistics and lookups.")
    commands = parser.add_subparsers(dest="command", required=True)

    stats = commands.add_parser("stats", help="show completion statistics since the last reset")
    stats.add_argument("--mode", choices=[mode.value for mode in TrendMode], default=TrendMode.MONTH.value)

    day = commands.add_parser("day", help="list the tasks due on a day (today by default)")
    day.add_argument("date", nargs="?", help="day as YYYY-MM-DD")

    commands.add_parser("reset", help="start a fresh statistics window now")
    commands.add_parser("rebuild", help="score the whole history again")

    search = commands.add_parser("search", help="find tasks by title, date or subject")
    search.add_argument("query")
    return parser


def run(args: argparse.Namespace, now: datetime) -> int:
    """Execute one parsed command.

    :param args: Parsed command line.
    :param now: The current instant.
    :returns: Process exit code.
    """
    with PlannerVault() as vault:
        if args.command == "reset":
            checkpoint = vault.checkpoints.reset(now)
            console.print(f"[success]Statistics reset at {to_local(checkpoint.reset_date or now):%d %b %Y, %H:%M}.[/success]")
            return 0
        if args.command == "rebuild":
            vault.checkpoints.rebuild()
            console.print("[success]Statistics rebuilt from the full history.[/success]")
            return 0

        board = vault.open_board(clock=lambda: now)
        if args.command == "stats":
            report = build_statistics_report(board.tasks, board.subjects, vault.checkpoints.checkpoint, now, TrendMode(args.mode))
            console.print(render_report(report))
        elif args.command == "day":
            day = to_local(isoparse(args.date)) if args.date else now
            console.print(render_tasks(board.tasks_for_day(day), board.subject_for, title=f"{day:%A, %d %B %Y}"))
        elif args.command == "search":
            results = board.search(args.query)
            if not results:
                console.print(f"[muted]Nothing matches '{args.query}'.[/muted]")
                return 1
            console.print(render_tasks(results, board.subject_for, title=f"Search: {args.query}"))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the Studly command line."""
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
        settings.paths.ensure_env_file()
        setup_logging(settings.logging.console_level, settings.logging.file_level)
        return run(args, datetime.now().astimezone())
    except ValueError as e:
        log.error("Invalid input: {}", e)
        return 2
    except Exception as e:
        log.error("An unexpected error occurred: {}", str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
