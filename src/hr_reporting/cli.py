"""HR reporting command line interface.

Provides operational tools for:
- Serving the API
- Creating the database schema
- Marking absentees at the end of a working day
- Generating monthly payroll
- Counting working days

Scheduled jobs are meant to be driven by cron, e.g.:
    1 17 * * 1-5  hr-reporting auto-absent
    0 0 1 * *     hr-reporting generate-payroll

Usage:
    python -m hr_reporting.cli serve
    python -m hr_reporting.cli auto-absent --date 2024-03-15
    python -m hr_reporting.cli generate-payroll --as-of 2024-04-01T00:00:00
    python -m hr_reporting.cli working-days --start 2024-01-01 --end 2024-03-31
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime
from typing import Callable

from hr_reporting.config import get_settings
from hr_reporting.database import create_schema, dispose_db, get_session
from hr_reporting.reporting.working_days import get_working_days
from hr_reporting.services import AttendanceService, PayrollService

logger = logging.getLogger(__name__)


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_datetime(s: str) -> datetime:
    """Parse ISO datetime string (naive local time)."""
    return datetime.fromisoformat(s)


class HRReportingCli:
    """HR reporting command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="hr-reporting",
            description="HR reporting operational tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # serve command
        serve = subparsers.add_parser("serve", help="Run the HTTP API")
        serve.add_argument("--host", type=str, help="Bind address (default: HOST)")
        serve.add_argument("--port", type=int, help="Bind port (default: PORT)")

        # init-db command
        subparsers.add_parser("init-db", help="Create missing database tables")

        # auto-absent command
        absent = subparsers.add_parser(
            "auto-absent",
            help="Mark employees without attendance as absent",
        )
        absent.add_argument(
            "--date",
            type=parse_date,
            help="Day to process (ISO format, default: today)",
        )

        # generate-payroll command
        payroll = subparsers.add_parser(
            "generate-payroll",
            help="Create this month's payroll from last month's attendance",
        )
        payroll.add_argument(
            "--as-of",
            type=parse_datetime,
            help="Pretend the current time is this timestamp (ISO format)",
        )

        # working-days command
        days = subparsers.add_parser(
            "working-days",
            help="Count weekdays between two dates, inclusive",
        )
        days.add_argument("--start", type=parse_date, required=True, help="First day")
        days.add_argument("--end", type=parse_date, required=True, help="Last day")

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        handlers: dict[str, Callable[..., int]] = {
            "serve": self._cmd_serve,
            "init-db": self._cmd_init_db,
            "auto-absent": self._cmd_auto_absent,
            "generate-payroll": self._cmd_generate_payroll,
            "working-days": self._cmd_working_days,
        }

        handler = handlers.get(parsed.command)
        if handler:
            return handler(parsed)

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_serve(self, args: argparse.Namespace) -> int:
        """Run the API with uvicorn."""
        import uvicorn

        settings = get_settings()
        uvicorn.run(
            "hr_reporting.api.app:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=settings.debug,
            log_level=settings.log_level.lower(),
        )
        return 0

    def _cmd_init_db(self, args: argparse.Namespace) -> int:
        """Create the database schema."""
        asyncio.run(self._with_engine(create_schema()))
        print("Schema created.")
        return 0

    def _cmd_auto_absent(self, args: argparse.Namespace) -> int:
        """Mark absentees for a day."""
        day = args.date or date.today()
        print(f"Marking absentees for {day.isoformat()}")

        async def mark() -> int:
            async with get_session() as session:
                settings = get_settings()
                service = AttendanceService(
                    session,
                    open_hour=settings.attendance_open_hour,
                    close_hour=settings.attendance_close_hour,
                )
                created = await service.mark_absentees(day)
                return len(created)

        count = asyncio.run(self._with_engine(mark()))
        print(f"  Marked absent: {count}")
        return 0

    def _cmd_generate_payroll(self, args: argparse.Namespace) -> int:
        """Generate monthly payroll."""
        as_of = args.as_of or datetime.now()
        print(f"Generating payroll for {as_of.year}-{as_of.month:02d}")

        async def generate() -> int:
            async with get_session() as session:
                created = await PayrollService(session).generate_monthly_payroll(as_of)
                return len(created)

        count = asyncio.run(self._with_engine(generate()))
        print(f"  Payroll records created: {count}")
        return 0

    def _cmd_working_days(self, args: argparse.Namespace) -> int:
        """Print the weekday count of a window."""
        print(get_working_days(args.start, args.end))
        return 0

    @staticmethod
    async def _with_engine(coro):
        """Await a coroutine, disposing the engine afterwards."""
        try:
            return await coro
        finally:
            await dispose_db()


def main() -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cli = HRReportingCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
