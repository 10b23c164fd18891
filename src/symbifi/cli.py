"""SymbiFi Command Line Interface.

Provides operational tools for:
- Schema creation
- Admin role grants
- Dashboard summaries
- CSV report exports

Usage:
    python -m symbifi.cli init-db
    python -m symbifi.cli grant-admin --user-id X
    python -m symbifi.cli summary --tenant-id X
    python -m symbifi.cli export-payroll --tenant-id X --from 2026-01-01 --to 2026-03-31
    python -m symbifi.cli export-projects --tenant-id X --from 2026-01-01 --to 2026-03-31
    python -m symbifi.cli export-payments --tenant-id X
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Callable
from uuid import UUID

from symbifi.calculators.aggregator import DashboardAggregator
from symbifi.calculators.reports import PayrollReportFilter, build_payroll_report
from symbifi.calculators.types import Snapshot
from symbifi.config import get_settings
from symbifi.database import create_all, dispose_db, get_session
from symbifi.services.csv_export import export_rows, format_currency_for_csv
from symbifi.services.record_service import RecordService
from symbifi.services.report_exports import (
    payment_headers,
    payment_rows,
    payroll_report_headers,
    payroll_report_rows,
    project_report_headers,
    project_report_rows,
)
from symbifi.services.snapshot_service import SnapshotService

logger = logging.getLogger(__name__)


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_uuid(s: str) -> UUID:
    """Parse UUID string."""
    return UUID(s)


async def load_snapshot(tenant_id: UUID | None) -> Snapshot:
    async with get_session() as session:
        return await SnapshotService(session).fetch_snapshot(tenant_id)


class SymbiFiCli:
    """SymbiFi Command Line Interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m symbifi.cli",
            description="SymbiFi payroll tools",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            help="Override LOG_LEVEL",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        subparsers.add_parser("init-db", help="Create database tables")

        grant = subparsers.add_parser("grant-admin", help="Grant the super admin role")
        grant.add_argument("--user-id", type=parse_uuid, required=True)

        summary = subparsers.add_parser("summary", help="Print dashboard statistics")
        summary.add_argument(
            "--tenant-id",
            type=parse_uuid,
            help="Tenant to summarize (omit for all tenants)",
        )

        for name, help_text in (
            ("export-payroll", "Export the per-contractor payroll report"),
            ("export-projects", "Export the per-project financial report"),
        ):
            export = subparsers.add_parser(name, help=help_text)
            export.add_argument("--tenant-id", type=parse_uuid, required=True)
            export.add_argument("--from", dest="date_from", type=parse_date, required=True)
            export.add_argument("--to", dest="date_to", type=parse_date, required=True)
            export.add_argument("--project-id", type=parse_uuid)
            export.add_argument("--contractor-id", type=parse_uuid)
            export.add_argument(
                "--output-dir",
                type=Path,
                help="Directory for the CSV file (default: EXPORT_DIR)",
            )

        payments = subparsers.add_parser("export-payments", help="Export all payments")
        payments.add_argument("--tenant-id", type=parse_uuid, required=True)
        payments.add_argument("--output-dir", type=Path)

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)
        settings = get_settings()
        logging.basicConfig(
            level=(parsed.log_level or settings.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        if not parsed.command:
            self.parser.print_help()
            return 1

        handlers: dict[str, Callable[[argparse.Namespace], Any]] = {
            "init-db": self._cmd_init_db,
            "grant-admin": self._cmd_grant_admin,
            "summary": self._cmd_summary,
            "export-payroll": self._cmd_export_report,
            "export-projects": self._cmd_export_report,
            "export-payments": self._cmd_export_payments,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        return asyncio.run(self._run_async(handler, parsed))

    async def _run_async(
        self,
        handler: Callable[[argparse.Namespace], Any],
        args: argparse.Namespace,
    ) -> int:
        try:
            return await handler(args)
        finally:
            await dispose_db()

    async def _cmd_init_db(self, args: argparse.Namespace) -> int:
        """Create all tables."""
        await create_all()
        print("Database tables created.")
        return 0

    async def _cmd_grant_admin(self, args: argparse.Namespace) -> int:
        """Grant the admin role."""
        async with get_session() as session:
            await RecordService(session).grant_role(args.user_id, "admin")
        print(f"Granted admin to {args.user_id}")
        return 0

    async def _cmd_summary(self, args: argparse.Namespace) -> int:
        """Print dashboard statistics."""
        settings = get_settings()
        snapshot = await load_snapshot(args.tenant_id)
        stats = DashboardAggregator(settings.recent_payments_limit).summarize(snapshot)
        scope = args.tenant_id or "all tenants"

        print(f"Dashboard for {scope}")
        print(f"  Active projects:        {stats.active_projects_count}")
        print(f"  Completed projects:     {stats.completed_projects_count}")
        print(f"  Active contractors:     {stats.active_contractors_count}")
        print(f"  Total budget:           {format_currency_for_csv(stats.total_budget)}")
        print(f"  Total paid:             {format_currency_for_csv(stats.total_paid)}")
        print(f"  Remaining budget:       {format_currency_for_csv(stats.remaining_budget)}")
        print(f"  Outstanding balances:   {stats.outstanding_balance_count}")
        print(f"  Unpaid assignments:     {stats.unpaid_assignments_count}")
        print(f"  Payments this month:    {stats.this_month_payment_count}")
        for p in stats.this_month_payments:
            print(
                f"    {p.payment_date} {p.contractor_name} / {p.project_name}: "
                f"{format_currency_for_csv(p.amount_paid)}"
            )
        return 0

    async def _cmd_export_report(self, args: argparse.Namespace) -> int:
        """Export the payroll or project report."""
        settings = get_settings()
        try:
            report_filter = PayrollReportFilter(
                date_from=args.date_from,
                date_to=args.date_to,
                project_id=str(args.project_id) if args.project_id else None,
                contractor_id=str(args.contractor_id) if args.contractor_id else None,
            )
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        snapshot = await load_snapshot(args.tenant_id)
        report = build_payroll_report(snapshot, report_filter)
        span = f"{args.date_from}-to-{args.date_to}"

        if args.command == "export-payroll":
            rows = payroll_report_rows(report)
            filename = f"payroll-report-{span}"
            headers = payroll_report_headers(settings.currency_code)
        else:
            rows = project_report_rows(report)
            filename = f"project-financial-report-{span}"
            headers = project_report_headers(settings.currency_code)

        return self._write(rows, filename, headers, args.output_dir or settings.export_dir)

    async def _cmd_export_payments(self, args: argparse.Namespace) -> int:
        """Export every payment for a tenant."""
        settings = get_settings()
        snapshot = await load_snapshot(args.tenant_id)
        return self._write(
            payment_rows(snapshot),
            f"payments-export-{date.today().isoformat()}",
            payment_headers(settings.currency_code),
            args.output_dir or settings.export_dir,
        )

    def _write(
        self,
        rows: list[dict[str, Any]],
        filename: str,
        headers: dict[str, str],
        output_dir: Path,
    ) -> int:
        path = export_rows(rows, filename, headers, output_dir)
        if path is None:
            print("Nothing to export.")
        else:
            print(f"Wrote {len(rows)} rows to {path}")
        return 0


def main() -> int:
    """CLI entry point."""
    cli = SymbiFiCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
