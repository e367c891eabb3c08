"""Scaffold Finance command line interface.

Provides operational tools for:
- Pay period configuration and listing
- Payroll report export
- Project cost and revenue reconciliation

Usage:
    python -m scaffold_finance.cli init-db
    python -m scaffold_finance.cli set-config --type biweekly --start 2024-01-01
    python -m scaffold_finance.cli periods --count 6
    python -m scaffold_finance.cli report --start 2024-01-15 --end 2024-01-28 --output payroll.csv
    python -m scaffold_finance.cli reconcile-costs [--project-id X]
    python -m scaffold_finance.cli reconcile-revenue [--project-id X]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from datetime import date
from pathlib import Path
from typing import Any, TextIO, TypeVar
from uuid import UUID

from scaffold_finance.calculators.pay_period import PayPeriodCalculator
from scaffold_finance.calculators.types import PayPeriod, PeriodType
from scaffold_finance.config import Settings, get_settings
from scaffold_finance.database import create_all, get_engine, get_session_factory
from scaffold_finance.services import (
    CostReconciler,
    PayrollService,
    RevenueReconciler,
)
from scaffold_finance.store import ProjectNotFoundError, RecordStore, SqlRecordStore, StoreError

T = TypeVar("T")


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_uuid(s: str) -> UUID:
    """Parse UUID string."""
    return UUID(s)


class FinanceCli:
    """Scaffold Finance Command Line Interface.

    A store may be injected; otherwise each command opens the database named
    by ``DATABASE_URL`` and disposes of the engine when done.
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        settings: Settings | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or get_settings()
        self.out = out or sys.stdout
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="scaffold-finance",
            description="Pay period, payroll and project reconciliation tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        subparsers.add_parser("init-db", help="Create database tables")

        # set-config command
        set_config = subparsers.add_parser(
            "set-config",
            help="Create or update the pay period config",
        )
        set_config.add_argument(
            "--type",
            dest="period_type",
            choices=[t.value for t in PeriodType],
            required=True,
            help="Pay period cadence",
        )
        set_config.add_argument(
            "--start",
            type=parse_date,
            required=True,
            help="Anchor date of the first period (YYYY-MM-DD)",
        )

        # periods command
        periods = subparsers.add_parser("periods", help="List recent pay periods")
        periods.add_argument(
            "--count",
            type=int,
            help="Number of periods (default: $RECENT_PERIOD_COUNT)",
        )
        periods.add_argument(
            "--today",
            type=parse_date,
            help="Reference date instead of today (YYYY-MM-DD)",
        )

        # report command
        report = subparsers.add_parser(
            "report",
            help="Export the payroll report as CSV",
        )
        report.add_argument(
            "--start",
            type=parse_date,
            help="Period start (default: current period)",
        )
        report.add_argument(
            "--end",
            type=parse_date,
            help="Period end (default: current period)",
        )
        report.add_argument(
            "--output",
            type=Path,
            help="Write CSV to this file instead of stdout",
        )

        # reconcile commands
        reconcile_commands = (
            ("reconcile-costs", "actual cost"),
            ("reconcile-revenue", "actual revenue"),
        )
        for name, what in reconcile_commands:
            cmd = subparsers.add_parser(name, help=f"Recompute project {what}")
            cmd.add_argument(
                "--project-id",
                type=parse_uuid,
                help="Only this project (default: all projects)",
            )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help(self.out)
            return 1

        # Dispatch to command handler
        handlers: dict[str, Callable[[argparse.Namespace], int]] = {
            "init-db": self._cmd_init_db,
            "set-config": self._cmd_set_config,
            "periods": self._cmd_periods,
            "report": self._cmd_report,
            "reconcile-costs": self._cmd_reconcile_costs,
            "reconcile-revenue": self._cmd_reconcile_revenue,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        try:
            return handler(parsed)
        except ProjectNotFoundError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        except StoreError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2

    def _cmd_init_db(self, args: argparse.Namespace) -> int:
        """Create tables in the configured database."""

        async def init() -> None:
            engine = get_engine(self.settings.database_url)
            try:
                await create_all(engine)
            finally:
                await engine.dispose()

        asyncio.run(init())
        self._print(f"Database initialized: {self.settings.database_url}")
        return 0

    def _cmd_set_config(self, args: argparse.Namespace) -> int:
        config = self._execute(
            lambda store: PayrollService(store, self.settings).save_pay_period_config(
                args.period_type, args.start
            )
        )
        self._print(f"Pay period config: {config.period_type} from {config.start_date}")
        return 0

    def _cmd_periods(self, args: argparse.Namespace) -> int:
        """List recent pay periods, most recent first."""

        async def load(store: RecordStore) -> tuple[Any, list[PayPeriod]]:
            service = PayrollService(store, self.settings)
            config = await service.get_pay_period_config()
            return config, await service.recent_periods(args.count, args.today)

        config, periods = self._execute(load)
        if config is None:
            print("No pay period config set. Run set-config first.", file=sys.stderr)
            return 1

        length = PayPeriodCalculator.period_length(config.period_type)
        self._print(f"{config.period_type} periods ({length} days) anchored {config.start_date}:")
        for period in periods:
            self._print(f"  {period.label}")
        return 0

    def _cmd_report(self, args: argparse.Namespace) -> int:
        """Export a payroll report."""

        async def export(store: RecordStore) -> tuple[str, str] | None:
            service = PayrollService(store, self.settings)
            start, end = args.start, args.end
            if start is None or end is None:
                current = await service.current_period()
                if current is None:
                    return None
                start = start or current.start
                end = end or current.end
            return await service.export_report_csv(start, end)

        if args.start and args.end and args.start > args.end:
            print("ERROR: --start must be on or before --end", file=sys.stderr)
            return 1

        exported = self._execute(export)
        if exported is None:
            print("No pay period config set; pass --start and --end.", file=sys.stderr)
            return 1

        filename, content = exported
        if args.output is None:
            self.out.write(content)
        else:
            args.output.write_text(content, encoding="utf-8")
            self._print(f"Wrote {filename} to {args.output}")
        return 0

    def _cmd_reconcile_costs(self, args: argparse.Namespace) -> int:
        """Recompute project actual cost."""

        async def reconcile(store: RecordStore) -> list[Any]:
            reconciler = CostReconciler(store)
            if args.project_id:
                return [await reconciler.reconcile(args.project_id)]
            return await reconciler.reconcile_all()

        results = self._execute(reconcile)
        for costs in results:
            flag = f"  [missing: {', '.join(costs.errors)}]" if costs.degraded else ""
            self._print(
                f"{costs.project_id}: actual {costs.total_actual_cost} "
                f"(wages {costs.total_wages}, reimbursements {costs.total_reimbursements}, "
                f"expenses {costs.total_expenses}){flag}"
            )
        self._print(f"Updated actual costs for {len(results)} projects")
        return 0

    def _cmd_reconcile_revenue(self, args: argparse.Namespace) -> int:
        """Recompute project actual revenue."""

        async def reconcile(store: RecordStore) -> list[Any]:
            reconciler = RevenueReconciler(store)
            if args.project_id:
                return [await reconciler.reconcile(args.project_id)]
            return await reconciler.reconcile_all()

        results = self._execute(reconcile)
        for revenue in results:
            self._print(
                f"{revenue.project_id}: received {revenue.total_revenue} "
                f"(pending {revenue.pending_revenue}, cancelled {revenue.cancelled_revenue})"
            )
        self._print(f"Updated actual revenue for {len(results)} projects")
        return 0

    def _execute(self, action: Callable[[RecordStore], Awaitable[T]]) -> T:
        """Run an async action against the injected or configured store."""

        async def call() -> T:
            if self.store is not None:
                return await action(self.store)
            engine = get_engine(self.settings.database_url)
            try:
                await create_all(engine)
                return await action(SqlRecordStore(get_session_factory(engine)))
            finally:
                await engine.dispose()

        return asyncio.run(call())

    def _print(self, line: str) -> None:
        print(line, file=self.out)


def main() -> int:
    """CLI entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cli = FinanceCli(settings=settings)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
