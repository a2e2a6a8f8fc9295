"""Payroll worksheet command line interface.

Operational tools over JSON documents:
- Worksheet recompute after rate or staff changes
- Monthly leave accrual runs
- Anniversary cap runs
- Accrual previews

Usage:
    python -m payroll_worksheet.cli recompute --worksheet rows.json --employees staff.json --rates rates.json
    python -m payroll_worksheet.cli run-accruals --employees staff.json --month 2026-10 --date 2026-10-01 --output staff.json
    python -m payroll_worksheet.cli anniversary-caps --employees staff.json --date 2026-10-01
    python -m payroll_worksheet.cli accrual-preview --employees staff.json
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, TypeAdapter, ValidationError

from payroll_worksheet.api.schemas import (
    AccrualResultSchema,
    EmployeeSchema,
    LeavePolicySchema,
    MasterRatesSchema,
    PayrollRowSchema,
    employees_to_domain,
    policy_or_default,
)
from payroll_worksheet.calculators.accrual import LeaveAccrualCalculator
from payroll_worksheet.config import configure_logging
from payroll_worksheet.models import Employee, LeavePolicyConfig
from payroll_worksheet.services.accrual_batch import run_anniversary_caps, run_monthly_accruals
from payroll_worksheet.services.leave_ledger import MONTH_KEY_PATTERN, month_key_of
from payroll_worksheet.services.worksheet_service import WorksheetService

_employees_adapter = TypeAdapter(list[EmployeeSchema])
_rows_adapter = TypeAdapter(list[PayrollRowSchema])


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_month_key(s: str) -> str:
    """Validate a YYYY-MM month key."""
    if not MONTH_KEY_PATTERN.fullmatch(s):
        raise argparse.ArgumentTypeError(f"invalid month key '{s}', expected YYYY-MM")
    return s


class InputError(Exception):
    """Raised when an input document cannot be read or validated."""


def _load_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InputError(f"Cannot read {path}: {e}") from e


def _validate(adapter: TypeAdapter | type[BaseModel], path: str) -> Any:
    data = _load_json(path)
    try:
        if isinstance(adapter, TypeAdapter):
            return adapter.validate_python(data)
        return adapter.model_validate(data)
    except ValidationError as e:
        raise InputError(f"Invalid document {path}: {e}") from e


class WorksheetCli:
    """Payroll worksheet command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m payroll_worksheet.cli",
            description="Payroll worksheet and leave ledger tools",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            help="Override LOG_LEVEL for this run",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # recompute command
        recompute = subparsers.add_parser(
            "recompute",
            help="Re-resolve a saved worksheet against current rates and staff",
        )
        recompute.add_argument("--worksheet", required=True, help="Worksheet rows (.json)")
        recompute.add_argument("--employees", required=True, help="Employee records (.json)")
        recompute.add_argument("--rates", required=True, help="Master rates (.json)")
        recompute.add_argument("--output", help="Output file (default: stdout)")

        # run-accruals command
        accruals = subparsers.add_parser(
            "run-accruals",
            help="Post monthly leave accruals for eligible employees",
        )
        accruals.add_argument("--employees", required=True, help="Employee records (.json)")
        accruals.add_argument(
            "--month",
            type=parse_month_key,
            help="Month key YYYY-MM (default: month of --date)",
        )
        accruals.add_argument(
            "--date",
            type=parse_date,
            help="Posting date inside the month (default: today)",
        )
        accruals.add_argument("--policy", help="Leave policy (.json, default: built-in)")
        accruals.add_argument("--output", help="Output file (default: stdout)")

        # anniversary-caps command
        caps = subparsers.add_parser(
            "anniversary-caps",
            help="Forfeit balances above the carry-over cap in anniversary months",
        )
        caps.add_argument("--employees", required=True, help="Employee records (.json)")
        caps.add_argument("--date", type=parse_date, help="Reference date (default: today)")
        caps.add_argument("--policy", help="Leave policy (.json, default: built-in)")
        caps.add_argument("--output", help="Output file (default: stdout)")

        # accrual-preview command
        preview = subparsers.add_parser(
            "accrual-preview",
            help="Show each employee's monthly accrual without posting",
        )
        preview.add_argument("--employees", required=True, help="Employee records (.json)")
        preview.add_argument("--date", type=parse_date, help="Reference date (default: today)")
        preview.add_argument("--policy", help="Leave policy (.json, default: built-in)")

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run CLI with arguments."""
        parsed = self.parser.parse_args(args)
        configure_logging(parsed.log_level)

        if not parsed.command:
            self.parser.print_help()
            return 1

        commands: dict[str, Callable[[argparse.Namespace], int]] = {
            "recompute": self._cmd_recompute,
            "run-accruals": self._cmd_run_accruals,
            "anniversary-caps": self._cmd_anniversary_caps,
            "accrual-preview": self._cmd_accrual_preview,
        }

        try:
            return commands[parsed.command](parsed)
        except (InputError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    def _load_policy(self, path: str | None) -> LeavePolicyConfig:
        if path is None:
            return policy_or_default(None)
        return _validate(LeavePolicySchema, path).to_domain()

    def _write(self, payload: Any, output: str | None) -> None:
        text = json.dumps(payload, indent=2, default=str)
        if output:
            Path(output).write_text(text + "\n", encoding="utf-8")
        else:
            print(text)

    def _dump_employees(self, employees: Sequence[Employee]) -> list[dict[str, Any]]:
        return [EmployeeSchema.from_domain(e).model_dump(mode="json") for e in employees]

    def _cmd_recompute(self, args: argparse.Namespace) -> int:
        """Recompute a worksheet."""
        rows = _validate(_rows_adapter, args.worksheet)
        employees = _validate(_employees_adapter, args.employees)
        rates = _validate(MasterRatesSchema, args.rates)

        service = WorksheetService(rates.to_catalog())
        recomputed = service.recompute_worksheet(
            [row.to_domain() for row in rows],
            employees_to_domain(employees),
        )
        stats = service.stats(recomputed)

        self._write(
            {
                "rows": [
                    PayrollRowSchema.from_domain(row, service.effective_total(row)).model_dump(
                        mode="json"
                    )
                    for row in recomputed
                ],
                "stats": {
                    "grand_total": str(stats.grand_total),
                    "total_hours": str(stats.total_hours),
                    "standby_quantity": str(stats.standby_quantity),
                    "flagged": stats.flagged,
                    "row_count": stats.row_count,
                },
            },
            args.output,
        )
        print(
            f"Recomputed {stats.row_count} rows, {stats.flagged} flagged",
            file=sys.stderr,
        )
        return 0

    def _cmd_run_accruals(self, args: argparse.Namespace) -> int:
        """Run monthly accruals."""
        employees = _validate(_employees_adapter, args.employees)
        policy = self._load_policy(args.policy)
        posting_date = args.date or date.today()
        month_key = args.month or month_key_of(posting_date)

        result = run_monthly_accruals(
            employees_to_domain(employees), policy, month_key, today=posting_date
        )

        self._write(self._dump_employees(result.employees), args.output)
        print(
            f"Accruals {month_key}: {result.processed} processed, "
            f"{result.skipped} skipped, {result.already_run} already run",
            file=sys.stderr,
        )
        return 0

    def _cmd_anniversary_caps(self, args: argparse.Namespace) -> int:
        """Run anniversary caps."""
        employees = _validate(_employees_adapter, args.employees)
        policy = self._load_policy(args.policy)

        result = run_anniversary_caps(employees_to_domain(employees), policy, args.date)

        self._write(self._dump_employees(result.employees), args.output)
        print(
            f"Anniversary caps {result.reference_date}: {result.checked} checked, "
            f"{result.forfeited} forfeited",
            file=sys.stderr,
        )
        return 0

    def _cmd_accrual_preview(self, args: argparse.Namespace) -> int:
        """Preview accruals."""
        employees = _validate(_employees_adapter, args.employees)
        policy = self._load_policy(args.policy)
        calculator = LeaveAccrualCalculator()

        preview = []
        for employee in employees_to_domain(employees):
            result = calculator.accrue(employee, policy, args.date)
            entry = AccrualResultSchema.from_domain(result).model_dump(mode="json")
            preview.append({"full_name": employee.full_name, **entry})

        self._write(preview, None)
        return 0


def main() -> int:
    """CLI entry point."""
    cli = WorksheetCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
