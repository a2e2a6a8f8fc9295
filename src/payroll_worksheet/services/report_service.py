"""Printable payroll report data.

Produces the figures a printed worksheet shows. All money is taken from
effective totals (manual overrides applied) and rounded to cents only at
this boundary.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from payroll_worksheet.calculators.row_resolver import PayRowResolver
from payroll_worksheet.models.payroll import PayrollRow
from payroll_worksheet.models.rates import HOURLY_ONLY_LEVEL

USER_PAY_LEVEL = "User-Pay-Level"


class ReportView(str, Enum):
    """Which rows a report covers and how they are grouped."""

    SUMMARY = "summary"
    DETAIL = "detail"
    HOURLY_ONLY = "hourly_only"
    CUSTOM = "custom"


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (cents)."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ReportLine:
    """A detail line with the amount actually paid."""

    row: PayrollRow
    effective_total: Decimal


@dataclass
class CodeSubtotal:
    total_hours: Decimal = Decimal("0")
    total_pay: Decimal = Decimal("0")
    lines: int = 0


@dataclass
class EmployeeSummary:
    """Per-employee totals with a per-code breakdown."""

    name: str
    pay_level: str
    total_hours: Decimal = Decimal("0")
    total_pay: Decimal = Decimal("0")
    codes: dict[str, CodeSubtotal] = field(default_factory=dict)


@dataclass(frozen=True)
class PayrollReport:
    view: ReportView
    generated_at: datetime
    lines: list[ReportLine]
    employees: list[EmployeeSummary]
    total_hours: Decimal
    total_pay: Decimal


class ReportService:
    """Builds report data for the print views."""

    def __init__(self, resolver: PayRowResolver):
        self.resolver = resolver

    @staticmethod
    def select_rows(
        rows: Sequence[PayrollRow],
        view: ReportView,
        selected_ids: Collection[str] | None = None,
    ) -> list[PayrollRow]:
        if view == ReportView.HOURLY_ONLY:
            levels = {HOURLY_ONLY_LEVEL.lower(), USER_PAY_LEVEL.lower()}
            return [row for row in rows if row.pay_level.lower() in levels]
        if view == ReportView.CUSTOM:
            wanted = set(selected_ids or ())
            return [row for row in rows if row.row_id in wanted]
        return list(rows)

    def build(
        self,
        rows: Sequence[PayrollRow],
        view: ReportView = ReportView.SUMMARY,
        selected_ids: Collection[str] | None = None,
        generated_at: datetime | None = None,
    ) -> PayrollReport:
        selected = self.select_rows(rows, view, selected_ids)
        lines = [ReportLine(row, self.resolver.effective_total(row)) for row in selected]

        groups: dict[str, EmployeeSummary] = {}
        # names whose pay level came from a row without an alert
        resolved_levels: set[str] = set()
        for line in lines:
            row = line.row
            summary = groups.setdefault(
                row.employee_name,
                EmployeeSummary(name=row.employee_name, pay_level=row.pay_level),
            )
            if not row.is_flagged and row.employee_name not in resolved_levels:
                summary.pay_level = row.pay_level
                resolved_levels.add(row.employee_name)
            summary.total_hours += row.quantity
            summary.total_pay += line.effective_total

            subtotal = summary.codes.setdefault(row.code, CodeSubtotal())
            subtotal.total_hours += row.quantity
            subtotal.total_pay += line.effective_total
            subtotal.lines += 1

        employees = sorted(groups.values(), key=lambda s: s.name.lower())
        for summary in employees:
            summary.total_pay = round_to_cents(summary.total_pay)
            for subtotal in summary.codes.values():
                subtotal.total_pay = round_to_cents(subtotal.total_pay)

        return PayrollReport(
            view=view,
            generated_at=generated_at or datetime.now(timezone.utc),
            lines=lines,
            employees=employees,
            total_hours=sum((line.row.quantity for line in lines), Decimal("0")),
            total_pay=round_to_cents(sum((line.effective_total for line in lines), Decimal("0"))),
        )
