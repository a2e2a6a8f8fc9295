"""Worksheet operations: import, recompute, overrides and totals."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from decimal import Decimal

from payroll_worksheet.calculators.rate_catalog import RateCatalog
from payroll_worksheet.calculators.row_resolver import PayRowResolver
from payroll_worksheet.models.employee import Employee
from payroll_worksheet.models.payroll import PayrollRow, TimeEntryInput

logger = logging.getLogger(__name__)

STANDBY_MARKERS = ("standby", "on call")


@dataclass(frozen=True)
class WorksheetStats:
    """Headline figures for a worksheet."""

    grand_total: Decimal
    total_hours: Decimal
    standby_quantity: Decimal
    flagged: int
    row_count: int


def is_standby_code(code: str) -> bool:
    lowered = code.lower()
    return any(marker in lowered for marker in STANDBY_MARKERS)


class WorksheetService:
    """Builds and maintains a payroll worksheet against one rate catalog."""

    def __init__(self, catalog: RateCatalog):
        self.catalog = catalog
        self.resolver = PayRowResolver(catalog)

    def import_rows(
        self,
        entries: Iterable[TimeEntryInput],
        employees: Sequence[Employee],
    ) -> list[PayrollRow]:
        """Resolve each imported entry independently."""
        rows = []
        for entry in entries:
            row = self.resolver.resolve(
                entry.employee_name,
                entry.pay_code,
                entry.quantity,
                employees,
            )
            rows.append(
                replace(
                    row,
                    start_date=entry.start_date,
                    start_time=entry.start_time,
                    end_date=entry.end_date,
                    end_time=entry.end_time,
                )
            )

        flagged = sum(1 for row in rows if row.is_flagged)
        logger.info("Imported %d rows (%d flagged)", len(rows), flagged)
        return rows

    def recompute_worksheet(
        self,
        rows: Sequence[PayrollRow],
        employees: Sequence[Employee],
    ) -> list[PayrollRow]:
        """Re-resolve every row against current rates and staff settings."""
        return [self.resolver.recompute(row, employees) for row in rows]

    @staticmethod
    def update_row_override(
        row: PayrollRow,
        override: Decimal | None,
        note: str | None = None,
    ) -> PayrollRow:
        """Set or clear a row's manual rate override."""
        return replace(row, manual_rate_override=override, manual_note=note)

    def effective_total(self, row: PayrollRow) -> Decimal:
        return self.resolver.effective_total(row)

    def stats(self, rows: Sequence[PayrollRow]) -> WorksheetStats:
        grand_total = Decimal("0")
        total_hours = Decimal("0")
        standby = Decimal("0")
        flagged = 0

        for row in rows:
            grand_total += self.effective_total(row)
            total_hours += row.quantity
            if is_standby_code(row.code):
                standby += row.quantity
            if row.is_flagged:
                flagged += 1

        return WorksheetStats(
            grand_total=grand_total,
            total_hours=total_hours,
            standby_quantity=standby,
            flagged=flagged,
            row_count=len(rows),
        )
