"""Resolution of time entries into priced worksheet rows."""

from __future__ import annotations

import secrets
from collections.abc import Sequence
from dataclasses import replace
from decimal import Decimal

from payroll_worksheet.calculators.rate_catalog import RateCatalog
from payroll_worksheet.models.employee import Employee
from payroll_worksheet.models.payroll import (
    ALERT_AMBIGUOUS_EMPLOYEE,
    ALERT_EMPLOYEE_NOT_FOUND,
    ALERT_UNKNOWN_PAY_CODE,
    ALERT_ZERO_RATE,
    AlertSeverity,
    PayrollRow,
)
from payroll_worksheet.models.rates import HOURLY_ONLY_LEVEL, PayCodeDefinition

UNKNOWN_LEVEL = "Unknown"


def new_row_id() -> str:
    """Short random identifier for a worksheet row."""
    return secrets.token_hex(5)


class PayRowResolver:
    """Prices one (employee, pay code, quantity) triple.

    Rate selection:
    1. Custom pay scale enabled: the employee's custom rate for the code,
       or 0 when none is set. The matrix is never consulted.
    2. Otherwise the matrix rate for the employee's pay level (default
       "Hourly Only"), or 0 when not configured.

    Problems are reported on the row, never raised.
    """

    def __init__(self, catalog: RateCatalog):
        self.catalog = catalog

    def resolve(
        self,
        employee_name: str,
        pay_code: str,
        quantity: Decimal,
        employees: Sequence[Employee],
        row_id: str | None = None,
    ) -> PayrollRow:
        """Resolve a single worksheet row."""
        row = PayrollRow(
            row_id=row_id or new_row_id(),
            employee_name=employee_name,
            pay_level=UNKNOWN_LEVEL,
            code=pay_code,
            quantity=quantity,
        )

        matches = self.match_employees(employee_name, employees)
        if not matches:
            return replace(
                row,
                alert=ALERT_EMPLOYEE_NOT_FOUND,
                alert_severity=AlertSeverity.WARNING,
            )
        if len(matches) > 1:
            return replace(
                row,
                alert=ALERT_AMBIGUOUS_EMPLOYEE,
                alert_severity=AlertSeverity.ERROR,
            )

        employee = matches[0]
        row = replace(
            row,
            employee_name=employee.full_name,
            pay_level=employee.pay_level or HOURLY_ONLY_LEVEL,
        )

        definition = self.catalog.find_pay_code(pay_code)
        if definition is None:
            return replace(
                row,
                alert=ALERT_UNKNOWN_PAY_CODE,
                alert_severity=AlertSeverity.ERROR,
            )

        rate = self.rate_for(employee, definition)
        total = rate * quantity
        row = replace(row, code=definition.label, rate=rate, total=total)

        if rate == 0 and total == 0:
            row = replace(row, alert=ALERT_ZERO_RATE, alert_severity=AlertSeverity.WARNING)

        return row

    def rate_for(self, employee: Employee, definition: PayCodeDefinition) -> Decimal:
        """Authoritative rate for an employee and pay code."""
        config = employee.payroll_config
        if config.use_custom_pay_scale:
            custom = config.custom_rates.get(definition.code)
            return custom if custom is not None else Decimal("0")

        level = employee.pay_level or HOURLY_ONLY_LEVEL
        matrix_rate = self.catalog.rate_for(level, definition.code)
        return matrix_rate if matrix_rate is not None else Decimal("0")

    def recompute(self, row: PayrollRow, employees: Sequence[Employee]) -> PayrollRow:
        """Re-resolve a row, keeping the fields the resolver does not own."""
        fresh = self.resolve(
            row.employee_name,
            row.code,
            row.quantity,
            employees,
            row_id=row.row_id,
        )
        return replace(
            fresh,
            manual_rate_override=row.manual_rate_override,
            manual_note=row.manual_note,
            start_date=row.start_date,
            start_time=row.start_time,
            end_date=row.end_date,
            end_time=row.end_time,
        )

    def effective_total(self, row: PayrollRow) -> Decimal:
        """Amount to show or print for a row.

        A manual override replaces the rate: flat codes pay it once,
        hourly codes pay it per unit of quantity.
        """
        if row.manual_rate_override is None:
            return row.total

        definition = self.catalog.find_pay_code(row.code)
        is_flat = definition is not None and definition.is_flat
        multiplier = Decimal("1") if is_flat else row.quantity
        return row.manual_rate_override * multiplier

    @staticmethod
    def match_employees(query: str, employees: Sequence[Employee]) -> list[Employee]:
        """All employees answering to the query name."""
        return [employee for employee in employees if employee.matches_name(query)]
