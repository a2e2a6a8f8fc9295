"""Payroll worksheet rows and the time entries they are built from."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class AlertSeverity(str, Enum):
    """Severity of a row-level alert."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# Row alert texts
ALERT_EMPLOYEE_NOT_FOUND = "Employee not found"
ALERT_AMBIGUOUS_EMPLOYEE = "Ambiguous Employee Name"
ALERT_UNKNOWN_PAY_CODE = "Unknown Pay Code"
ALERT_ZERO_RATE = "Zero Rate"


@dataclass(frozen=True)
class TimeEntryInput:
    """One imported time entry, before rate resolution."""

    employee_name: str
    pay_code: str
    quantity: Decimal
    start_date: str | None = None
    start_time: str | None = None
    end_date: str | None = None
    end_time: str | None = None


@dataclass(frozen=True)
class PayrollRow:
    """A resolved worksheet line.

    `rate`, `total`, `pay_level`, `code` and the alert fields belong to the
    resolver and are rebuilt on every recompute. Everything else is carried
    over unchanged.
    """

    row_id: str
    employee_name: str
    pay_level: str
    code: str
    quantity: Decimal
    rate: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    manual_rate_override: Decimal | None = None
    manual_note: str | None = None
    alert: str | None = None
    alert_severity: AlertSeverity | None = None
    start_date: str | None = None
    start_time: str | None = None
    end_date: str | None = None
    end_time: str | None = None

    @property
    def has_override(self) -> bool:
        return self.manual_rate_override is not None

    @property
    def is_flagged(self) -> bool:
        return bool(self.alert)
