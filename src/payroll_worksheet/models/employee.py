"""Employee records as seen by the payroll and leave calculators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from payroll_worksheet.models.leave import LeaveBank


class EmploymentType(str, Enum):
    """Employment classification."""

    FULL_TIME = "Full Time"
    PRN = "PRN"


class PtoStatus(str, Enum):
    """Whether an employee's leave bank is accruing."""

    ACTIVE = "Active"
    FROZEN = "Frozen"


def shift_hours_for(shift_schedule: str | None) -> int:
    """Hours in one working day for a shift-schedule description.

    "10" anywhere means a 10-hour shift; "12" or "48" (24/48 rotations)
    mean a 12-hour shift. Anything else falls back to 12.
    """
    schedule = shift_schedule or ""
    if "10" in schedule:
        return 10
    if "12" in schedule or "48" in schedule:
        return 12
    return 12


@dataclass(frozen=True)
class PayrollConfig:
    """Per-employee pay scale settings."""

    use_custom_pay_scale: bool = False
    custom_rates: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class Employee:
    """Employee fields used by rate resolution and leave accrual."""

    full_name: str
    first_name: str | None = None
    last_name: str | None = None
    employee_id: str | None = None
    pay_level: str | None = None
    employment_type: EmploymentType = EmploymentType.PRN
    ft_start_date: date | str | None = None
    shift_schedule: str | None = None
    pto_status: PtoStatus = PtoStatus.ACTIVE
    payroll_config: PayrollConfig = field(default_factory=PayrollConfig)
    leave_bank: LeaveBank | None = None

    @property
    def is_full_time(self) -> bool:
        return self.employment_type == EmploymentType.FULL_TIME

    @property
    def shift_hours(self) -> int:
        return shift_hours_for(self.shift_schedule)

    def split_name(self) -> tuple[str, str]:
        """Return (first, last), deriving them from full_name when unset."""
        first = (self.first_name or "").strip()
        last = (self.last_name or "").strip()
        if first or last:
            return first, last

        full = self.full_name.strip()
        if "," in full:
            last, _, first = full.partition(",")
            return first.strip(), last.strip()

        parts = full.rsplit(None, 1)
        if len(parts) == 2:
            return parts[0], parts[1]
        return "", full

    def name_forms(self) -> tuple[str, ...]:
        """Normalized names this employee answers to.

        Order: "first last", "last, first", stored full name.
        """
        first, last = self.split_name()
        forms = (
            f"{first} {last}",
            f"{last}, {first}",
            self.full_name,
        )
        return tuple(form.strip().lower() for form in forms)

    def matches_name(self, query: str) -> bool:
        return query.strip().lower() in self.name_forms()
