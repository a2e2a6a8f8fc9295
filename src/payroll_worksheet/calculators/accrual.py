"""Monthly leave accrual by tenure tier."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from payroll_worksheet.calculators.types import (
    TIER_INVALID_DATE,
    TIER_NOT_APPLICABLE,
    TIER_UNKNOWN,
    AccrualResult,
)
from payroll_worksheet.models.employee import Employee
from payroll_worksheet.models.leave import LeavePolicyConfig

MONTHS_PER_YEAR = Decimal("12")


def parse_start_date(value: date | str | None) -> date | None:
    """Parse a stored start date. Returns None when it is not a calendar date."""
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def years_between(start: date, reference: date) -> int:
    """Whole years from start to reference, counting an anniversary on its day."""
    years = reference.year - start.year
    if (reference.month, reference.day) < (start.month, start.day):
        years -= 1
    return max(0, years)


class LeaveAccrualCalculator:
    """Computes accrual entitlements. Never posts to the ledger.

    Monthly hours per bucket = days per year * shift hours / 12, rounded
    half-up to 4 decimal places.
    """

    PRECISION = Decimal("0.0001")

    @staticmethod
    def round_hours(hours: Decimal) -> Decimal:
        return hours.quantize(LeaveAccrualCalculator.PRECISION, rounding=ROUND_HALF_UP)

    def accrue(
        self,
        employee: Employee,
        policy: LeavePolicyConfig,
        reference_date: date | None = None,
    ) -> AccrualResult:
        """Accrual for the month containing reference_date (default today)."""
        if employee.ft_start_date is None or not employee.is_full_time:
            return AccrualResult.zero(TIER_NOT_APPLICABLE)

        start = parse_start_date(employee.ft_start_date)
        if start is None:
            return AccrualResult.zero(TIER_INVALID_DATE)

        reference = reference_date or date.today()
        years = years_between(start, reference)

        tier = policy.tier_for(years)
        if tier is None:
            return AccrualResult.zero(TIER_UNKNOWN, years)

        shift_hours = Decimal(employee.shift_hours)
        vacation = self.round_hours(tier.vacation_days_per_year * shift_hours / MONTHS_PER_YEAR)
        personal = self.round_hours(tier.personal_days_per_year * shift_hours / MONTHS_PER_YEAR)
        yearly = (tier.vacation_days_per_year + tier.personal_days_per_year) * shift_hours

        return AccrualResult(
            vacation_hours=vacation,
            personal_hours=personal,
            tier_label=tier.label,
            years_of_service=years,
            yearly_allowance_hours=yearly,
        )
