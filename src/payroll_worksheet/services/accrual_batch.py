"""Batch leave operations over a whole roster."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from payroll_worksheet.calculators.accrual import parse_start_date
from payroll_worksheet.models.employee import Employee, PtoStatus
from payroll_worksheet.models.leave import LeavePolicyConfig
from payroll_worksheet.services.leave_ledger import LeaveLedger, check_month_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccrualBatchResult:
    """Updated roster and counts from a monthly accrual run."""

    month_key: str
    employees: list[Employee] = field(default_factory=list)
    processed: int = 0
    skipped: int = 0
    already_run: int = 0


@dataclass(frozen=True)
class CapBatchResult:
    """Updated roster and counts from an anniversary cap run."""

    reference_date: date
    employees: list[Employee] = field(default_factory=list)
    checked: int = 0
    forfeited: int = 0


def is_accrual_eligible(employee: Employee) -> bool:
    """Full-time employees whose leave is not frozen."""
    return employee.is_full_time and employee.pto_status != PtoStatus.FROZEN


def is_anniversary_month(employee: Employee, reference_date: date) -> bool:
    start = parse_start_date(employee.ft_start_date)
    return start is not None and start.month == reference_date.month


def run_monthly_accruals(
    employees: Sequence[Employee],
    policy: LeavePolicyConfig,
    month_key: str,
    today: date | None = None,
    ledger: LeaveLedger | None = None,
) -> AccrualBatchResult:
    """Post the month's accrual for every eligible employee.

    The same policy and month key apply to the whole roster. Ineligible
    employees pass through untouched. Raises ValueError when `today` is
    not inside `month_key`.
    """
    ledger = ledger or LeaveLedger()
    today = today or date.today()
    check_month_key(month_key, today)

    updated: list[Employee] = []
    processed = skipped = already_run = 0

    for employee in employees:
        if not is_accrual_eligible(employee):
            skipped += 1
            updated.append(employee)
            continue

        result = ledger.post_monthly_accrual(employee, policy, month_key, today)
        if result.is_new:
            processed += 1
        else:
            already_run += 1
        updated.append(result.employee)

    logger.info(
        "Monthly accruals %s: %d processed, %d skipped, %d already run",
        month_key,
        processed,
        skipped,
        already_run,
    )
    return AccrualBatchResult(
        month_key=month_key,
        employees=updated,
        processed=processed,
        skipped=skipped,
        already_run=already_run,
    )


def run_anniversary_caps(
    employees: Sequence[Employee],
    policy: LeavePolicyConfig,
    reference_date: date | None = None,
    ledger: LeaveLedger | None = None,
) -> CapBatchResult:
    """Apply the carry-over cap to full-time employees in their anniversary month."""
    ledger = ledger or LeaveLedger()
    reference_date = reference_date or date.today()

    updated: list[Employee] = []
    checked = forfeited = 0

    for employee in employees:
        if not employee.is_full_time or not is_anniversary_month(employee, reference_date):
            updated.append(employee)
            continue

        checked += 1
        capped = ledger.check_anniversary_cap(employee, policy, on=reference_date)
        if capped is not employee:
            forfeited += 1
        updated.append(capped)

    logger.info(
        "Anniversary caps %s: %d checked, %d forfeited",
        reference_date.isoformat(),
        checked,
        forfeited,
    )
    return CapBatchResult(
        reference_date=reference_date,
        employees=updated,
        checked=checked,
        forfeited=forfeited,
    )
