"""Leave ledger - balances backed by an append-only transaction history.

Every operation takes an employee and returns a new employee carrying a
new LeaveBank. Nothing is mutated in place; the caller persists what it
gets back.

Invariant: for any bank produced here,
    vacation_balance == sum(tx.delta_vacation for tx in history)
    personal_balance == sum(tx.delta_personal for tx in history)
provided the bank it started from satisfied the same.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from uuid import uuid4

from payroll_worksheet.calculators.accrual import LeaveAccrualCalculator
from payroll_worksheet.calculators.types import AccrualResult
from payroll_worksheet.models.employee import Employee
from payroll_worksheet.models.leave import (
    LeaveBank,
    LeavePolicyConfig,
    LeaveTransaction,
    TransactionType,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

MONTH_KEY_PATTERN = re.compile(r"\d{4}-(0[1-9]|1[0-2])")


class TransactionNotFoundError(LookupError):
    """Raised when a transaction id is not in an employee's history."""

    def __init__(self, employee_name: str, transaction_id: str):
        self.employee_name = employee_name
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction '{transaction_id}' not found in leave history of {employee_name}"
        )


@dataclass(frozen=True)
class AccrualPostResult:
    """Outcome of a monthly accrual posting.

    `is_new=False` means the month was already posted and nothing changed.
    """

    employee: Employee
    is_new: bool
    transaction: LeaveTransaction | None = None
    accrual: AccrualResult | None = None

    @property
    def already_run(self) -> bool:
        return not self.is_new


def month_key_of(day: date) -> str:
    return day.strftime("%Y-%m")


def check_month_key(month_key: str, today: date) -> None:
    """Reject a malformed month key or one outside the posting date's month."""
    if not MONTH_KEY_PATTERN.fullmatch(month_key):
        raise ValueError(f"Invalid month key '{month_key}', expected YYYY-MM")
    if month_key_of(today) != month_key:
        raise ValueError(
            f"Posting date {today.isoformat()} is not in accrual month {month_key}"
        )


def _transaction_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


def _draw_down(
    personal: Decimal, vacation: Decimal, hours: Decimal
) -> tuple[Decimal, Decimal]:
    """Split a draw of `hours` into (from_personal, from_vacation).

    Personal is used first while it is positive; the remainder comes from
    vacation, which may go negative.
    """
    from_personal = min(personal, hours) if personal > 0 else ZERO
    return from_personal, hours - from_personal


class LeaveLedger:
    """Posts accruals, usage, adjustments and cap forfeitures."""

    def __init__(self, calculator: LeaveAccrualCalculator | None = None):
        self.calculator = calculator or LeaveAccrualCalculator()

    @staticmethod
    def bank_of(employee: Employee) -> LeaveBank:
        return employee.leave_bank or LeaveBank()

    def _post(
        self,
        employee: Employee,
        *,
        prefix: str,
        tx_type: TransactionType,
        delta_vacation: Decimal,
        delta_personal: Decimal,
        description: str,
        on: date,
        **bank_changes,
    ) -> tuple[Employee, LeaveTransaction]:
        bank = self.bank_of(employee)
        vacation = bank.vacation_balance + delta_vacation
        personal = bank.personal_balance + delta_personal

        tx = LeaveTransaction(
            transaction_id=_transaction_id(prefix),
            date=on,
            transaction_type=tx_type,
            delta_vacation=delta_vacation,
            delta_personal=delta_personal,
            description=description,
            balance_after=vacation + personal,
        )
        new_bank = replace(
            bank,
            vacation_balance=vacation,
            personal_balance=personal,
            history=(tx, *bank.history),
            **bank_changes,
        )
        logger.debug(
            "Posted %s %s for %s: vacation %s, personal %s",
            tx_type.value,
            tx.transaction_id,
            employee.full_name,
            delta_vacation,
            delta_personal,
        )
        return replace(employee, leave_bank=new_bank), tx

    def post_monthly_accrual(
        self,
        employee: Employee,
        policy: LeavePolicyConfig,
        month_key: str,
        today: date | None = None,
    ) -> AccrualPostResult:
        """Post this month's accrual unless `month_key` (YYYY-MM) was already posted.

        `today` is the posting date and must fall inside `month_key`, since
        it becomes the bank's `last_accrual_date`.
        """
        today = today or date.today()
        check_month_key(month_key, today)
        bank = self.bank_of(employee)

        if bank.last_accrual_date and month_key_of(bank.last_accrual_date) == month_key:
            logger.info("Accrual for %s already run for %s", employee.full_name, month_key)
            return AccrualPostResult(employee=employee, is_new=False)

        accrual = self.calculator.accrue(employee, policy, today)
        updated, tx = self._post(
            employee,
            prefix="ACC",
            tx_type=TransactionType.ACCRUAL,
            delta_vacation=accrual.vacation_hours,
            delta_personal=accrual.personal_hours,
            description=f"Monthly Accrual ({accrual.tier_label})",
            on=today,
            last_accrual_date=today,
        )
        return AccrualPostResult(employee=updated, is_new=True, transaction=tx, accrual=accrual)

    def apply_usage(
        self,
        employee: Employee,
        hours_used: Decimal,
        on: date,
        note: str = "",
    ) -> Employee:
        """Draw used hours, personal first, then vacation. Over-draw is allowed."""
        if hours_used <= 0:
            raise ValueError("Hours used must be positive")

        bank = self.bank_of(employee)
        from_personal, from_vacation = _draw_down(
            bank.personal_balance, bank.vacation_balance, hours_used
        )
        updated, _ = self._post(
            employee,
            prefix="USE",
            tx_type=TransactionType.USAGE,
            delta_vacation=-from_vacation,
            delta_personal=-from_personal,
            description=f"Payroll Usage: {note}",
            on=on,
        )
        return updated

    def manual_adjust(
        self,
        employee: Employee,
        amount: Decimal,
        note: str = "",
        on: date | None = None,
    ) -> Employee:
        """Credit vacation (positive amount) or debit personal-first (negative)."""
        if amount == 0:
            raise ValueError("Adjustment amount must be non-zero")

        if amount > 0:
            delta_vacation, delta_personal = amount, ZERO
        else:
            bank = self.bank_of(employee)
            from_personal, from_vacation = _draw_down(
                bank.personal_balance, bank.vacation_balance, -amount
            )
            delta_vacation, delta_personal = -from_vacation, -from_personal

        updated, _ = self._post(
            employee,
            prefix="ADJ",
            tx_type=TransactionType.ADJUSTMENT,
            delta_vacation=delta_vacation,
            delta_personal=delta_personal,
            description=f"Manual Adjustment: {note}",
            on=on or date.today(),
        )
        return updated

    def delete_transaction(self, employee: Employee, transaction_id: str) -> Employee:
        """Remove a transaction and subtract its deltas from the balances."""
        bank = self.bank_of(employee)
        tx = bank.find_transaction(transaction_id)
        if tx is None:
            raise TransactionNotFoundError(employee.full_name, transaction_id)

        new_bank = replace(
            bank,
            vacation_balance=bank.vacation_balance - tx.delta_vacation,
            personal_balance=bank.personal_balance - tx.delta_personal,
            history=tuple(t for t in bank.history if t.transaction_id != transaction_id),
        )
        logger.info("Deleted %s from leave history of %s", transaction_id, employee.full_name)
        return replace(employee, leave_bank=new_bank)

    def check_anniversary_cap(
        self,
        employee: Employee,
        policy: LeavePolicyConfig,
        on: date | None = None,
    ) -> Employee:
        """Forfeit any total balance above the shift's cap, personal first."""
        bank = self.bank_of(employee)
        cap = policy.caps.for_shift(employee.shift_hours)

        excess = bank.total_balance - cap
        if excess <= 0:
            return employee

        from_personal, from_vacation = _draw_down(
            bank.personal_balance, bank.vacation_balance, excess
        )
        updated, _ = self._post(
            employee,
            prefix="CAP",
            tx_type=TransactionType.ADJUSTMENT,
            delta_vacation=-from_vacation,
            delta_personal=-from_personal,
            description=f"Anniversary Cap Adjustment (Max {cap} hrs)",
            on=on or date.today(),
        )
        logger.info("Forfeited %s hours from %s (cap %s)", excess, employee.full_name, cap)
        return updated

    @staticmethod
    def reconcile(bank: LeaveBank) -> tuple[Decimal, Decimal]:
        """Cached balance minus history sum, per bucket. (0, 0) when consistent."""
        vacation = sum((tx.delta_vacation for tx in bank.history), ZERO)
        personal = sum((tx.delta_personal for tx in bank.history), ZERO)
        return bank.vacation_balance - vacation, bank.personal_balance - personal
