"""Leave bank, ledger transactions and accrual policy."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Leave ledger transaction types."""

    ACCRUAL = "accrual"
    USAGE = "usage"
    ADJUSTMENT = "adjustment"


@dataclass(frozen=True)
class LeaveTransaction:
    """One entry of the append-only leave ledger.

    Every transaction stores the exact delta it applied to each bucket.
    Deleting a transaction subtracts those deltas again, so a transaction
    must never record a recomputed running value in place of a delta.
    """

    transaction_id: str
    date: date
    transaction_type: TransactionType
    delta_vacation: Decimal
    delta_personal: Decimal
    description: str
    balance_after: Decimal  # vacation + personal right after posting


@dataclass(frozen=True)
class LeaveBank:
    """Leave balances plus the history that produced them.

    Balances are a cache of the history: each must equal the sum of its
    deltas. History is ordered newest first.
    """

    vacation_balance: Decimal = Decimal("0")
    personal_balance: Decimal = Decimal("0")
    last_accrual_date: date | None = None
    history: tuple[LeaveTransaction, ...] = ()

    @property
    def total_balance(self) -> Decimal:
        return self.vacation_balance + self.personal_balance

    def find_transaction(self, transaction_id: str) -> LeaveTransaction | None:
        for tx in self.history:
            if tx.transaction_id == transaction_id:
                return tx
        return None


@dataclass(frozen=True)
class AccrualTier:
    """Tenure bracket: entitlement once `min_years` of service is reached."""

    min_years: int
    vacation_days_per_year: Decimal
    personal_days_per_year: Decimal

    @property
    def label(self) -> str:
        return f"{self.min_years}+ Years"


@dataclass(frozen=True)
class LeaveCaps:
    """Anniversary carry-over caps in hours, by shift length."""

    cap_10_hour_shift: Decimal = Decimal("50")
    cap_12_hour_shift: Decimal = Decimal("60")

    def for_shift(self, shift_hours: int) -> Decimal:
        if shift_hours == 12:
            return self.cap_12_hour_shift
        return self.cap_10_hour_shift


@dataclass(frozen=True)
class LeavePolicyConfig:
    """Accrual tiers and carry-over caps. Tiers may be in any order."""

    tiers: tuple[AccrualTier, ...] = ()
    caps: LeaveCaps = field(default_factory=LeaveCaps)

    def tier_for(self, years_of_service: int) -> AccrualTier | None:
        """Tier with the greatest min_years not above years_of_service."""
        eligible = [t for t in self.tiers if t.min_years <= years_of_service]
        if not eligible:
            return None
        return max(eligible, key=lambda t: t.min_years)


DEFAULT_LEAVE_POLICY = LeavePolicyConfig(
    tiers=(
        AccrualTier(0, Decimal("10"), Decimal("5")),
        AccrualTier(5, Decimal("15"), Decimal("5")),
        AccrualTier(10, Decimal("20"), Decimal("5")),
        AccrualTier(15, Decimal("25"), Decimal("5")),
        AccrualTier(20, Decimal("30"), Decimal("5")),
    ),
    caps=LeaveCaps(),
)
