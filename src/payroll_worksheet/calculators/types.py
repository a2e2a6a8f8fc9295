"""Result types for the calculators."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

TIER_NOT_APPLICABLE = "N/A"
TIER_INVALID_DATE = "Invalid Date"
TIER_UNKNOWN = "Unknown Tier"


@dataclass(frozen=True)
class AccrualResult:
    """Monthly leave entitlement for one employee."""

    vacation_hours: Decimal
    personal_hours: Decimal
    tier_label: str
    years_of_service: int
    yearly_allowance_hours: Decimal

    @property
    def total_monthly(self) -> Decimal:
        return self.vacation_hours + self.personal_hours

    @property
    def is_zero(self) -> bool:
        return self.vacation_hours == 0 and self.personal_hours == 0

    @classmethod
    def zero(cls, tier_label: str, years_of_service: int = 0) -> AccrualResult:
        return cls(
            vacation_hours=Decimal("0"),
            personal_hours=Decimal("0"),
            tier_label=tier_label,
            years_of_service=years_of_service,
            yearly_allowance_hours=Decimal("0"),
        )
