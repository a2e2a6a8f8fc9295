"""Pay code definitions and the pay level rate matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

# Pay level used when an employee has none configured
HOURLY_ONLY_LEVEL = "Hourly Only"


class PayType(str, Enum):
    """How a pay code's rate is applied."""

    HOURLY = "hourly"
    FLAT = "flat"


@dataclass(frozen=True)
class PayCodeDefinition:
    """A category of compensation.

    `code` is the stable key used by the rate matrix and custom rates.
    `label` is the display name and doubles as a lookup key.
    """

    code: str
    label: str
    pay_type: PayType = PayType.HOURLY
    color: str | None = None
    description: str | None = None

    @property
    def is_flat(self) -> bool:
        return self.pay_type == PayType.FLAT


@dataclass(frozen=True)
class PayLevel:
    """A rank/grade row of the rate matrix.

    A code missing from `rates` means no rate is configured, which is
    distinct from an explicit zero.
    """

    rank: int = 0
    rates: dict[str, Decimal] = field(default_factory=dict)
