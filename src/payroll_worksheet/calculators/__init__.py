"""Rate resolution and leave accrual calculators."""

from payroll_worksheet.calculators.accrual import LeaveAccrualCalculator
from payroll_worksheet.calculators.rate_catalog import DuplicatePayCodeError, RateCatalog
from payroll_worksheet.calculators.row_resolver import PayRowResolver
from payroll_worksheet.calculators.types import AccrualResult

__all__ = [
    "AccrualResult",
    "DuplicatePayCodeError",
    "LeaveAccrualCalculator",
    "PayRowResolver",
    "RateCatalog",
]
