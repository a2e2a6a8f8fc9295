"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from payroll_worksheet.calculators.accrual import LeaveAccrualCalculator
from payroll_worksheet.config import Settings, get_settings
from payroll_worksheet.services.leave_ledger import LeaveLedger


def get_calculator() -> LeaveAccrualCalculator:
    """Get the accrual calculator."""
    return LeaveAccrualCalculator()


def get_ledger(
    calculator: Annotated[LeaveAccrualCalculator, Depends(get_calculator)],
) -> LeaveLedger:
    """Get a leave ledger bound to the accrual calculator."""
    return LeaveLedger(calculator)


# Type aliases for cleaner dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Calculator = Annotated[LeaveAccrualCalculator, Depends(get_calculator)]
Ledger = Annotated[LeaveLedger, Depends(get_ledger)]
