"""Domain value objects."""

from payroll_worksheet.models.employee import (
    Employee,
    EmploymentType,
    PayrollConfig,
    PtoStatus,
    shift_hours_for,
)
from payroll_worksheet.models.leave import (
    DEFAULT_LEAVE_POLICY,
    AccrualTier,
    LeaveBank,
    LeaveCaps,
    LeavePolicyConfig,
    LeaveTransaction,
    TransactionType,
)
from payroll_worksheet.models.payroll import (
    AlertSeverity,
    PayrollRow,
    TimeEntryInput,
)
from payroll_worksheet.models.rates import (
    HOURLY_ONLY_LEVEL,
    PayCodeDefinition,
    PayLevel,
    PayType,
)

__all__ = [
    # Employee
    "Employee",
    "EmploymentType",
    "PayrollConfig",
    "PtoStatus",
    "shift_hours_for",
    # Leave
    "DEFAULT_LEAVE_POLICY",
    "AccrualTier",
    "LeaveBank",
    "LeaveCaps",
    "LeavePolicyConfig",
    "LeaveTransaction",
    "TransactionType",
    # Payroll
    "AlertSeverity",
    "PayrollRow",
    "TimeEntryInput",
    # Rates
    "HOURLY_ONLY_LEVEL",
    "PayCodeDefinition",
    "PayLevel",
    "PayType",
]
