"""Worksheet, ledger and report services."""

from payroll_worksheet.services.accrual_batch import (
    AccrualBatchResult,
    CapBatchResult,
    run_anniversary_caps,
    run_monthly_accruals,
)
from payroll_worksheet.services.leave_ledger import (
    AccrualPostResult,
    LeaveLedger,
    TransactionNotFoundError,
)
from payroll_worksheet.services.report_service import PayrollReport, ReportService, ReportView
from payroll_worksheet.services.worksheet_service import WorksheetService, WorksheetStats

__all__ = [
    "AccrualBatchResult",
    "AccrualPostResult",
    "CapBatchResult",
    "LeaveLedger",
    "PayrollReport",
    "ReportService",
    "ReportView",
    "TransactionNotFoundError",
    "WorksheetService",
    "WorksheetStats",
    "run_anniversary_caps",
    "run_monthly_accruals",
]
