"""Leave accrual and ledger endpoints.

Each endpoint takes the employee record(s) in the body and returns the
updated copies. Persisting them is the caller's job.
"""

from fastapi import APIRouter

from payroll_worksheet.api.dependencies import Calculator, Ledger
from payroll_worksheet.api.schemas import (
    AccrualPreviewRequest,
    AccrualResultSchema,
    AdjustmentRequest,
    AnniversaryCapRequest,
    AnniversaryCapsRequest,
    AnniversaryCapsResponse,
    DeleteTransactionRequest,
    EmployeeSchema,
    ErrorResponse,
    MonthlyAccrualRequest,
    MonthlyAccrualResponse,
    UsageRequest,
    employees_to_domain,
    policy_or_default,
)
from payroll_worksheet.services.accrual_batch import run_anniversary_caps, run_monthly_accruals

router = APIRouter(prefix="/leave", tags=["leave"])


@router.post("/accrual-preview", response_model=AccrualResultSchema)
async def accrual_preview(
    payload: AccrualPreviewRequest,
    calculator: Calculator,
) -> AccrualResultSchema:
    """Compute an employee's monthly accrual without posting it."""
    result = calculator.accrue(
        payload.employee.to_domain(),
        policy_or_default(payload.policy),
        payload.reference_date,
    )
    return AccrualResultSchema.from_domain(result)


@router.post("/monthly-accruals", response_model=MonthlyAccrualResponse)
async def monthly_accruals(
    payload: MonthlyAccrualRequest,
    ledger: Ledger,
) -> MonthlyAccrualResponse:
    """Post the month's accruals for all eligible employees."""
    result = run_monthly_accruals(
        employees_to_domain(payload.employees),
        policy_or_default(payload.policy),
        payload.month_key,
        today=payload.today,
        ledger=ledger,
    )
    return MonthlyAccrualResponse(
        month_key=result.month_key,
        processed=result.processed,
        skipped=result.skipped,
        already_run=result.already_run,
        employees=[EmployeeSchema.from_domain(e) for e in result.employees],
    )


@router.post(
    "/usage",
    response_model=EmployeeSchema,
    responses={400: {"model": ErrorResponse}},
)
async def apply_usage(payload: UsageRequest, ledger: Ledger) -> EmployeeSchema:
    """Record leave usage, personal hours first."""
    updated = ledger.apply_usage(
        payload.employee.to_domain(),
        payload.hours_used,
        payload.date,
        payload.note,
    )
    return EmployeeSchema.from_domain(updated)


@router.post(
    "/adjustments",
    response_model=EmployeeSchema,
    responses={400: {"model": ErrorResponse}},
)
async def manual_adjust(payload: AdjustmentRequest, ledger: Ledger) -> EmployeeSchema:
    """Apply a signed manual adjustment."""
    updated = ledger.manual_adjust(
        payload.employee.to_domain(),
        payload.amount,
        payload.note,
        on=payload.date,
    )
    return EmployeeSchema.from_domain(updated)


@router.post(
    "/transactions/delete",
    response_model=EmployeeSchema,
    responses={404: {"model": ErrorResponse}},
)
async def delete_transaction(
    payload: DeleteTransactionRequest,
    ledger: Ledger,
) -> EmployeeSchema:
    """Delete a ledger transaction and reverse its effect."""
    updated = ledger.delete_transaction(payload.employee.to_domain(), payload.transaction_id)
    return EmployeeSchema.from_domain(updated)


@router.post("/anniversary-cap", response_model=EmployeeSchema)
async def anniversary_cap(payload: AnniversaryCapRequest, ledger: Ledger) -> EmployeeSchema:
    """Forfeit one employee's balance above the carry-over cap."""
    updated = ledger.check_anniversary_cap(
        payload.employee.to_domain(),
        policy_or_default(payload.policy),
        on=payload.date,
    )
    return EmployeeSchema.from_domain(updated)


@router.post("/anniversary-caps", response_model=AnniversaryCapsResponse)
async def anniversary_caps(
    payload: AnniversaryCapsRequest,
    ledger: Ledger,
) -> AnniversaryCapsResponse:
    """Apply carry-over caps to everyone in their anniversary month."""
    result = run_anniversary_caps(
        employees_to_domain(payload.employees),
        policy_or_default(payload.policy),
        reference_date=payload.reference_date,
        ledger=ledger,
    )
    return AnniversaryCapsResponse(
        reference_date=result.reference_date,
        checked=result.checked,
        forfeited=result.forfeited,
        employees=[EmployeeSchema.from_domain(e) for e in result.employees],
    )
