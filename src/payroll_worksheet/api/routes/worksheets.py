"""Worksheet endpoints: resolve, recompute, stats and report data."""

from fastapi import APIRouter

from payroll_worksheet.api.schemas import (
    CodeSubtotalSchema,
    EmployeeSummarySchema,
    ErrorResponse,
    PayrollRowSchema,
    RecomputeRequest,
    ReportRequest,
    ReportResponse,
    ResolveRequest,
    StatsRequest,
    WorksheetResponse,
    WorksheetStatsSchema,
    employees_to_domain,
)
from payroll_worksheet.models.payroll import PayrollRow
from payroll_worksheet.services.report_service import ReportService
from payroll_worksheet.services.worksheet_service import WorksheetService

router = APIRouter(prefix="/worksheets", tags=["worksheets"])


def _worksheet_response(service: WorksheetService, rows: list[PayrollRow]) -> WorksheetResponse:
    stats = service.stats(rows)
    return WorksheetResponse(
        rows=[PayrollRowSchema.from_domain(row, service.effective_total(row)) for row in rows],
        stats=WorksheetStatsSchema(
            grand_total=stats.grand_total,
            total_hours=stats.total_hours,
            standby_quantity=stats.standby_quantity,
            flagged=stats.flagged,
            row_count=stats.row_count,
        ),
    )


@router.post(
    "/resolve",
    response_model=WorksheetResponse,
    responses={400: {"model": ErrorResponse}},
)
async def resolve_entries(payload: ResolveRequest) -> WorksheetResponse:
    """Resolve imported time entries into priced rows."""
    service = WorksheetService(payload.rates.to_catalog())
    rows = service.import_rows(
        [entry.to_domain() for entry in payload.entries],
        employees_to_domain(payload.employees),
    )
    return _worksheet_response(service, rows)


@router.post(
    "/recompute",
    response_model=WorksheetResponse,
    responses={400: {"model": ErrorResponse}},
)
async def recompute_worksheet(payload: RecomputeRequest) -> WorksheetResponse:
    """Re-resolve every row, keeping ids, overrides, notes and shift times."""
    service = WorksheetService(payload.rates.to_catalog())
    rows = service.recompute_worksheet(
        [row.to_domain() for row in payload.rows],
        employees_to_domain(payload.employees),
    )
    return _worksheet_response(service, rows)


@router.post(
    "/stats",
    response_model=WorksheetStatsSchema,
    responses={400: {"model": ErrorResponse}},
)
async def worksheet_stats(payload: StatsRequest) -> WorksheetStatsSchema:
    """Totals for a worksheet, using effective totals."""
    service = WorksheetService(payload.rates.to_catalog())
    stats = service.stats([row.to_domain() for row in payload.rows])
    return WorksheetStatsSchema(
        grand_total=stats.grand_total,
        total_hours=stats.total_hours,
        standby_quantity=stats.standby_quantity,
        flagged=stats.flagged,
        row_count=stats.row_count,
    )


@router.post(
    "/report",
    response_model=ReportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def worksheet_report(payload: ReportRequest) -> ReportResponse:
    """Report data for the print views."""
    service = WorksheetService(payload.rates.to_catalog())
    report = ReportService(service.resolver).build(
        [row.to_domain() for row in payload.rows],
        view=payload.view,
        selected_ids=payload.selected_ids,
    )
    return ReportResponse(
        view=report.view,
        generated_at=report.generated_at,
        lines=[
            PayrollRowSchema.from_domain(line.row, line.effective_total)
            for line in report.lines
        ],
        employees=[
            EmployeeSummarySchema(
                name=summary.name,
                pay_level=summary.pay_level,
                total_hours=summary.total_hours,
                total_pay=summary.total_pay,
                codes=[
                    CodeSubtotalSchema(
                        code=code,
                        total_hours=subtotal.total_hours,
                        total_pay=subtotal.total_pay,
                        lines=subtotal.lines,
                    )
                    for code, subtotal in summary.codes.items()
                ],
            )
            for summary in report.employees
        ],
        total_hours=report.total_hours,
        total_pay=report.total_pay,
    )
