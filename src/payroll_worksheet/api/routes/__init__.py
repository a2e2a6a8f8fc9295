"""API routes."""

from payroll_worksheet.api.routes.health import router as health_router
from payroll_worksheet.api.routes.leave import router as leave_router
from payroll_worksheet.api.routes.worksheets import router as worksheets_router

__all__ = ["health_router", "leave_router", "worksheets_router"]
