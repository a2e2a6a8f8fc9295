"""Pydantic schemas for API request/response models.

The schemas also define the JSON document shapes used by the CLI. Legacy
field names written by older versions of the stored records are accepted
through validation aliases and normalized here, and only here.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from payroll_worksheet.calculators.rate_catalog import RateCatalog
from payroll_worksheet.calculators.types import AccrualResult
from payroll_worksheet.models import (
    DEFAULT_LEAVE_POLICY,
    AccrualTier,
    AlertSeverity,
    Employee,
    EmploymentType,
    LeaveBank,
    LeaveCaps,
    LeavePolicyConfig,
    LeaveTransaction,
    PayCodeDefinition,
    PayLevel,
    PayrollConfig,
    PayrollRow,
    PayType,
    PtoStatus,
    TimeEntryInput,
    TransactionType,
)
from payroll_worksheet.services.report_service import ReportView


class SchemaBase(BaseModel):
    """Base schema: accepts field names as well as aliases."""

    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Rate catalog schemas
# ============================================================================


class PayCodeSchema(SchemaBase):
    """Pay code definition."""

    code: str = Field(min_length=1)
    label: str = Field(min_length=1)
    pay_type: PayType = Field(
        default=PayType.HOURLY,
        validation_alias=AliasChoices("pay_type", "type"),
    )
    color: str | None = None
    description: str | None = None

    def to_domain(self) -> PayCodeDefinition:
        return PayCodeDefinition(
            code=self.code,
            label=self.label,
            pay_type=self.pay_type,
            color=self.color,
            description=self.description,
        )

    @classmethod
    def from_domain(cls, definition: PayCodeDefinition) -> PayCodeSchema:
        return cls(
            code=definition.code,
            label=definition.label,
            pay_type=definition.pay_type,
            color=definition.color,
            description=definition.description,
        )


class PayLevelSchema(SchemaBase):
    """One row of the rate matrix."""

    rank: int = 0
    rates: dict[str, Decimal] = Field(default_factory=dict)


class MasterRatesSchema(SchemaBase):
    """Pay code definitions plus the pay level matrix."""

    pay_codes: list[PayCodeSchema] = Field(default_factory=list)
    pay_levels: dict[str, PayLevelSchema] = Field(default_factory=dict)

    def to_catalog(self) -> RateCatalog:
        return RateCatalog(
            [code.to_domain() for code in self.pay_codes],
            {
                name: PayLevel(rank=level.rank, rates=dict(level.rates))
                for name, level in self.pay_levels.items()
            },
        )


# ============================================================================
# Leave schemas
# ============================================================================


class LeaveTransactionSchema(SchemaBase):
    """Leave ledger transaction."""

    transaction_id: str = Field(validation_alias=AliasChoices("transaction_id", "id"))
    date: dt.date
    transaction_type: TransactionType = Field(
        validation_alias=AliasChoices("transaction_type", "type")
    )
    delta_vacation: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("delta_vacation", "amount_vacation"),
    )
    delta_personal: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("delta_personal", "amount_personal"),
    )
    description: str = ""
    balance_after: Decimal = Decimal("0")

    def to_domain(self) -> LeaveTransaction:
        return LeaveTransaction(
            transaction_id=self.transaction_id,
            date=self.date,
            transaction_type=self.transaction_type,
            delta_vacation=self.delta_vacation,
            delta_personal=self.delta_personal,
            description=self.description,
            balance_after=self.balance_after,
        )

    @classmethod
    def from_domain(cls, tx: LeaveTransaction) -> LeaveTransactionSchema:
        return cls(
            transaction_id=tx.transaction_id,
            date=tx.date,
            transaction_type=tx.transaction_type,
            delta_vacation=tx.delta_vacation,
            delta_personal=tx.delta_personal,
            description=tx.description,
            balance_after=tx.balance_after,
        )


class LeaveBankSchema(SchemaBase):
    """Leave balances and history (newest first)."""

    vacation_balance: Decimal = Decimal("0")
    personal_balance: Decimal = Decimal("0")
    last_accrual_date: dt.date | None = None
    history: list[LeaveTransactionSchema] = Field(default_factory=list)

    def to_domain(self) -> LeaveBank:
        return LeaveBank(
            vacation_balance=self.vacation_balance,
            personal_balance=self.personal_balance,
            last_accrual_date=self.last_accrual_date,
            history=tuple(tx.to_domain() for tx in self.history),
        )

    @classmethod
    def from_domain(cls, bank: LeaveBank) -> LeaveBankSchema:
        return cls(
            vacation_balance=bank.vacation_balance,
            personal_balance=bank.personal_balance,
            last_accrual_date=bank.last_accrual_date,
            history=[LeaveTransactionSchema.from_domain(tx) for tx in bank.history],
        )


class AccrualTierSchema(SchemaBase):
    min_years: int = Field(ge=0)
    vacation_days_per_year: Decimal = Field(ge=0)
    personal_days_per_year: Decimal = Field(ge=0)


class LeaveCapsSchema(SchemaBase):
    cap_10_hour_shift: Decimal = Decimal("50")
    cap_12_hour_shift: Decimal = Decimal("60")


class LeavePolicySchema(SchemaBase):
    """Accrual tiers and anniversary caps."""

    tiers: list[AccrualTierSchema] = Field(min_length=1)
    caps: LeaveCapsSchema = Field(default_factory=LeaveCapsSchema)

    def to_domain(self) -> LeavePolicyConfig:
        return LeavePolicyConfig(
            tiers=tuple(
                AccrualTier(
                    min_years=tier.min_years,
                    vacation_days_per_year=tier.vacation_days_per_year,
                    personal_days_per_year=tier.personal_days_per_year,
                )
                for tier in self.tiers
            ),
            caps=LeaveCaps(
                cap_10_hour_shift=self.caps.cap_10_hour_shift,
                cap_12_hour_shift=self.caps.cap_12_hour_shift,
            ),
        )


def policy_or_default(policy: LeavePolicySchema | None) -> LeavePolicyConfig:
    return policy.to_domain() if policy is not None else DEFAULT_LEAVE_POLICY


class AccrualResultSchema(SchemaBase):
    vacation_hours: Decimal
    personal_hours: Decimal
    total_monthly: Decimal
    tier_label: str
    years_of_service: int
    yearly_allowance_hours: Decimal

    @classmethod
    def from_domain(cls, result: AccrualResult) -> AccrualResultSchema:
        return cls(
            vacation_hours=result.vacation_hours,
            personal_hours=result.personal_hours,
            total_monthly=result.total_monthly,
            tier_label=result.tier_label,
            years_of_service=result.years_of_service,
            yearly_allowance_hours=result.yearly_allowance_hours,
        )


# ============================================================================
# Employee schemas
# ============================================================================


class PayrollConfigSchema(SchemaBase):
    use_custom_pay_scale: bool = Field(
        default=False,
        validation_alias=AliasChoices("use_custom_pay_scale", "use_user_pay_scale"),
    )
    custom_rates: dict[str, Decimal] = Field(default_factory=dict)


class EmployeeSchema(SchemaBase):
    """Employee record fields used by the engine."""

    full_name: str = Field(min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    employee_id: str | None = None
    pay_level: str | None = None
    employment_type: EmploymentType = EmploymentType.PRN
    # Kept as text: an unparseable date yields an "Invalid Date" accrual
    ft_start_date: str | None = None
    shift_schedule: str | None = Field(
        default=None,
        validation_alias=AliasChoices("shift_schedule", "shiftSchedule", "shift_type"),
    )
    pto_status: PtoStatus = PtoStatus.ACTIVE
    payroll_config: PayrollConfigSchema = Field(default_factory=PayrollConfigSchema)
    leave_bank: LeaveBankSchema | None = None

    def to_domain(self) -> Employee:
        return Employee(
            full_name=self.full_name,
            first_name=self.first_name,
            last_name=self.last_name,
            employee_id=self.employee_id,
            pay_level=self.pay_level,
            employment_type=self.employment_type,
            ft_start_date=self.ft_start_date,
            shift_schedule=self.shift_schedule,
            pto_status=self.pto_status,
            payroll_config=PayrollConfig(
                use_custom_pay_scale=self.payroll_config.use_custom_pay_scale,
                custom_rates=dict(self.payroll_config.custom_rates),
            ),
            leave_bank=self.leave_bank.to_domain() if self.leave_bank else None,
        )

    @classmethod
    def from_domain(cls, employee: Employee) -> EmployeeSchema:
        start = employee.ft_start_date
        return cls(
            full_name=employee.full_name,
            first_name=employee.first_name,
            last_name=employee.last_name,
            employee_id=employee.employee_id,
            pay_level=employee.pay_level,
            employment_type=employee.employment_type,
            ft_start_date=start.isoformat() if isinstance(start, dt.date) else start,
            shift_schedule=employee.shift_schedule,
            pto_status=employee.pto_status,
            payroll_config=PayrollConfigSchema(
                use_custom_pay_scale=employee.payroll_config.use_custom_pay_scale,
                custom_rates=dict(employee.payroll_config.custom_rates),
            ),
            leave_bank=(
                LeaveBankSchema.from_domain(employee.leave_bank)
                if employee.leave_bank
                else None
            ),
        )


def employees_to_domain(employees: list[EmployeeSchema]) -> list[Employee]:
    return [employee.to_domain() for employee in employees]


# ============================================================================
# Worksheet schemas
# ============================================================================


class TimeEntrySchema(SchemaBase):
    """One imported time entry."""

    employee_name: str = Field(validation_alias=AliasChoices("employee_name", "name"))
    pay_code: str = Field(validation_alias=AliasChoices("pay_code", "code"))
    quantity: Decimal = Field(validation_alias=AliasChoices("quantity", "hours"))
    start_date: str | None = None
    start_time: str | None = None
    end_date: str | None = None
    end_time: str | None = None

    def to_domain(self) -> TimeEntryInput:
        return TimeEntryInput(
            employee_name=self.employee_name,
            pay_code=self.pay_code,
            quantity=self.quantity,
            start_date=self.start_date,
            start_time=self.start_time,
            end_date=self.end_date,
            end_time=self.end_time,
        )


class PayrollRowSchema(SchemaBase):
    """Worksheet row."""

    row_id: str = Field(validation_alias=AliasChoices("row_id", "id"))
    employee_name: str = Field(validation_alias=AliasChoices("employee_name", "name"))
    pay_level: str = "Unknown"
    code: str
    quantity: Decimal = Field(validation_alias=AliasChoices("quantity", "hours"))
    rate: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    effective_total: Decimal | None = None
    manual_rate_override: Decimal | None = None
    manual_note: str | None = None
    alert: str | None = None
    alert_severity: AlertSeverity | None = None
    start_date: str | None = None
    start_time: str | None = None
    end_date: str | None = None
    end_time: str | None = None

    def to_domain(self) -> PayrollRow:
        return PayrollRow(
            row_id=self.row_id,
            employee_name=self.employee_name,
            pay_level=self.pay_level,
            code=self.code,
            quantity=self.quantity,
            rate=self.rate,
            total=self.total,
            manual_rate_override=self.manual_rate_override,
            manual_note=self.manual_note,
            alert=self.alert or None,
            alert_severity=self.alert_severity,
            start_date=self.start_date,
            start_time=self.start_time,
            end_date=self.end_date,
            end_time=self.end_time,
        )

    @classmethod
    def from_domain(
        cls, row: PayrollRow, effective_total: Decimal | None = None
    ) -> PayrollRowSchema:
        return cls(
            row_id=row.row_id,
            employee_name=row.employee_name,
            pay_level=row.pay_level,
            code=row.code,
            quantity=row.quantity,
            rate=row.rate,
            total=row.total,
            effective_total=effective_total,
            manual_rate_override=row.manual_rate_override,
            manual_note=row.manual_note,
            alert=row.alert,
            alert_severity=row.alert_severity,
            start_date=row.start_date,
            start_time=row.start_time,
            end_date=row.end_date,
            end_time=row.end_time,
        )


class WorksheetStatsSchema(SchemaBase):
    grand_total: Decimal
    total_hours: Decimal
    standby_quantity: Decimal
    flagged: int
    row_count: int


class ResolveRequest(SchemaBase):
    """Resolve imported time entries into worksheet rows."""

    entries: list[TimeEntrySchema]
    employees: list[EmployeeSchema]
    rates: MasterRatesSchema


class RecomputeRequest(SchemaBase):
    """Recompute an existing worksheet against current data."""

    rows: list[PayrollRowSchema]
    employees: list[EmployeeSchema]
    rates: MasterRatesSchema


class WorksheetResponse(SchemaBase):
    rows: list[PayrollRowSchema]
    stats: WorksheetStatsSchema


class StatsRequest(SchemaBase):
    rows: list[PayrollRowSchema]
    rates: MasterRatesSchema


class ReportRequest(SchemaBase):
    rows: list[PayrollRowSchema]
    rates: MasterRatesSchema
    view: ReportView = ReportView.SUMMARY
    selected_ids: list[str] = Field(default_factory=list)


class CodeSubtotalSchema(SchemaBase):
    code: str
    total_hours: Decimal
    total_pay: Decimal
    lines: int


class EmployeeSummarySchema(SchemaBase):
    name: str
    pay_level: str
    total_hours: Decimal
    total_pay: Decimal
    codes: list[CodeSubtotalSchema]


class ReportResponse(SchemaBase):
    view: ReportView
    generated_at: dt.datetime
    lines: list[PayrollRowSchema]
    employees: list[EmployeeSummarySchema]
    total_hours: Decimal
    total_pay: Decimal


# ============================================================================
# Leave request/response schemas
# ============================================================================


class AccrualPreviewRequest(SchemaBase):
    employee: EmployeeSchema
    policy: LeavePolicySchema | None = None
    reference_date: dt.date | None = None


class MonthlyAccrualRequest(SchemaBase):
    """Run monthly accruals over a roster with one policy snapshot."""

    employees: list[EmployeeSchema]
    month_key: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    policy: LeavePolicySchema | None = None
    today: dt.date | None = None


class MonthlyAccrualResponse(SchemaBase):
    month_key: str
    processed: int
    skipped: int
    already_run: int
    employees: list[EmployeeSchema]


class UsageRequest(SchemaBase):
    employee: EmployeeSchema
    hours_used: Decimal = Field(gt=0)
    date: dt.date
    note: str = ""


class AdjustmentRequest(SchemaBase):
    employee: EmployeeSchema
    amount: Decimal
    note: str = ""
    date: dt.date | None = None


class DeleteTransactionRequest(SchemaBase):
    employee: EmployeeSchema
    transaction_id: str = Field(min_length=1)


class AnniversaryCapRequest(SchemaBase):
    employee: EmployeeSchema
    policy: LeavePolicySchema | None = None
    date: dt.date | None = None


class AnniversaryCapsRequest(SchemaBase):
    employees: list[EmployeeSchema]
    policy: LeavePolicySchema | None = None
    reference_date: dt.date | None = None


class AnniversaryCapsResponse(SchemaBase):
    reference_date: dt.date
    checked: int
    forfeited: int
    employees: list[EmployeeSchema]


class ErrorResponse(SchemaBase):
    """Error response body."""

    detail: str
    code: str
