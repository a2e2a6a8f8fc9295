"""Tests for the leave accrual calculator."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from payroll_worksheet.calculators.accrual import (
    LeaveAccrualCalculator,
    parse_start_date,
    years_between,
)
from payroll_worksheet.calculators.types import (
    TIER_INVALID_DATE,
    TIER_NOT_APPLICABLE,
    TIER_UNKNOWN,
)
from payroll_worksheet.models import AccrualTier, EmploymentType, LeavePolicyConfig, PtoStatus
from payroll_worksheet.models.employee import shift_hours_for

REFERENCE_DATE = date(2026, 10, 15)


@pytest.fixture
def calculator() -> LeaveAccrualCalculator:
    return LeaveAccrualCalculator()


class TestYearsOfService:
    """Anniversary counting."""

    def test_exact_anniversary_counts(self):
        assert years_between(date(2024, 10, 15), date(2026, 10, 15)) == 2

    def test_day_before_anniversary(self):
        assert years_between(date(2024, 10, 16), date(2026, 10, 15)) == 1

    def test_earlier_month_same_year(self):
        assert years_between(date(2024, 11, 1), date(2026, 10, 31)) == 1

    def test_future_start_floors_at_zero(self):
        assert years_between(date(2027, 1, 1), date(2026, 10, 15)) == 0


class TestParseStartDate:
    def test_iso_date(self):
        assert parse_start_date("2020-03-01") == date(2020, 3, 1)

    def test_iso_datetime_prefix(self):
        assert parse_start_date("2020-03-01T08:00:00Z") == date(2020, 3, 1)

    def test_date_passthrough(self):
        assert parse_start_date(date(2020, 3, 1)) == date(2020, 3, 1)

    @pytest.mark.parametrize("value", ["", None, "not a date", "2020-13-01"])
    def test_unparseable(self, value):
        assert parse_start_date(value) is None


class TestShiftHours:
    @pytest.mark.parametrize(
        "schedule,hours",
        [
            ("4/10", 10),
            ("10 hour days", 10),
            ("12 hour days", 12),
            ("24/48", 12),
            ("", 12),
            (None, 12),
            ("Kelly", 12),
        ],
    )
    def test_shift_hours(self, schedule, hours):
        assert shift_hours_for(schedule) == hours


class TestEligibility:
    """Employees who earn nothing."""

    def test_prn_is_not_applicable(self, calculator, policy, full_timer):
        prn = replace(full_timer, employment_type=EmploymentType.PRN)
        result = calculator.accrue(prn, policy, REFERENCE_DATE)

        assert result.tier_label == TIER_NOT_APPLICABLE
        assert result.is_zero

    def test_missing_start_date_is_not_applicable(self, calculator, policy, full_timer):
        result = calculator.accrue(replace(full_timer, ft_start_date=None), policy, REFERENCE_DATE)
        assert result.tier_label == TIER_NOT_APPLICABLE

    def test_invalid_start_date(self, calculator, policy, full_timer):
        result = calculator.accrue(
            replace(full_timer, ft_start_date="someday"), policy, REFERENCE_DATE
        )

        assert result.tier_label == TIER_INVALID_DATE
        assert result.vacation_hours == Decimal("0")
        assert result.personal_hours == Decimal("0")

    def test_no_matching_tier(self, calculator, full_timer):
        policy = LeavePolicyConfig(tiers=(AccrualTier(10, Decimal("20"), Decimal("5")),))
        result = calculator.accrue(full_timer, policy, REFERENCE_DATE)

        assert result.tier_label == TIER_UNKNOWN
        assert result.years_of_service == 6
        assert result.is_zero


class TestMonthlyAccrual:
    def test_twelve_hour_shift(self, calculator, policy, full_timer):
        result = calculator.accrue(full_timer, policy, REFERENCE_DATE)

        assert result.years_of_service == 6
        assert result.tier_label == "5+ Years"
        assert result.vacation_hours == Decimal("15.0000")
        assert result.personal_hours == Decimal("5.0000")
        assert result.total_monthly == Decimal("20")
        assert result.yearly_allowance_hours == Decimal("240")

    def test_ten_hour_shift_rounds_to_four_places(self, calculator, policy, full_timer):
        new_hire = replace(full_timer, ft_start_date="2026-01-05", shift_schedule="4/10")
        result = calculator.accrue(new_hire, policy, REFERENCE_DATE)

        assert result.tier_label == "0+ Years"
        assert result.vacation_hours == Decimal("8.3333")
        assert result.personal_hours == Decimal("4.1667")
        assert result.yearly_allowance_hours == Decimal("150")

    def test_tier_selection_ignores_order(self, calculator, full_timer):
        policy = LeavePolicyConfig(
            tiers=(
                AccrualTier(10, Decimal("20"), Decimal("5")),
                AccrualTier(0, Decimal("10"), Decimal("5")),
                AccrualTier(5, Decimal("15"), Decimal("6")),
            )
        )
        result = calculator.accrue(full_timer, policy, REFERENCE_DATE)

        assert result.tier_label == "5+ Years"
        assert result.personal_hours == Decimal("6")

    def test_tier_boundary_on_anniversary(self, calculator, policy, full_timer):
        before = calculator.accrue(full_timer, policy, date(2025, 2, 28))
        on = calculator.accrue(full_timer, policy, date(2025, 3, 1))

        assert before.tier_label == "0+ Years"
        assert on.tier_label == "5+ Years"

    def test_frozen_status_does_not_change_preview(self, calculator, policy, full_timer):
        frozen = replace(full_timer, pto_status=PtoStatus.FROZEN)
        assert calculator.accrue(frozen, policy, REFERENCE_DATE) == calculator.accrue(
            full_timer, policy, REFERENCE_DATE
        )
