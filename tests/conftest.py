"""Pytest fixtures for payroll worksheet tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from payroll_worksheet.calculators.rate_catalog import RateCatalog
from payroll_worksheet.calculators.row_resolver import PayRowResolver
from payroll_worksheet.models import (
    DEFAULT_LEAVE_POLICY,
    Employee,
    EmploymentType,
    LeaveBank,
    LeavePolicyConfig,
    PayCodeDefinition,
    PayLevel,
    PayrollConfig,
    PayType,
)
from payroll_worksheet.services.leave_ledger import LeaveLedger

REFERENCE_DATE = date(2026, 10, 15)


@pytest.fixture
def pay_codes() -> list[PayCodeDefinition]:
    """Pay code definitions used across tests."""
    return [
        PayCodeDefinition("shift_pay", "Shift Pay", PayType.HOURLY, "#86efac"),
        PayCodeDefinition("on_call", "On Call", PayType.HOURLY, "#f0abfc"),
        PayCodeDefinition("local_tx", "Local TX", PayType.FLAT, "#4ade80"),
        PayCodeDefinition("overtime", "Overtime", PayType.HOURLY, "#93c5fd"),
        PayCodeDefinition("training", "Training", PayType.HOURLY, "#fde047"),
    ]


@pytest.fixture
def catalog(pay_codes: list[PayCodeDefinition]) -> RateCatalog:
    """Rate catalog with three pay levels."""
    return RateCatalog(
        pay_codes,
        {
            "FF-1": PayLevel(
                rank=1,
                rates={
                    "overtime": Decimal("25"),
                    "shift_pay": Decimal("18"),
                    "local_tx": Decimal("35"),
                },
            ),
            "Paramedic": PayLevel(
                rank=2,
                rates={
                    "shift_pay": Decimal("25"),
                    "on_call": Decimal("3"),
                    "local_tx": Decimal("35"),
                    "training": Decimal("0"),
                },
            ),
            "Hourly Only": PayLevel(rank=0, rates={}),
        },
    )


@pytest.fixture
def resolver(catalog: RateCatalog) -> PayRowResolver:
    return PayRowResolver(catalog)


@pytest.fixture
def john_doe() -> Employee:
    return Employee(full_name="John Doe", pay_level="FF-1")


@pytest.fixture
def joe_beck() -> Employee:
    """Stored in "Last, First" form with explicit name parts."""
    return Employee(
        full_name="Beck, Joe",
        first_name="Joe",
        last_name="Beck",
        pay_level="Paramedic",
    )


@pytest.fixture
def carla_ruiz() -> Employee:
    """Custom pay scale with an explicit zero for training."""
    return Employee(
        full_name="Carla Ruiz",
        pay_level="Paramedic",
        payroll_config=PayrollConfig(
            use_custom_pay_scale=True,
            custom_rates={"shift_pay": Decimal("30"), "training": Decimal("0")},
        ),
    )


@pytest.fixture
def sam_hourly() -> Employee:
    """No pay level configured."""
    return Employee(full_name="Sam Hourly")


@pytest.fixture
def employees(
    john_doe: Employee, joe_beck: Employee, carla_ruiz: Employee, sam_hourly: Employee
) -> list[Employee]:
    return [john_doe, joe_beck, carla_ruiz, sam_hourly]


@pytest.fixture
def policy() -> LeavePolicyConfig:
    return DEFAULT_LEAVE_POLICY


@pytest.fixture
def ledger() -> LeaveLedger:
    return LeaveLedger()


@pytest.fixture
def full_timer() -> Employee:
    """Full-time 12-hour shift employee hired six years before the reference date."""
    return Employee(
        full_name="Dana Fulton",
        pay_level="FF-1",
        employment_type=EmploymentType.FULL_TIME,
        ft_start_date="2020-03-01",
        shift_schedule="24/48",
        leave_bank=LeaveBank(),
    )
