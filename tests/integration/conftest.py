"""API test fixtures."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from payroll_worksheet.api.app import create_app


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to a fresh application instance."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def rates() -> dict[str, Any]:
    return {
        "pay_codes": [
            {"code": "overtime", "label": "Overtime"},
            {"code": "on_call", "label": "On Call"},
            {"code": "local_tx", "label": "Local TX", "pay_type": "flat"},
        ],
        "pay_levels": {
            "FF-1": {"rank": 1, "rates": {"overtime": "25", "local_tx": "35"}},
            "Paramedic": {"rank": 2, "rates": {"on_call": "3"}},
        },
    }


@pytest.fixture
def staff() -> list[dict[str, Any]]:
    return [
        {"full_name": "John Doe", "pay_level": "FF-1"},
        {"full_name": "Beck, Joe", "first_name": "Joe", "last_name": "Beck", "pay_level": "Paramedic"},
    ]


@pytest.fixture
def full_timer() -> dict[str, Any]:
    return {
        "full_name": "Dana Fulton",
        "pay_level": "FF-1",
        "employment_type": "Full Time",
        "ft_start_date": "2020-03-01",
        "shift_type": "24/48",
        "leave_bank": {
            "vacation_balance": "20",
            "personal_balance": "8",
            "history": [
                {
                    "transaction_id": "ADJ-opening",
                    "date": "2026-01-01",
                    "transaction_type": "adjustment",
                    "delta_vacation": "20",
                    "delta_personal": "8",
                    "description": "Manual Adjustment: opening balance",
                    "balance_after": "28",
                }
            ],
        },
    }
