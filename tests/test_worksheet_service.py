"""Tests for worksheet operations."""

from decimal import Decimal

import pytest

from payroll_worksheet.models import TimeEntryInput
from payroll_worksheet.services.worksheet_service import WorksheetService, is_standby_code


@pytest.fixture
def service(catalog) -> WorksheetService:
    return WorksheetService(catalog)


@pytest.fixture
def entries() -> list[TimeEntryInput]:
    return [
        TimeEntryInput("Doe, John", "Overtime", Decimal("5"), "2026-10-01", "07:00", "2026-10-01", "12:00"),
        TimeEntryInput("Joe Beck", "On Call", Decimal("24")),
        TimeEntryInput("Joe Beck", "Local TX", Decimal("2")),
        TimeEntryInput("Nobody Here", "Overtime", Decimal("3")),
    ]


class TestImport:
    def test_each_entry_resolved(self, service, entries, employees):
        rows = service.import_rows(entries, employees)

        assert [r.employee_name for r in rows] == ["John Doe", "Beck, Joe", "Beck, Joe", "Nobody Here"]
        assert [r.total for r in rows] == [
            Decimal("125"),
            Decimal("72"),
            Decimal("70"),
            Decimal("0"),
        ]
        assert rows[3].is_flagged

    def test_schedule_fields_copied(self, service, entries, employees):
        row = service.import_rows(entries, employees)[0]

        assert row.start_date == "2026-10-01"
        assert row.start_time == "07:00"
        assert row.end_time == "12:00"

    def test_row_ids_unique(self, service, entries, employees):
        rows = service.import_rows(entries, employees)
        assert len({r.row_id for r in rows}) == len(rows)


class TestOverrides:
    def test_set_and_clear_override(self, service, entries, employees):
        row = service.import_rows(entries, employees)[0]

        overridden = service.update_row_override(row, Decimal("40"), "Acting officer")
        assert overridden.has_override
        assert overridden.manual_note == "Acting officer"
        assert service.effective_total(overridden) == Decimal("200")
        assert overridden.total == Decimal("125")

        cleared = service.update_row_override(overridden, None)
        assert not cleared.has_override
        assert service.effective_total(cleared) == Decimal("125")

    def test_recompute_keeps_override(self, service, entries, employees):
        rows = service.import_rows(entries, employees)
        rows[0] = service.update_row_override(rows[0], Decimal("40"), "Acting officer")

        recomputed = service.recompute_worksheet(rows, employees)

        assert recomputed[0].manual_rate_override == Decimal("40")
        assert recomputed[0].row_id == rows[0].row_id
        assert [r.row_id for r in recomputed] == [r.row_id for r in rows]


class TestStats:
    def test_totals(self, service, entries, employees):
        rows = service.import_rows(entries, employees)
        rows[2] = service.update_row_override(rows[2], Decimal("50"))

        stats = service.stats(rows)

        # 125 + 72 + 50 (flat override) + 0
        assert stats.grand_total == Decimal("247")
        assert stats.total_hours == Decimal("34")
        assert stats.standby_quantity == Decimal("24")
        assert stats.flagged == 1
        assert stats.row_count == 4

    def test_empty(self, service):
        stats = service.stats([])
        assert stats.grand_total == Decimal("0")
        assert stats.row_count == 0

    @pytest.mark.parametrize(
        "code,expected",
        [("On Call", True), ("Standby Pay", True), ("Overtime", False)],
    )
    def test_standby_codes(self, code, expected):
        assert is_standby_code(code) is expected
