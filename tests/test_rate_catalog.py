"""Tests for the rate catalog."""

from decimal import Decimal

import pytest

from payroll_worksheet.calculators.rate_catalog import DuplicatePayCodeError, RateCatalog
from payroll_worksheet.models import PayCodeDefinition, PayLevel


class TestFindPayCode:
    """Lookup by code or label."""

    def test_find_by_code(self, catalog):
        definition = catalog.find_pay_code("shift_pay")
        assert definition is not None
        assert definition.label == "Shift Pay"

    def test_find_by_label_case_insensitive(self, catalog):
        assert catalog.find_pay_code("shift pay").code == "shift_pay"
        assert catalog.find_pay_code("  OVERTIME ").code == "overtime"

    def test_code_and_label_resolve_to_same_definition(self, catalog):
        assert catalog.find_pay_code("local_tx") is catalog.find_pay_code("Local TX")

    def test_unknown_identifier(self, catalog):
        assert catalog.find_pay_code("Holiday Pay") is None

    def test_duplicate_label_rejected(self):
        with pytest.raises(DuplicatePayCodeError) as exc_info:
            RateCatalog(
                [
                    PayCodeDefinition("ot", "Overtime"),
                    PayCodeDefinition("overtime_2", "overtime"),
                ]
            )
        assert exc_info.value.key == "overtime"

    def test_label_colliding_with_other_code_rejected(self):
        with pytest.raises(DuplicatePayCodeError):
            RateCatalog(
                [
                    PayCodeDefinition("training", "Training"),
                    PayCodeDefinition("drill", "TRAINING"),
                ]
            )

    def test_code_equal_to_own_label_allowed(self):
        catalog = RateCatalog([PayCodeDefinition("Training", "training")])
        assert catalog.find_pay_code("TRAINING").code == "Training"


class TestRateFor:
    """Matrix lookups."""

    def test_configured_rate(self, catalog):
        assert catalog.rate_for("FF-1", "overtime") == Decimal("25")

    def test_explicit_zero_is_not_absent(self, catalog):
        assert catalog.rate_for("Paramedic", "training") == Decimal("0")
        assert catalog.rate_for("Paramedic", "training") is not None

    def test_missing_rate_is_none(self, catalog):
        assert catalog.rate_for("FF-1", "on_call") is None

    def test_unknown_level_is_none(self, catalog):
        assert catalog.rate_for("Captain", "overtime") is None

    def test_sorted_levels_by_rank(self, catalog):
        names = [name for name, _ in catalog.sorted_levels()]
        assert names == ["Hourly Only", "FF-1", "Paramedic"]

    def test_pay_levels_copy(self, catalog):
        levels = catalog.pay_levels
        levels["Captain"] = PayLevel(rank=9)
        assert "Captain" not in catalog.pay_levels
