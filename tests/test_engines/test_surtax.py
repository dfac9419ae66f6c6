"""Tests for the state high-income surtax."""

from decimal import Decimal

from taxplan.engines.surtax import compute_surtax, surtax_for_table
from taxplan.engines.tax_tables import get_tax_table
from taxplan.models.enums import Jurisdiction

THRESHOLD = Decimal("1000000")
RATE = Decimal("0.01")


class TestSurtax:
    def test_below_threshold(self):
        assert compute_surtax(Decimal("999999"), THRESHOLD, RATE) == Decimal("0.00")

    def test_at_threshold(self):
        assert compute_surtax(THRESHOLD, THRESHOLD, RATE) == Decimal("0.00")

    def test_above_threshold(self):
        assert compute_surtax(Decimal("1250000"), THRESHOLD, RATE) == Decimal("2500.00")

    def test_no_threshold(self):
        assert compute_surtax(Decimal("5000000"), None, RATE) == Decimal("0.00")

    def test_state_table(self):
        table = get_tax_table(2025, Jurisdiction.STATE)
        assert surtax_for_table(Decimal("1100000"), table) == Decimal("1000.00")

    def test_federal_table_has_none(self):
        table = get_tax_table(2025, Jurisdiction.FEDERAL)
        assert surtax_for_table(Decimal("5000000"), table) == Decimal("0.00")
