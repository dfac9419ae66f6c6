"""Tests for progressive-bracket arithmetic and table validation."""

from decimal import Decimal

import pytest

from taxplan.engines.brackets import (
    compute_tax,
    effective_rate,
    marginal_rate,
    round_cents,
    round_whole,
    validate_brackets,
)
from taxplan.engines.tax_tables import get_tax_table
from taxplan.exceptions import BracketTableError, ConfigurationError
from taxplan.models.brackets import TaxBracket
from taxplan.models.enums import FilingStatus, Jurisdiction


def _b(lo: str, hi: str | None, rate: str) -> TaxBracket:
    return TaxBracket(
        min=Decimal(lo),
        max=Decimal(hi) if hi is not None else None,
        rate=Decimal(rate),
    )


@pytest.fixture
def single_2025():
    return get_tax_table(2025, Jurisdiction.FEDERAL).brackets_for(FilingStatus.SINGLE)


class TestComputeTax:
    def test_three_bracket_example(self, three_bracket_ladder):
        """1,192.50 + 4,386.00 + 8,035.50 = 13,614.00"""
        assert compute_tax(Decimal("85000"), three_bracket_ladder) == Decimal("13614.00")

    def test_same_result_on_full_table(self, single_2025):
        assert compute_tax(Decimal("85000"), single_2025) == Decimal("13614.00")

    def test_zero_income(self, single_2025):
        assert compute_tax(Decimal("0"), single_2025) == Decimal("0.00")

    def test_negative_income(self, single_2025):
        assert compute_tax(Decimal("-5000"), single_2025) == Decimal("0.00")

    def test_first_bracket_boundary(self, single_2025):
        assert compute_tax(Decimal("11925"), single_2025) == Decimal("1192.50")

    def test_top_bracket(self, single_2025):
        """Everything above 626,350 at 37%."""
        at_top = compute_tax(Decimal("626350"), single_2025)
        assert compute_tax(Decimal("1626350"), single_2025) == at_top + Decimal("370000.00")

    def test_income_past_bounded_top_uses_top_rate(self):
        ladder = [_b("0", "10000", "0.10"), _b("10000", "20000", "0.20")]
        # 1,000 + 2,000 + 10,000 * 20%
        assert compute_tax(Decimal("30000"), ladder) == Decimal("5000.00")

    def test_rounds_to_cents(self):
        ladder = [_b("0", None, "0.093")]
        # 5 * 9.3% = 0.465 -> 0.47 (half up)
        assert compute_tax(Decimal("5"), ladder) == Decimal("0.47")

    def test_monotonic(self, single_2025):
        prev = Decimal("0")
        for income in range(0, 800000, 7919):
            tax = compute_tax(Decimal(income), single_2025)
            assert tax >= prev
            prev = tax

    def test_continuous_at_boundaries(self, single_2025):
        """One more dollar above a bound costs exactly the next bracket's rate."""
        for current, following in zip(single_2025, single_2025[1:]):
            below = compute_tax(current.max, single_2025)
            above = compute_tax(current.max + 1, single_2025)
            assert above - below == following.rate


class TestMarginalRate:
    def test_middle_of_bracket(self, single_2025):
        assert marginal_rate(Decimal("85000"), single_2025) == Decimal("0.22")

    def test_upper_bound_is_inclusive(self, single_2025):
        assert marginal_rate(Decimal("11925"), single_2025) == Decimal("0.10")
        assert marginal_rate(Decimal("11926"), single_2025) == Decimal("0.12")

    def test_above_all_bounds(self, single_2025):
        assert marginal_rate(Decimal("10000000"), single_2025) == Decimal("0.37")

    def test_zero_income(self, single_2025):
        assert marginal_rate(Decimal("0"), single_2025) == Decimal("0.10")


class TestEffectiveRate:
    def test_percentage_two_decimals(self):
        # 13,614 / 85,000 = 16.0164...%
        assert effective_rate(Decimal("13614"), Decimal("85000")) == Decimal("16.02")

    def test_zero_income(self):
        assert effective_rate(Decimal("0"), Decimal("0")) == Decimal("0.00")


class TestRounding:
    def test_cents_half_up(self):
        assert round_cents(Decimal("0.005")) == Decimal("0.01")
        assert round_cents(Decimal("2.344")) == Decimal("2.34")

    def test_whole_half_up(self):
        assert round_whole(Decimal("2.5")) == Decimal("3")
        assert round_whole(Decimal("150.49")) == Decimal("150")


class TestValidateBrackets:
    def test_valid_ladder(self):
        validate_brackets([_b("0", "100", "0.1"), _b("100", None, "0.2")])

    def test_all_shipped_tables_valid(self, single_2025):
        validate_brackets(single_2025)

    def test_empty(self):
        with pytest.raises(BracketTableError, match="no brackets"):
            validate_brackets([])

    def test_must_start_at_zero(self):
        with pytest.raises(BracketTableError, match="not 0"):
            validate_brackets([_b("5", "100", "0.1"), _b("100", None, "0.2")])

    def test_gap(self):
        with pytest.raises(BracketTableError, match="gap"):
            validate_brackets([_b("0", "100", "0.1"), _b("150", None, "0.2")])

    def test_overlap(self):
        with pytest.raises(BracketTableError, match="overlap"):
            validate_brackets([_b("0", "100", "0.1"), _b("90", None, "0.2")])

    def test_bounded_top(self):
        with pytest.raises(BracketTableError, match="top bracket is bounded"):
            validate_brackets([_b("0", "100", "0.1"), _b("100", "200", "0.2")])

    def test_unbounded_not_last(self):
        with pytest.raises(BracketTableError, match="not last"):
            validate_brackets([_b("0", None, "0.1"), _b("100", None, "0.2")])

    def test_inverted(self):
        with pytest.raises(BracketTableError, match="empty or inverted"):
            validate_brackets(
                [_b("0", "100", "0.1"), _b("100", "100", "0.2"), _b("100", None, "0.3")]
            )

    def test_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            validate_brackets([])
