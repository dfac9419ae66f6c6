"""Tests for itemized deductions and standard-vs-itemized resolution."""

from decimal import Decimal

import pytest

from taxplan.engines.brackets import round_cents
from taxplan.engines.deductions import (
    DeductionResolver,
    estimate_state_tax_for_salt,
    prorate_mortgage_interest,
)
from taxplan.engines.tax_tables import get_tax_table
from taxplan.models.deductions import DeductionInputs
from taxplan.models.enums import DeductionType, FilingStatus, Jurisdiction, MortgageLoanPeriod

FEDERAL = Jurisdiction.FEDERAL
STATE = Jurisdiction.STATE


@pytest.fixture
def resolver():
    return DeductionResolver()


class TestFederalSalt:
    def test_capped_at_10k(self, resolver):
        inputs = DeductionInputs(property_tax=Decimal("15000"))
        detail = resolver.itemize(inputs, FEDERAL, state_income_tax=Decimal("8000"))
        assert detail.salt_total == Decimal("23000")
        assert detail.salt_deduction == Decimal("10000")
        assert detail.salt_cap_applied is True
        assert detail.total == Decimal("10000")

    def test_cap_warning_only_when_itemizing(self, resolver):
        inputs = DeductionInputs(property_tax=Decimal("15000"), donations=Decimal("10000"))
        resolver.resolve(inputs, Decimal("30000"), FEDERAL, state_income_tax=Decimal("8000"))
        assert resolver.warnings == []
        resolver.resolve(inputs, Decimal("15000"), FEDERAL, state_income_tax=Decimal("8000"))
        assert len(resolver.warnings) == 1
        assert "SALT cap" in resolver.warnings[0]

    def test_under_cap(self, resolver):
        inputs = DeductionInputs(property_tax=Decimal("5000"))
        detail = resolver.itemize(inputs, FEDERAL, state_income_tax=Decimal("3000"))
        assert detail.total == Decimal("8000")
        assert detail.salt_cap_applied is False
        assert resolver.warnings == []


class TestFederalMortgage:
    def test_after_cutoff_750k_limit(self, resolver):
        inputs = DeductionInputs(
            mortgage_interest=Decimal("30000"),
            mortgage_balance=Decimal("1000000"),
            mortgage_loan_period=MortgageLoanPeriod.AFTER_CUTOFF,
        )
        detail = resolver.itemize(inputs, FEDERAL)
        # 30,000 x 750k / 1M
        assert detail.total == Decimal("22500")
        assert detail.mortgage_interest_limited is True
        assert detail.mortgage_limit == Decimal("750000")

    def test_before_cutoff_1m_limit(self, resolver):
        inputs = DeductionInputs(
            mortgage_interest=Decimal("50000"),
            mortgage_balance=Decimal("1200000"),
            mortgage_loan_period=MortgageLoanPeriod.BEFORE_CUTOFF,
        )
        detail = resolver.itemize(inputs, FEDERAL)
        # 50,000 x 1M / 1.2M
        assert round_cents(detail.total) == Decimal("41666.67")

    def test_under_limit_not_prorated(self, resolver):
        inputs = DeductionInputs(
            mortgage_interest=Decimal("20000"),
            mortgage_balance=Decimal("500000"),
            mortgage_loan_period=MortgageLoanPeriod.AFTER_CUTOFF,
        )
        detail = resolver.itemize(inputs, FEDERAL)
        assert detail.total == Decimal("20000")
        assert detail.mortgage_interest_limited is False

    def test_unknown_loan_period_takes_full_interest(self, resolver):
        inputs = DeductionInputs(
            mortgage_interest=Decimal("30000"),
            mortgage_balance=Decimal("1000000"),
        )
        assert resolver.itemize(inputs, FEDERAL).total == Decimal("30000")

    def test_salt_mortgage_and_donations_combined(self, resolver):
        inputs = DeductionInputs(
            property_tax=Decimal("12000"),
            mortgage_interest=Decimal("40000"),
            mortgage_balance=Decimal("900000"),
            mortgage_loan_period=MortgageLoanPeriod.AFTER_CUTOFF,
            donations=Decimal("5000"),
        )
        result = resolver.resolve(inputs, Decimal("15000"), FEDERAL)
        # 10,000 SALT + 33,333.33 interest + 5,000 donations
        assert round_cents(result.amount) == Decimal("48333.33")
        assert result.type == DeductionType.ITEMIZED
        assert len(resolver.warnings) == 2


class TestStateItemized:
    def test_1m_limit_regardless_of_loan_date(self, resolver):
        inputs = DeductionInputs(
            mortgage_interest=Decimal("50000"),
            mortgage_balance=Decimal("1500000"),
            mortgage_loan_period=MortgageLoanPeriod.AFTER_CUTOFF,
        )
        detail = resolver.itemize(inputs, STATE)
        assert round_cents(detail.total) == Decimal("33333.33")
        assert detail.mortgage_limit == Decimal("1000000")

    def test_own_income_tax_never_deductible(self, resolver):
        inputs = DeductionInputs(
            property_tax=Decimal("10000"),
            other_state_income_tax=Decimal("5000"),
        )
        detail = resolver.itemize(inputs, STATE, state_income_tax=Decimal("5000"))
        assert detail.state_income_tax == Decimal("0")
        assert detail.total == Decimal("10000")

    def test_property_tax_uncapped(self, resolver):
        inputs = DeductionInputs(property_tax=Decimal("25000"))
        detail = resolver.itemize(inputs, STATE)
        assert detail.total == Decimal("25000")
        assert detail.salt_cap_applied is False

    def test_all_combined(self, resolver):
        inputs = DeductionInputs(
            property_tax=Decimal("8000"),
            mortgage_interest=Decimal("30000"),
            mortgage_balance=Decimal("800000"),
            donations=Decimal("3000"),
        )
        assert resolver.itemize(inputs, STATE).total == Decimal("41000")


class TestResolve:
    def test_itemized_wins(self, resolver):
        inputs = DeductionInputs(property_tax=Decimal("5000"), donations=Decimal("25000"))
        result = resolver.resolve(inputs, Decimal("15000"), FEDERAL)
        assert result.type == DeductionType.ITEMIZED
        assert result.amount == Decimal("30000")
        assert result.standard_amount == Decimal("15000")
        assert result.detail is not None

    def test_tie_goes_to_standard(self, resolver):
        inputs = DeductionInputs(donations=Decimal("15000"))
        result = resolver.resolve(inputs, Decimal("15000"), FEDERAL)
        assert result.type == DeductionType.STANDARD
        assert result.amount == Decimal("15000")
        assert result.itemized_amount == Decimal("15000")

    @pytest.mark.parametrize(
        "inputs",
        [
            DeductionInputs(),
            DeductionInputs(donations=Decimal("14999")),
            DeductionInputs(property_tax=Decimal("40000")),
            DeductionInputs(property_tax=Decimal("9000"), donations=Decimal("9000")),
        ],
    )
    def test_amount_is_max_of_standard_and_itemized(self, resolver, inputs):
        for jurisdiction in (FEDERAL, STATE):
            result = resolver.resolve(inputs, Decimal("15000"), jurisdiction)
            assert result.amount == max(Decimal("15000"), result.itemized_amount)
            assert result.amount >= result.standard_amount


class TestProration:
    def test_no_limit(self):
        assert prorate_mortgage_interest(Decimal("1000"), Decimal("5000000"), None) == (
            Decimal("1000"),
            False,
        )

    def test_zero_balance(self):
        assert prorate_mortgage_interest(Decimal("1000"), Decimal("0"), Decimal("750000")) == (
            Decimal("1000"),
            False,
        )

    def test_balance_equal_to_limit(self):
        interest, limited = prorate_mortgage_interest(
            Decimal("1000"), Decimal("750000"), Decimal("750000")
        )
        assert interest == Decimal("1000")
        assert limited is False


class TestStateEstimateForSalt:
    def test_uses_state_standard_deduction(self):
        """150,000 - 5,540 = 144,460 state taxable (2024 single)."""
        table = get_tax_table(2024, STATE)
        estimate = estimate_state_tax_for_salt(Decimal("150000"), table, FilingStatus.SINGLE)
        assert estimate == Decimal("10087.63")

    def test_income_below_standard_deduction(self):
        table = get_tax_table(2024, STATE)
        assert estimate_state_tax_for_salt(
            Decimal("3000"), table, FilingStatus.SINGLE
        ) == Decimal("0.00")

    def test_includes_surtax(self):
        table = get_tax_table(2025, STATE)
        income = Decimal("2511080")  # 2,500,000 taxable after the joint deduction
        estimate = estimate_state_tax_for_salt(income, table, FilingStatus.JOINT)
        base = estimate_state_tax_for_salt(Decimal("1511080"), table, FilingStatus.JOINT)
        # 1,000,000 more taxable, all in the 12.3% bracket, plus 1% surtax on it
        assert estimate - base == Decimal("133000.00")
