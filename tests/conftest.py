"""Shared test fixtures for taxplan."""

from datetime import date
from decimal import Decimal

import pytest

from taxplan.models.brackets import TaxBracket
from taxplan.models.deductions import DeductionInputs
from taxplan.models.income import PersonIncome


@pytest.fixture
def spring_2024() -> date:
    """Before every 2024 due date."""
    return date(2024, 3, 1)


@pytest.fixture
def no_deductions() -> DeductionInputs:
    return DeductionInputs()


@pytest.fixture
def wage_earner_150k() -> PersonIncome:
    """Single W-2 earner, income already final for the year."""
    return PersonIncome(
        ytd_wages=Decimal("150000"),
        ytd_federal_withheld=Decimal("25000"),
        ytd_state_withheld=Decimal("8000"),
    )


@pytest.fixture
def wage_earner_with_gains() -> PersonIncome:
    return PersonIncome(
        ytd_wages=Decimal("200000"),
        ytd_federal_withheld=Decimal("40000"),
        ytd_state_withheld=Decimal("15000"),
        short_term_gains=Decimal("10000"),
        long_term_gains=Decimal("30000"),
    )


@pytest.fixture
def three_bracket_ladder() -> list[TaxBracket]:
    """First three 2025 single brackets, bounded at the top."""
    return [
        TaxBracket(min=Decimal("0"), max=Decimal("11925"), rate=Decimal("0.10")),
        TaxBracket(min=Decimal("11925"), max=Decimal("48475"), rate=Decimal("0.12")),
        TaxBracket(min=Decimal("48475"), max=Decimal("103350"), rate=Decimal("0.22")),
    ]
