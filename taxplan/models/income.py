"""Person-level income inputs and the aggregated household buckets."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from taxplan.models.enums import IncomeMode, PayFrequency


class FutureVest(BaseModel):
    """A scheduled equity vest later in the tax year."""

    shares: Decimal = Field(default=Decimal("0"), ge=0)
    expected_price: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def value(self) -> Decimal:
        return self.shares * self.expected_price


class PersonIncome(BaseModel):
    """Realized and projected income for one person.

    Gain/loss fields are signed: a negative value is a loss. Qualified
    dividends are a subset of ordinary dividends.
    """

    # --- Year-to-date wages (W-2 style) ---
    ytd_wages: Decimal = Decimal("0")
    ytd_federal_withheld: Decimal = Decimal("0")
    ytd_state_withheld: Decimal = Decimal("0")

    income_mode: IncomeMode = IncomeMode.SIMPLE

    # --- Simple mode: flat estimate of the rest of the year ---
    future_wages: Decimal = Decimal("0")
    future_federal_withheld: Decimal = Decimal("0")
    future_state_withheld: Decimal = Decimal("0")

    # --- Detailed mode: paycheck cadence ---
    paycheck_wages: Decimal = Decimal("0")
    paycheck_federal_withheld: Decimal = Decimal("0")
    paycheck_state_withheld: Decimal = Decimal("0")
    pay_frequency: PayFrequency = PayFrequency.BIWEEKLY
    next_pay_date: date | None = None

    # --- Detailed mode: equity vests ---
    # A past vest already inside ytd_wages; only used to derive withholding rates.
    past_vest_wages: Decimal = Decimal("0")
    past_vest_federal_withheld: Decimal = Decimal("0")
    past_vest_state_withheld: Decimal = Decimal("0")
    future_vests: list[FutureVest] = Field(default_factory=list)

    # --- Investment income ---
    ordinary_dividends: Decimal = Decimal("0")
    qualified_dividends: Decimal = Decimal("0")
    interest_income: Decimal = Decimal("0")
    short_term_gains: Decimal = Decimal("0")
    long_term_gains: Decimal = Decimal("0")


class FutureIncome(BaseModel):
    """Projected wages and withholding from now until year-end."""

    wages: Decimal = Decimal("0")
    federal_withheld: Decimal = Decimal("0")
    state_withheld: Decimal = Decimal("0")
    paychecks_remaining: int = 0


class AggregatedIncome(BaseModel):
    """Household income split into the buckets each jurisdiction taxes.

    ``ordinary`` already contains short-term gains and the capped capital
    loss deduction; ``total == ordinary + preferential``.
    """

    total: Decimal
    ordinary: Decimal
    preferential: Decimal
    short_term_gains: Decimal
    long_term_gains: Decimal
    wages: Decimal
    ordinary_dividends: Decimal
    qualified_dividends: Decimal
    interest_income: Decimal
    capital_loss_deduction: Decimal = Decimal("0")
    capital_loss_disallowed: Decimal = Decimal("0")
    federal_withheld: Decimal = Decimal("0")
    state_withheld: Decimal = Decimal("0")
