"""Calculation output models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from taxplan.models.deductions import DeductionInputs, DeductionResult
from taxplan.models.enums import FilingStatus, Jurisdiction, Quarter
from taxplan.models.income import AggregatedIncome, PersonIncome


class TaxBreakdown(BaseModel):
    """One jurisdiction's liability. Rates are percentages (22.00 == 22%)."""

    jurisdiction: Jurisdiction
    total_income: Decimal
    deduction: DeductionResult
    taxable_income: Decimal
    ordinary_tax: Decimal
    preferential_tax: Decimal = Decimal("0")
    surtax: Decimal = Decimal("0")
    total_tax: Decimal
    withholdings: Decimal
    estimated_payments_made: Decimal
    owed_or_refund: Decimal  # positive = owed, negative = refund
    marginal_rate: Decimal
    effective_rate: Decimal

    @property
    def liability_after_withholding(self) -> Decimal:
        """Portion of the tax that estimated payments must cover."""
        return self.total_tax - self.withholdings


class SuggestedPayment(BaseModel):
    quarter: Quarter
    due_date: date
    amount: Decimal
    is_already_paid: bool = False
    is_past_due: bool = False


class SuggestedPayments(BaseModel):
    federal: list[SuggestedPayment] = Field(default_factory=list)
    state: list[SuggestedPayment] | None = None


class EstimatedPaymentsMade(BaseModel):
    """Estimated payments already sent, keyed by quarter."""

    model_config = ConfigDict(extra="forbid")

    federal: dict[Quarter, Decimal] = Field(default_factory=dict)
    state: dict[Quarter, Decimal] = Field(default_factory=dict)

    @property
    def federal_total(self) -> Decimal:
        return sum(self.federal.values(), Decimal("0"))

    @property
    def state_total(self) -> Decimal:
        return sum(self.state.values(), Decimal("0"))


class HouseholdInput(BaseModel):
    """Everything one household calculation needs."""

    tax_year: int
    filing_status: FilingStatus
    include_state_tax: bool = True
    deductions: DeductionInputs = Field(default_factory=DeductionInputs)
    user_income: PersonIncome = Field(default_factory=PersonIncome)
    spouse_income: PersonIncome | None = None
    payments_made: EstimatedPaymentsMade = Field(default_factory=EstimatedPaymentsMade)


class HouseholdTaxResult(BaseModel):
    tax_year: int
    filing_status: FilingStatus
    aggregated_income: AggregatedIncome
    federal: TaxBreakdown
    state: TaxBreakdown | None = None
    suggested_payments: SuggestedPayments
    warnings: list[str] = Field(default_factory=list)

    @property
    def total_tax(self) -> Decimal:
        state_tax = self.state.total_tax if self.state is not None else Decimal("0")
        return self.federal.total_tax + state_tax

    @property
    def total_owed_or_refund(self) -> Decimal:
        state_owed = self.state.owed_or_refund if self.state is not None else Decimal("0")
        return self.federal.owed_or_refund + state_owed
