"""Reference-table models: bracket ladders, yearly tables, payment due dates."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from taxplan.models.enums import FilingStatus, Jurisdiction, Quarter


class TaxBracket(BaseModel):
    min: Decimal = Field(ge=0)
    max: Decimal | None = None  # None marks the unbounded top bracket
    rate: Decimal = Field(ge=0, le=1)

    @property
    def width(self) -> Decimal | None:
        if self.max is None:
            return None
        return self.max - self.min


class YearlyTaxTable(BaseModel):
    """One jurisdiction's reference data for one tax year."""

    tax_year: int
    jurisdiction: Jurisdiction
    brackets: dict[FilingStatus, list[TaxBracket]]
    standard_deduction: dict[FilingStatus, Decimal]
    # Federal only
    capital_gains_brackets: dict[FilingStatus, list[TaxBracket]] = Field(default_factory=dict)
    # State only
    surtax_threshold: Decimal | None = None
    surtax_rate: Decimal = Decimal("0")

    def brackets_for(self, filing_status: FilingStatus) -> list[TaxBracket]:
        return self.brackets[filing_status]

    def standard_deduction_for(self, filing_status: FilingStatus) -> Decimal:
        return self.standard_deduction[filing_status]

    def capital_gains_brackets_for(self, filing_status: FilingStatus) -> list[TaxBracket]:
        return self.capital_gains_brackets.get(filing_status, [])


class EstimatedPaymentDueDate(BaseModel):
    quarter: Quarter
    due_date: date
    cumulative_percentage: Decimal = Field(ge=0, le=1)
