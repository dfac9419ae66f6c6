"""Deduction inputs and the standard-vs-itemized result.

Federal itemizing applies the SALT cap (IRC 164(b)(6)) and the acquisition
debt limit on mortgage interest (IRC 163(h)(3)). The modeled state does not
conform to the SALT cap and never deducts its own income tax.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from taxplan.models.enums import DeductionType, Jurisdiction, MortgageLoanPeriod


class DeductionInputs(BaseModel):
    """Annual deductible expenses for the household."""

    property_tax: Decimal = Field(
        default=Decimal("0"),
        description="State/local real estate (property) taxes paid",
    )
    mortgage_interest: Decimal = Field(
        default=Decimal("0"),
        description="Home mortgage interest (Form 1098, Box 1)",
    )
    mortgage_balance: Decimal = Field(
        default=Decimal("0"),
        description="Outstanding acquisition debt the interest was paid on",
    )
    mortgage_loan_period: MortgageLoanPeriod | None = Field(
        default=None,
        description="Whether the loan originated before or after the 2017-12-15 cutoff",
    )
    donations: Decimal = Field(
        default=Decimal("0"),
        description="Charitable contributions",
    )
    other_state_income_tax: Decimal = Field(
        default=Decimal("0"),
        description=(
            "Income tax paid to a state other than the modeled one. "
            "Only used for the federal SALT deduction when state tax is not computed."
        ),
    )


class ItemizedDeductionDetail(BaseModel):
    """Itemized deduction breakdown for one jurisdiction after caps and proration."""

    jurisdiction: Jurisdiction
    property_tax: Decimal
    state_income_tax: Decimal
    salt_total: Decimal
    salt_deduction: Decimal
    salt_cap_applied: bool
    mortgage_interest: Decimal
    mortgage_limit: Decimal | None
    mortgage_interest_limited: bool
    donations: Decimal
    total: Decimal


class DeductionResult(BaseModel):
    type: DeductionType
    amount: Decimal
    standard_amount: Decimal
    itemized_amount: Decimal
    detail: ItemizedDeductionDetail | None = None
