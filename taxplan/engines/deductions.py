"""Standard vs. itemized deduction resolution.

Federal itemizing applies the SALT cap (IRC 164(b)(6)) and prorates
mortgage interest to the acquisition-debt limit (IRC 163(h)(3)), which is
$1M for loans on or before 2017-12-15 and $750k after. The modeled state
does not conform to the SALT cap, does not allow its own income tax as a
deduction (R&TC 17220), and keeps the $1M limit for every loan.
"""

import logging
from decimal import Decimal

from taxplan.engines.brackets import ZERO, compute_tax
from taxplan.engines.surtax import surtax_for_table
from taxplan.engines.tax_tables import (
    FEDERAL_MORTGAGE_LIMIT_AFTER_CUTOFF,
    FEDERAL_MORTGAGE_LIMIT_BEFORE_CUTOFF,
    FEDERAL_SALT_CAP,
    STATE_MORTGAGE_LIMIT,
)
from taxplan.models.brackets import YearlyTaxTable
from taxplan.models.deductions import DeductionInputs, DeductionResult, ItemizedDeductionDetail
from taxplan.models.enums import DeductionType, FilingStatus, Jurisdiction, MortgageLoanPeriod

logger = logging.getLogger(__name__)


def prorate_mortgage_interest(
    interest: Decimal, balance: Decimal, limit: Decimal | None
) -> tuple[Decimal, bool]:
    """Scale interest by min(1, limit / balance). Returns (deductible, was_limited)."""
    if limit is None or balance <= ZERO or balance <= limit:
        return interest, False
    return interest * (limit / balance), True


def federal_mortgage_limit(inputs: DeductionInputs) -> Decimal | None:
    if inputs.mortgage_balance <= ZERO or inputs.mortgage_loan_period is None:
        return None
    if inputs.mortgage_loan_period == MortgageLoanPeriod.BEFORE_CUTOFF:
        return FEDERAL_MORTGAGE_LIMIT_BEFORE_CUTOFF
    return FEDERAL_MORTGAGE_LIMIT_AFTER_CUTOFF


def estimate_state_tax_for_salt(
    total_income: Decimal, state_table: YearlyTaxTable, filing_status: FilingStatus
) -> Decimal:
    """Provisional state liability feeding the federal SALT deduction.

    Uses only the state's standard deduction so that nothing federal flows
    back into the state estimate.
    """
    taxable = max(total_income - state_table.standard_deduction_for(filing_status), ZERO)
    base = compute_tax(taxable, state_table.brackets_for(filing_status))
    return base + surtax_for_table(taxable, state_table)


class DeductionResolver:
    """Computes itemized totals per jurisdiction and picks the larger deduction."""

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def itemize(
        self,
        inputs: DeductionInputs,
        jurisdiction: Jurisdiction,
        state_income_tax: Decimal = ZERO,
    ) -> ItemizedDeductionDetail:
        if jurisdiction == Jurisdiction.FEDERAL:
            salt_total = inputs.property_tax + state_income_tax
            salt_deduction = min(salt_total, FEDERAL_SALT_CAP)
            mortgage_limit = federal_mortgage_limit(inputs)
        else:
            state_income_tax = ZERO
            salt_total = inputs.property_tax
            salt_deduction = salt_total
            mortgage_limit = STATE_MORTGAGE_LIMIT if inputs.mortgage_balance > ZERO else None

        salt_cap_applied = salt_deduction < salt_total
        mortgage_interest, limited = prorate_mortgage_interest(
            inputs.mortgage_interest, inputs.mortgage_balance, mortgage_limit
        )

        return ItemizedDeductionDetail(
            jurisdiction=jurisdiction,
            property_tax=inputs.property_tax,
            state_income_tax=state_income_tax,
            salt_total=salt_total,
            salt_deduction=salt_deduction,
            salt_cap_applied=salt_cap_applied,
            mortgage_interest=mortgage_interest,
            mortgage_limit=mortgage_limit,
            mortgage_interest_limited=limited,
            donations=inputs.donations,
            total=salt_deduction + mortgage_interest + inputs.donations,
        )

    def resolve(
        self,
        inputs: DeductionInputs,
        standard_amount: Decimal,
        jurisdiction: Jurisdiction,
        state_income_tax: Decimal = ZERO,
    ) -> DeductionResult:
        """Take the larger of standard and itemized; a tie goes to standard.

        SALT cap and mortgage proration warnings are only recorded when the
        itemized deduction is actually taken.
        """
        detail = self.itemize(inputs, jurisdiction, state_income_tax)
        if detail.total > standard_amount:
            deduction_type, amount = DeductionType.ITEMIZED, detail.total
        else:
            deduction_type, amount = DeductionType.STANDARD, standard_amount

        if deduction_type == DeductionType.ITEMIZED:
            self._warn_limits(detail, inputs.mortgage_interest)

        logger.info(
            "%s deduction: %s %s (standard=%s itemized=%s)",
            jurisdiction, deduction_type, amount, standard_amount, detail.total,
        )
        return DeductionResult(
            type=deduction_type,
            amount=amount,
            standard_amount=standard_amount,
            itemized_amount=detail.total,
            detail=detail,
        )

    def _warn_limits(self, detail: ItemizedDeductionDetail, mortgage_interest_paid: Decimal) -> None:
        if detail.salt_cap_applied:
            self.warnings.append(
                f"SALT cap: ${detail.salt_total:,.2f} in state/local taxes exceeds "
                f"the ${FEDERAL_SALT_CAP:,.2f} federal limit. "
                f"${detail.salt_total - detail.salt_deduction:,.2f} is not deductible."
            )
        if detail.mortgage_interest_limited:
            self.warnings.append(
                f"{detail.jurisdiction.title()} mortgage interest prorated to the "
                f"${detail.mortgage_limit:,.0f} debt limit: ${detail.mortgage_interest:,.2f} of "
                f"${mortgage_interest_paid:,.2f} is deductible."
            )
