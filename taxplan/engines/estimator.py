"""Household tax estimation pipeline.

Computes federal and state (California) liability and the estimated
payment plan for each. Stages run in a fixed order:
  1. Income aggregation (future wages, capital loss limitation)
  2. Provisional state tax on total income with the state standard
     deduction, used only as the state income tax in federal SALT
  3. Federal deduction, ordinary bracket tax, LTCG/qualified dividend stacking
  4. State deduction, bracket tax, Mental Health Services surtax
  5. Cumulative catch-up payment plans, one per jurisdiction

Stage 2 never sees a federal number, so there is no feedback loop between
the two jurisdictions.
"""

import logging
from datetime import date
from decimal import Decimal

from taxplan.engines.brackets import (
    ZERO,
    compute_tax,
    effective_rate,
    marginal_rate,
    round_cents,
)
from taxplan.engines.capital_gains import apply_unused_deduction, stack_preferential_tax
from taxplan.engines.deductions import DeductionResolver, estimate_state_tax_for_salt
from taxplan.engines.income import IncomeAggregator
from taxplan.engines.payments import PaymentScheduler
from taxplan.engines.surtax import surtax_for_table
from taxplan.engines.tax_tables import get_due_dates, get_tax_table
from taxplan.models.brackets import YearlyTaxTable
from taxplan.models.deductions import DeductionInputs, DeductionResult
from taxplan.models.enums import FilingStatus, Jurisdiction, Quarter
from taxplan.models.income import AggregatedIncome, PersonIncome
from taxplan.models.reports import (
    EstimatedPaymentsMade,
    HouseholdInput,
    HouseholdTaxResult,
    SuggestedPayment,
    SuggestedPayments,
    TaxBreakdown,
)

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


class TaxEstimator:
    """Estimates federal and state tax liability for a household."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.aggregator = IncomeAggregator()
        self.resolver = DeductionResolver()
        self.scheduler = PaymentScheduler()

    def estimate(self, household: HouseholdInput, now: date | None = None) -> HouseholdTaxResult:
        """Run the pipeline for a parsed household input."""
        return self.compute_household(
            tax_year=household.tax_year,
            filing_status=household.filing_status,
            include_state_tax=household.include_state_tax,
            deductions=household.deductions,
            user_income=household.user_income,
            spouse_income=household.spouse_income,
            payments_made=household.payments_made,
            now=now,
        )

    def compute_household(
        self,
        tax_year: int,
        filing_status: FilingStatus,
        include_state_tax: bool,
        deductions: DeductionInputs,
        user_income: PersonIncome,
        spouse_income: PersonIncome | None = None,
        payments_made: EstimatedPaymentsMade | None = None,
        now: date | None = None,
    ) -> HouseholdTaxResult:
        """Compute both jurisdictions' breakdowns and suggested payments.

        The state breakdown and state payment plan are omitted when
        ``include_state_tax`` is false.
        """
        self.warnings = []
        self.resolver.warnings = []
        payments_made = payments_made or EstimatedPaymentsMade()
        today = now or date.today()

        # Reference data first: an unsupported year fails before any arithmetic.
        federal_table = get_tax_table(tax_year, Jurisdiction.FEDERAL)
        state_table = get_tax_table(tax_year, Jurisdiction.STATE) if include_state_tax else None

        # --- 1. Income aggregation ---
        income = self.aggregator.aggregate_household(
            user_income, spouse_income, filing_status, tax_year, today
        )
        if income.capital_loss_disallowed > ZERO:
            self.warnings.append(
                f"Net capital loss exceeds the ${-income.capital_loss_deduction:,.2f} annual "
                f"limit. ${income.capital_loss_disallowed:,.2f} is not deducted this year "
                f"and is not tracked as a carryforward."
            )

        # --- 2. Provisional state tax for federal SALT ---
        if state_table is not None:
            salt_state_income_tax = estimate_state_tax_for_salt(
                income.total, state_table, filing_status
            )
            logger.info("Provisional state tax for SALT: %s", salt_state_income_tax)
        else:
            salt_state_income_tax = deductions.other_state_income_tax

        # --- 3. Federal ---
        federal_deduction = self.resolver.resolve(
            deductions,
            federal_table.standard_deduction_for(filing_status),
            Jurisdiction.FEDERAL,
            state_income_tax=salt_state_income_tax,
        )
        federal = self.compute_federal_tax(
            income,
            federal_deduction,
            federal_table,
            filing_status,
            estimated_payments_made=payments_made.federal_total,
        )

        # --- 4. State ---
        state = None
        if state_table is not None:
            state_deduction = self.resolver.resolve(
                deductions,
                state_table.standard_deduction_for(filing_status),
                Jurisdiction.STATE,
            )
            state = self.compute_state_tax(
                income,
                state_deduction,
                state_table,
                filing_status,
                estimated_payments_made=payments_made.state_total,
            )
        self.warnings.extend(self.resolver.warnings)

        # --- 5. Payment plans ---
        suggested = SuggestedPayments(
            federal=self._plan(federal, tax_year, payments_made.federal, today),
            state=(
                self._plan(state, tax_year, payments_made.state, today)
                if state is not None
                else None
            ),
        )

        return HouseholdTaxResult(
            tax_year=tax_year,
            filing_status=filing_status,
            aggregated_income=income,
            federal=federal,
            state=state,
            suggested_payments=suggested,
            warnings=list(self.warnings),
        )

    # ------------------------------------------------------------------
    # Per-jurisdiction computation
    # ------------------------------------------------------------------

    def compute_federal_tax(
        self,
        income: AggregatedIncome,
        deduction: DeductionResult,
        table: YearlyTaxTable,
        filing_status: FilingStatus,
        estimated_payments_made: Decimal = ZERO,
    ) -> TaxBreakdown:
        """Ordinary bracket tax plus stacked tax on preferential income."""
        taxable_income = max(income.total - deduction.amount, ZERO)
        ordinary_taxable, preferential_taxable = apply_unused_deduction(
            income.ordinary, income.preferential, deduction.amount
        )

        brackets = table.brackets_for(filing_status)
        ordinary_tax = compute_tax(ordinary_taxable, brackets)
        preferential_tax = stack_preferential_tax(
            ordinary_taxable,
            preferential_taxable,
            table.capital_gains_brackets_for(filing_status),
        )
        total_tax = ordinary_tax + preferential_tax

        logger.info(
            "Federal: taxable=%s ordinary_tax=%s preferential_tax=%s",
            taxable_income, ordinary_tax, preferential_tax,
        )
        return self._breakdown(
            Jurisdiction.FEDERAL,
            income,
            deduction,
            taxable_income=taxable_income,
            ordinary_tax=ordinary_tax,
            preferential_tax=preferential_tax,
            surtax=round_cents(ZERO),
            total_tax=total_tax,
            withholdings=income.federal_withheld,
            estimated_payments_made=estimated_payments_made,
            marginal=marginal_rate(taxable_income, brackets),
        )

    def compute_state_tax(
        self,
        income: AggregatedIncome,
        deduction: DeductionResult,
        table: YearlyTaxTable,
        filing_status: FilingStatus,
        estimated_payments_made: Decimal = ZERO,
    ) -> TaxBreakdown:
        """All income taxed on the ordinary ladder, then the surtax on top."""
        taxable_income = max(income.total - deduction.amount, ZERO)
        brackets = table.brackets_for(filing_status)
        ordinary_tax = compute_tax(taxable_income, brackets)
        surtax = surtax_for_table(taxable_income, table)

        marginal = marginal_rate(taxable_income, brackets)
        if surtax > ZERO:
            marginal += table.surtax_rate

        logger.info("State: taxable=%s tax=%s surtax=%s", taxable_income, ordinary_tax, surtax)
        return self._breakdown(
            Jurisdiction.STATE,
            income,
            deduction,
            taxable_income=taxable_income,
            ordinary_tax=ordinary_tax,
            preferential_tax=round_cents(ZERO),
            surtax=surtax,
            total_tax=ordinary_tax + surtax,
            withholdings=income.state_withheld,
            estimated_payments_made=estimated_payments_made,
            marginal=marginal,
        )

    @staticmethod
    def _breakdown(
        jurisdiction: Jurisdiction,
        income: AggregatedIncome,
        deduction: DeductionResult,
        *,
        taxable_income: Decimal,
        ordinary_tax: Decimal,
        preferential_tax: Decimal,
        surtax: Decimal,
        total_tax: Decimal,
        withholdings: Decimal,
        estimated_payments_made: Decimal,
        marginal: Decimal,
    ) -> TaxBreakdown:
        return TaxBreakdown(
            jurisdiction=jurisdiction,
            total_income=income.total,
            deduction=deduction,
            taxable_income=taxable_income,
            ordinary_tax=ordinary_tax,
            preferential_tax=preferential_tax,
            surtax=surtax,
            total_tax=total_tax,
            withholdings=withholdings,
            estimated_payments_made=estimated_payments_made,
            owed_or_refund=total_tax - withholdings - estimated_payments_made,
            marginal_rate=round_cents(marginal * HUNDRED),
            effective_rate=effective_rate(total_tax, income.total),
        )

    def _plan(
        self,
        breakdown: TaxBreakdown,
        tax_year: int,
        already_paid: dict[Quarter, Decimal],
        now: date,
    ) -> list[SuggestedPayment]:
        plan = self.scheduler.schedule(
            breakdown.liability_after_withholding,
            get_due_dates(tax_year, breakdown.jurisdiction),
            already_paid,
            now=now,
        )
        label = breakdown.jurisdiction.title()
        self.warnings.extend(f"{label}: {w}" for w in self.scheduler.warnings)
        return plan
