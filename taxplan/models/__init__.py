"""Data models for taxplan."""

from taxplan.models.brackets import EstimatedPaymentDueDate, TaxBracket, YearlyTaxTable
from taxplan.models.deductions import DeductionInputs, DeductionResult, ItemizedDeductionDetail
from taxplan.models.enums import (
    DeductionType,
    FilingStatus,
    IncomeMode,
    Jurisdiction,
    MortgageLoanPeriod,
    PayFrequency,
    Quarter,
)
from taxplan.models.income import AggregatedIncome, FutureIncome, FutureVest, PersonIncome
from taxplan.models.reports import (
    EstimatedPaymentsMade,
    HouseholdInput,
    HouseholdTaxResult,
    SuggestedPayment,
    SuggestedPayments,
    TaxBreakdown,
)

__all__ = [
    "AggregatedIncome",
    "DeductionInputs",
    "DeductionResult",
    "DeductionType",
    "EstimatedPaymentDueDate",
    "EstimatedPaymentsMade",
    "FilingStatus",
    "FutureIncome",
    "FutureVest",
    "HouseholdInput",
    "HouseholdTaxResult",
    "IncomeMode",
    "ItemizedDeductionDetail",
    "Jurisdiction",
    "MortgageLoanPeriod",
    "PayFrequency",
    "PersonIncome",
    "Quarter",
    "SuggestedPayment",
    "SuggestedPayments",
    "TaxBracket",
    "TaxBreakdown",
    "YearlyTaxTable",
]
