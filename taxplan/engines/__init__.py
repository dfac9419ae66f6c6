"""Tax computation engines."""

from taxplan.engines.deductions import DeductionResolver
from taxplan.engines.estimator import TaxEstimator
from taxplan.engines.income import IncomeAggregator
from taxplan.engines.payments import PaymentScheduler

__all__ = [
    "DeductionResolver",
    "IncomeAggregator",
    "PaymentScheduler",
    "TaxEstimator",
]
