"""Report generators."""

from taxplan.reports.summary import TaxSummaryGenerator

__all__ = ["TaxSummaryGenerator"]
