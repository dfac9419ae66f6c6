"""High-income surtax (California Mental Health Services Tax, R&TC 17043(a))."""

from decimal import Decimal

from taxplan.engines.brackets import ZERO, round_cents
from taxplan.models.brackets import YearlyTaxTable


def compute_surtax(taxable_income: Decimal, threshold: Decimal | None, rate: Decimal) -> Decimal:
    """Flat ``rate`` on taxable income above ``threshold``; zero at or below it."""
    if threshold is None or taxable_income <= threshold:
        return round_cents(ZERO)
    return round_cents((taxable_income - threshold) * rate)


def surtax_for_table(taxable_income: Decimal, table: YearlyTaxTable) -> Decimal:
    return compute_surtax(taxable_income, table.surtax_threshold, table.surtax_rate)
