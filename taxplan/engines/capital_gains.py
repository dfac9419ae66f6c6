"""Federal LTCG / qualified dividend rate stacking.

Follows the Qualified Dividends and Capital Gain Tax Worksheet (Form 1040
Instructions): preferential income sits on top of ordinary taxable income
on the bracket ladder, and each slice is taxed at the capital-gains rate of
the bracket it lands in.
"""

import logging
from decimal import Decimal

from taxplan.engines.brackets import ZERO, round_cents
from taxplan.models.brackets import TaxBracket

logger = logging.getLogger(__name__)


def apply_unused_deduction(
    ordinary_income: Decimal, preferential_income: Decimal, deduction: Decimal
) -> tuple[Decimal, Decimal]:
    """Split the deduction between the two buckets.

    The deduction reduces ordinary income first. Whatever ordinary income
    cannot absorb reduces the preferential amount before stacking.

    Returns (ordinary_taxable, preferential_taxable).
    """
    ordinary_taxable = max(ordinary_income - deduction, ZERO)
    used_by_ordinary = min(deduction, ordinary_income)
    remaining_deduction = deduction - used_by_ordinary
    preferential_taxable = max(preferential_income - remaining_deduction, ZERO)
    return ordinary_taxable, preferential_taxable


def stack_preferential_tax(
    ordinary_taxable: Decimal,
    preferential_taxable: Decimal,
    brackets: list[TaxBracket],
) -> Decimal:
    """Tax preferential income as if it starts where ordinary taxable income ends."""
    if preferential_taxable <= ZERO:
        return round_cents(ZERO)

    tax = ZERO
    remaining = preferential_taxable
    cursor = ordinary_taxable

    for bracket in brackets:
        if remaining <= ZERO:
            break
        if bracket.max is None:
            room = remaining
        else:
            room = max(ZERO, bracket.max - cursor)
        taxed_here = min(remaining, room)
        if taxed_here > ZERO:
            logger.debug("preferential %s taxed at %s above %s", taxed_here, bracket.rate, cursor)
        tax += taxed_here * bracket.rate
        remaining -= taxed_here
        cursor += taxed_here

    return round_cents(tax)
