"""Progressive-bracket tax arithmetic.

Every table this module sees is a contiguous ladder starting at zero whose
last bracket is unbounded (``max is None``). ``validate_brackets`` enforces
that when reference data is loaded, so the computation functions never
re-check it per call.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from taxplan.exceptions import BracketTableError
from taxplan.models.brackets import TaxBracket

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
WHOLE = Decimal("1")


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def round_whole(amount: Decimal) -> Decimal:
    return amount.quantize(WHOLE, rounding=ROUND_HALF_UP)


def validate_brackets(brackets: list[TaxBracket], label: str = "table") -> None:
    """Raise BracketTableError unless brackets form a contiguous ladder over [0, inf)."""
    if not brackets:
        raise BracketTableError(f"{label}: no brackets")
    if brackets[0].min != ZERO:
        raise BracketTableError(f"{label}: first bracket starts at {brackets[0].min}, not 0")

    for i, bracket in enumerate(brackets):
        is_last = i == len(brackets) - 1
        if bracket.max is None:
            if not is_last:
                raise BracketTableError(f"{label}: unbounded bracket at position {i} is not last")
            continue
        if is_last:
            raise BracketTableError(f"{label}: top bracket is bounded at {bracket.max}")
        if bracket.max <= bracket.min:
            raise BracketTableError(
                f"{label}: bracket {i} is empty or inverted ({bracket.min} -> {bracket.max})"
            )
        following = brackets[i + 1]
        if following.min > bracket.max:
            raise BracketTableError(
                f"{label}: gap between {bracket.max} and {following.min}"
            )
        if following.min < bracket.max:
            raise BracketTableError(
                f"{label}: brackets overlap between {following.min} and {bracket.max}"
            )


def compute_tax(income: Decimal, brackets: list[TaxBracket]) -> Decimal:
    """Apply progressive tax brackets to income, rounded to the cent."""
    if income <= ZERO:
        return round_cents(ZERO)

    tax = ZERO
    remaining = income
    for bracket in brackets:
        if remaining <= ZERO:
            break
        width = bracket.width
        taxed_here = remaining if width is None else min(remaining, width)
        tax += taxed_here * bracket.rate
        remaining -= taxed_here
        logger.debug("bracket %s-%s @ %s: %s taxed", bracket.min, bracket.max, bracket.rate, taxed_here)

    # Income past a bounded top bracket; cannot happen with a validated table.
    if remaining > ZERO:
        tax += remaining * brackets[-1].rate

    return round_cents(tax)


def marginal_rate(income: Decimal, brackets: list[TaxBracket]) -> Decimal:
    """Rate of the first bracket whose upper bound is at or above income."""
    for bracket in brackets:
        if bracket.max is None or bracket.max >= income:
            return bracket.rate
    return brackets[-1].rate


def effective_rate(tax: Decimal, total_income: Decimal) -> Decimal:
    """Tax as a percentage of total income, rounded to two decimals."""
    if total_income <= ZERO:
        return round_cents(ZERO)
    return round_cents(tax / total_income * Decimal("100"))
