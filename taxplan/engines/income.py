"""Household income aggregation.

Turns per-person realized and projected income into the buckets the two
jurisdictions tax:
  - future wages, either a flat estimate or a paycheck / equity-vest projection
  - capital gain netting with the annual loss limitation (IRC Section 1211(b))
  - ordinary vs. preferential (qualified dividends + net long-term gain) split
"""

import calendar
import logging
import math
from datetime import date, timedelta
from decimal import Decimal

from taxplan.engines.brackets import ZERO, round_whole
from taxplan.engines.tax_tables import (
    CAPITAL_LOSS_LIMIT,
    DEFAULT_VEST_FEDERAL_RATE,
    DEFAULT_VEST_STATE_RATE,
)
from taxplan.exceptions import DataValidationError
from taxplan.models.enums import FilingStatus, IncomeMode, PayFrequency
from taxplan.models.income import AggregatedIncome, FutureIncome, PersonIncome

logger = logging.getLogger(__name__)

BIWEEKLY_STEP = timedelta(days=14)
WEEKS_PER_MONTH = Decimal("4.33")


def _add_months(anchor: date, months: int) -> date:
    """Same day-of-month ``months`` later, clamped to the end of shorter months."""
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    day = min(anchor.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def count_remaining_paychecks(
    next_pay_date: date | None,
    pay_frequency: PayFrequency,
    tax_year: int,
    now: date,
) -> int:
    """Count pay events from next_pay_date through December 31, inclusive.

    Without a next pay date the count is approximated from the weeks left
    between ``now`` and year-end.
    """
    year_end = date(tax_year, 12, 31)

    if next_pay_date is None:
        days_left = (year_end - now).days
        weeks_remaining = max(0, math.ceil(days_left / 7))
        if pay_frequency == PayFrequency.BIWEEKLY:
            return math.ceil(weeks_remaining / 2)
        return math.ceil(Decimal(weeks_remaining) / WEEKS_PER_MONTH)

    count = 0
    pay_date = next_pay_date
    while pay_date <= year_end:
        count += 1
        if pay_frequency == PayFrequency.BIWEEKLY:
            pay_date = pay_date + BIWEEKLY_STEP
        else:
            pay_date = _add_months(next_pay_date, count)
    return count


def vest_withholding_rates(income: PersonIncome) -> tuple[Decimal, Decimal]:
    """(federal_rate, state_rate) implied by the most recent past vest.

    The past vest is already inside year-to-date wages; it only tells us
    how heavily the employer withholds on supplemental equity income.
    """
    if income.past_vest_wages > ZERO:
        return (
            income.past_vest_federal_withheld / income.past_vest_wages,
            income.past_vest_state_withheld / income.past_vest_wages,
        )
    return DEFAULT_VEST_FEDERAL_RATE, DEFAULT_VEST_STATE_RATE


def project_future_income(income: PersonIncome, tax_year: int, now: date) -> FutureIncome:
    """Wages and withholding still to come this year."""
    if income.income_mode == IncomeMode.SIMPLE:
        return FutureIncome(
            wages=income.future_wages,
            federal_withheld=income.future_federal_withheld,
            state_withheld=income.future_state_withheld,
        )

    paychecks = count_remaining_paychecks(
        income.next_pay_date, income.pay_frequency, tax_year, now
    )
    wages = round_whole(income.paycheck_wages * paychecks)
    federal = round_whole(income.paycheck_federal_withheld * paychecks)
    state = round_whole(income.paycheck_state_withheld * paychecks)

    federal_rate, state_rate = vest_withholding_rates(income)
    for vest in income.future_vests:
        value = vest.value
        if value <= ZERO:
            continue
        wages += value
        federal += round_whole(value * federal_rate)
        state += round_whole(value * state_rate)

    return FutureIncome(
        wages=round_whole(wages),
        federal_withheld=round_whole(federal),
        state_withheld=round_whole(state),
        paychecks_remaining=paychecks,
    )


def limit_capital_loss(
    short_term: Decimal, long_term: Decimal
) -> tuple[Decimal, Decimal, Decimal, Decimal]:
    """Net short- and long-term results and apply the annual loss limit.

    Returns (short_term_gain, long_term_gain, loss_deduction, disallowed_loss):
      - a net loss yields no gains, a deduction of max(net, -limit) against
        ordinary income, and the disallowed remainder as a positive amount
      - a net gain keeps the character of the side that produced it
    """
    net = short_term + long_term

    if net < ZERO:
        deduction = max(net, -CAPITAL_LOSS_LIMIT)
        return ZERO, ZERO, deduction, deduction - net

    if short_term < ZERO:
        # ST loss absorbed by LT gain
        return ZERO, net, ZERO, ZERO
    if long_term < ZERO:
        # LT loss absorbed by ST gain
        return net, ZERO, ZERO, ZERO
    return short_term, long_term, ZERO, ZERO


class IncomeAggregator:
    """Combines user (and, for joint filers, spouse) income into tax buckets."""

    def aggregate_household(
        self,
        user: PersonIncome,
        spouse: PersonIncome | None,
        filing_status: FilingStatus,
        tax_year: int,
        now: date,
    ) -> AggregatedIncome:
        people = [user]
        if filing_status == FilingStatus.JOINT and spouse is not None:
            people.append(spouse)

        for person in people:
            self._validate(person)

        wages = federal_withheld = state_withheld = ZERO
        ordinary_dividends = qualified_dividends = interest = ZERO
        short_term = long_term = ZERO

        for person in people:
            future = project_future_income(person, tax_year, now)
            wages += person.ytd_wages + future.wages
            federal_withheld += person.ytd_federal_withheld + future.federal_withheld
            state_withheld += person.ytd_state_withheld + future.state_withheld
            ordinary_dividends += person.ordinary_dividends
            qualified_dividends += person.qualified_dividends
            interest += person.interest_income
            short_term += person.short_term_gains
            long_term += person.long_term_gains

        st_gain, lt_gain, loss_deduction, disallowed = limit_capital_loss(short_term, long_term)

        ordinary = (
            wages
            + (ordinary_dividends - qualified_dividends)
            + interest
            + st_gain
            + loss_deduction
        )
        preferential = qualified_dividends + lt_gain

        logger.info(
            "Aggregated %d person(s): ordinary=%s preferential=%s loss_deduction=%s",
            len(people), ordinary, preferential, loss_deduction,
        )

        return AggregatedIncome(
            total=ordinary + preferential,
            ordinary=ordinary,
            preferential=preferential,
            short_term_gains=st_gain,
            long_term_gains=lt_gain,
            wages=wages,
            ordinary_dividends=ordinary_dividends,
            qualified_dividends=qualified_dividends,
            interest_income=interest,
            capital_loss_deduction=loss_deduction,
            capital_loss_disallowed=disallowed,
            federal_withheld=federal_withheld,
            state_withheld=state_withheld,
        )

    @staticmethod
    def _validate(income: PersonIncome) -> None:
        if income.qualified_dividends > income.ordinary_dividends:
            raise DataValidationError(
                "qualified_dividends",
                f"{income.qualified_dividends} exceeds ordinary dividends "
                f"{income.ordinary_dividends}; qualified dividends are a subset",
            )
