"""Cumulative estimated-payment catch-up planning.

Each jurisdiction requires a running share of the annual liability to be
paid by each due date (federal 25/50/75/100%, California 30/70/100%). The
plan suggests, for every future unpaid date, whatever brings cumulative
payments up to that date's required share. Missed past dates are reported
with a zero amount; the shortfall is caught up on the next future date.
A payment made for a quarter that has no due date of its own counts toward
the next scheduled date.
"""

import logging
from datetime import date
from decimal import Decimal

from taxplan.engines.brackets import ZERO, round_cents
from taxplan.models.brackets import EstimatedPaymentDueDate
from taxplan.models.enums import Quarter
from taxplan.models.reports import SuggestedPayment

logger = logging.getLogger(__name__)

_ORDER = {quarter: i for i, quarter in enumerate(Quarter)}


def _credited_before(
    payments: list[tuple[Quarter, Decimal]], quarter: Quarter
) -> list[tuple[Quarter, Decimal]]:
    return [(q, amount) for q, amount in payments if _ORDER[q] < _ORDER[quarter]]


class PaymentScheduler:
    """Pure and stateless apart from the warnings of the last call."""

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def schedule(
        self,
        total_tax_owed: Decimal,
        due_dates: list[EstimatedPaymentDueDate],
        already_paid: dict[Quarter, Decimal] | None = None,
        now: date | None = None,
    ) -> list[SuggestedPayment]:
        """Build the quarter-by-quarter plan.

        Args:
            total_tax_owed: Liability estimated payments must cover
                (total tax minus withholding).
            due_dates: The jurisdiction's schedule for the tax year.
            already_paid: Payments already sent, keyed by quarter.
            now: Reference date; defaults to today.

        Returns:
            One SuggestedPayment per due date in chronological order, or an
            empty list when nothing is owed.
        """
        self.warnings = []
        if total_tax_owed <= ZERO:
            return []

        already_paid = already_paid or {}
        today = now or date.today()
        cumulative_paid = ZERO
        plan: list[SuggestedPayment] = []

        # Payments for a quarter with no due date of its own (California Q3)
        # count toward the next date that is on the schedule.
        scheduled = {due.quarter for due in due_dates}
        off_schedule = [
            (quarter, amount)
            for quarter, amount in already_paid.items()
            if quarter not in scheduled and amount > ZERO
        ]

        for due in sorted(due_dates, key=lambda d: d.due_date):
            for quarter, amount in _credited_before(off_schedule, due.quarter):
                logger.debug("%s payment of %s credited before %s", quarter, amount, due.quarter)
                cumulative_paid += amount
            off_schedule = [(q, a) for q, a in off_schedule if _ORDER[q] > _ORDER[due.quarter]]

            paid = already_paid.get(due.quarter, ZERO)

            if paid > ZERO:
                cumulative_paid += paid
                plan.append(
                    SuggestedPayment(
                        quarter=due.quarter,
                        due_date=due.due_date,
                        amount=paid,
                        is_already_paid=True,
                    )
                )
                continue

            if due.due_date <= today:
                self.warnings.append(
                    f"{due.quarter} estimated payment due {due.due_date.isoformat()} "
                    f"was not made; the shortfall rolls into the next due date."
                )
                plan.append(
                    SuggestedPayment(
                        quarter=due.quarter,
                        due_date=due.due_date,
                        amount=round_cents(ZERO),
                        is_past_due=True,
                    )
                )
                continue

            required = total_tax_owed * due.cumulative_percentage
            catch_up = round_cents(max(ZERO, required - cumulative_paid))
            cumulative_paid += catch_up
            logger.debug(
                "%s: required %s cumulative, suggesting %s", due.quarter, required, catch_up
            )
            plan.append(
                SuggestedPayment(
                    quarter=due.quarter,
                    due_date=due.due_date,
                    amount=catch_up,
                )
            )

        return plan
