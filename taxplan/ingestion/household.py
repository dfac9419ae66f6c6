"""JSON household file adapter.

A household file mirrors ``HouseholdInput``::

    {
      "tax_year": 2025,
      "filing_status": "MFJ",
      "include_state_tax": true,
      "deductions": {"property_tax": 12000, "mortgage_interest": 30000, ...},
      "user_income": {"ytd_wages": 150000, "income_mode": "DETAILED", ...},
      "spouse_income": {...},
      "payments_made": {"federal": {"Q1": 5000}, "state": {}}
    }

Numbers are read as ``Decimal`` so no float ever reaches the engines.
"""

import json
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from taxplan.engines.tax_tables import supported_years
from taxplan.exceptions import InputFileError
from taxplan.models.enums import FilingStatus, IncomeMode, Quarter
from taxplan.models.income import PersonIncome
from taxplan.models.reports import HouseholdInput

FILING_STATUS_ALIASES = {
    "SINGLE": FilingStatus.SINGLE,
    "MFJ": FilingStatus.JOINT,
    "JOINT": FilingStatus.JOINT,
    "MARRIED_FILING_JOINTLY": FilingStatus.JOINT,
}


def parse_filing_status(value: str) -> FilingStatus:
    """Accept the short keys SINGLE/MFJ/JOINT as well as the enum values."""
    key = str(value).strip().upper()
    if key not in FILING_STATUS_ALIASES:
        valid = ", ".join(FILING_STATUS_ALIASES)
        raise ValueError(f"Invalid filing status '{value}'. Valid: {valid}")
    return FILING_STATUS_ALIASES[key]


def parse_quarter(value: str | int) -> Quarter:
    """Accept 'Q1', 'q1' or 1."""
    key = str(value).strip().upper()
    if not key.startswith("Q"):
        key = f"Q{key}"
    try:
        return Quarter(key)
    except ValueError:
        raise ValueError(f"Invalid quarter '{value}'. Valid: Q1, Q2, Q3, Q4") from None


class HouseholdFileAdapter:
    """Loads a household JSON file into a validated ``HouseholdInput``."""

    def parse(self, file_path: Path) -> HouseholdInput:
        if not file_path.exists():
            raise InputFileError(file_path, "file not found")

        try:
            raw = json.loads(file_path.read_text(), parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise InputFileError(file_path, f"invalid JSON: {exc}") from exc

        if not isinstance(raw, dict):
            raise InputFileError(file_path, "expected a JSON object at the top level")

        try:
            return self.from_dict(raw)
        except ValueError as exc:
            # pydantic.ValidationError is a ValueError subclass
            raise InputFileError(file_path, _describe(exc)) from exc

    def from_dict(self, raw: dict) -> HouseholdInput:
        data = dict(raw)
        if "filing_status" in data:
            data["filing_status"] = parse_filing_status(data["filing_status"])

        payments = data.get("payments_made")
        if isinstance(payments, dict):
            normalized = {}
            for jurisdiction, by_quarter in payments.items():
                by_quarter = by_quarter or {}
                if not isinstance(by_quarter, dict):
                    raise ValueError(
                        f"payments_made.{jurisdiction} must map quarters to amounts, "
                        f"got {type(by_quarter).__name__}"
                    )
                normalized[jurisdiction] = {
                    parse_quarter(q): amount for q, amount in by_quarter.items()
                }
            data["payments_made"] = normalized

        return HouseholdInput.model_validate(data)

    def validate(self, household: HouseholdInput) -> list[str]:
        """Consistency checks that do not block a calculation.

        Returns a list of human-readable notes; an empty list means the
        household looks complete.
        """
        notes = []
        if household.tax_year not in supported_years():
            years = ", ".join(str(y) for y in supported_years())
            notes.append(f"tax_year {household.tax_year} is not supported (supported: {years})")
        if household.filing_status == FilingStatus.SINGLE and household.spouse_income is not None:
            notes.append("spouse_income is ignored for SINGLE filers")
        if household.filing_status == FilingStatus.JOINT and household.spouse_income is None:
            notes.append("MFJ household has no spouse_income; only the user's income is counted")

        people = [("user_income", household.user_income)]
        if household.spouse_income is not None:
            people.append(("spouse_income", household.spouse_income))
        for label, person in people:
            notes.extend(f"{label}: {n}" for n in _person_notes(person))

        d = household.deductions
        if d.mortgage_interest > 0 and d.mortgage_balance > 0 and d.mortgage_loan_period is None:
            notes.append(
                "mortgage_loan_period is missing; federal mortgage interest is taken in full"
            )
        return notes


def _person_notes(person: PersonIncome) -> list[str]:
    notes = []
    if person.qualified_dividends > person.ordinary_dividends:
        notes.append("qualified_dividends exceed ordinary_dividends")
    if person.income_mode == IncomeMode.DETAILED:
        if person.future_wages > 0:
            notes.append("future_wages is ignored in DETAILED mode")
        if person.future_vests and person.past_vest_wages <= 0:
            notes.append("future vests without past_vest_wages use default withholding rates")
    elif person.paycheck_wages > 0 or person.future_vests:
        notes.append("paycheck and vest fields are ignored in SIMPLE mode")
    return notes


def _describe(exc: ValueError) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
            for err in exc.errors()
        )
    return str(exc)
