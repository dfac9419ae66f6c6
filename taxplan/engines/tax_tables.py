"""Tax reference data.

Federal and state (California) brackets, standard deductions, surtax and
estimated-payment schedules. Keyed by tax year and filing status. Never
hardcode brackets in computation functions.

Raw ladders are written as ``(upper_bound, rate)`` pairs with ``None`` for
the top bracket; they are converted into validated ``YearlyTaxTable``
models when this module is imported, so a malformed table fails loudly at
startup instead of producing a wrong number later.

Sources:
  - 2024: IRS Rev. Proc. 2023-34, FTB Publication 1001 (2024)
  - 2025: IRS Rev. Proc. 2024-40, FTB 2025 rate schedules
"""

from datetime import date
from decimal import Decimal

from taxplan.engines.brackets import validate_brackets
from taxplan.exceptions import UnsupportedTaxYearError
from taxplan.models.brackets import EstimatedPaymentDueDate, TaxBracket, YearlyTaxTable
from taxplan.models.enums import FilingStatus, Jurisdiction, Quarter

RawLadder = list[tuple[Decimal | None, Decimal]]

# ---------------------------------------------------------------------------
# Federal ordinary income brackets: {year: {filing_status: [(upper_bound, rate), ...]}}
# ---------------------------------------------------------------------------
FEDERAL_BRACKETS: dict[int, dict[FilingStatus, RawLadder]] = {
    2024: {
        FilingStatus.SINGLE: [
            (Decimal("11600"), Decimal("0.10")),
            (Decimal("47150"), Decimal("0.12")),
            (Decimal("100525"), Decimal("0.22")),
            (Decimal("191950"), Decimal("0.24")),
            (Decimal("243725"), Decimal("0.32")),
            (Decimal("609350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.JOINT: [
            (Decimal("23200"), Decimal("0.10")),
            (Decimal("94300"), Decimal("0.12")),
            (Decimal("201050"), Decimal("0.22")),
            (Decimal("383900"), Decimal("0.24")),
            (Decimal("487450"), Decimal("0.32")),
            (Decimal("731200"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
    },
    2025: {
        FilingStatus.SINGLE: [
            (Decimal("11925"), Decimal("0.10")),
            (Decimal("48475"), Decimal("0.12")),
            (Decimal("103350"), Decimal("0.22")),
            (Decimal("197300"), Decimal("0.24")),
            (Decimal("250525"), Decimal("0.32")),
            (Decimal("626350"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
        FilingStatus.JOINT: [
            (Decimal("23850"), Decimal("0.10")),
            (Decimal("96950"), Decimal("0.12")),
            (Decimal("206700"), Decimal("0.22")),
            (Decimal("394600"), Decimal("0.24")),
            (Decimal("501050"), Decimal("0.32")),
            (Decimal("751600"), Decimal("0.35")),
            (None, Decimal("0.37")),
        ],
    },
}

# ---------------------------------------------------------------------------
# Federal standard deduction
# ---------------------------------------------------------------------------
FEDERAL_STANDARD_DEDUCTION: dict[int, dict[FilingStatus, Decimal]] = {
    2024: {
        FilingStatus.SINGLE: Decimal("14600"),
        FilingStatus.JOINT: Decimal("29200"),
    },
    2025: {
        FilingStatus.SINGLE: Decimal("15000"),
        FilingStatus.JOINT: Decimal("30000"),
    },
}

# ---------------------------------------------------------------------------
# Federal LTCG / qualified dividend brackets (0% / 15% / 20%), IRC Section 1(h).
# Bounds are taxable-income thresholds on the combined ladder.
# ---------------------------------------------------------------------------
FEDERAL_CAPITAL_GAINS_BRACKETS: dict[int, dict[FilingStatus, RawLadder]] = {
    2024: {
        FilingStatus.SINGLE: [
            (Decimal("47025"), Decimal("0.00")),
            (Decimal("518900"), Decimal("0.15")),
            (None, Decimal("0.20")),
        ],
        FilingStatus.JOINT: [
            (Decimal("94050"), Decimal("0.00")),
            (Decimal("583750"), Decimal("0.15")),
            (None, Decimal("0.20")),
        ],
    },
    2025: {
        FilingStatus.SINGLE: [
            (Decimal("48350"), Decimal("0.00")),
            (Decimal("533400"), Decimal("0.15")),
            (None, Decimal("0.20")),
        ],
        FilingStatus.JOINT: [
            (Decimal("96700"), Decimal("0.00")),
            (Decimal("600050"), Decimal("0.15")),
            (None, Decimal("0.20")),
        ],
    },
}

# ---------------------------------------------------------------------------
# California brackets: CA Revenue and Taxation Code Section 17041.
# All income types are taxed on this ladder.
# ---------------------------------------------------------------------------
STATE_BRACKETS: dict[int, dict[FilingStatus, RawLadder]] = {
    2024: {
        FilingStatus.SINGLE: [
            (Decimal("10412"), Decimal("0.01")),
            (Decimal("24684"), Decimal("0.02")),
            (Decimal("38959"), Decimal("0.04")),
            (Decimal("54081"), Decimal("0.06")),
            (Decimal("68350"), Decimal("0.08")),
            (Decimal("349137"), Decimal("0.093")),
            (Decimal("418961"), Decimal("0.103")),
            (Decimal("698271"), Decimal("0.113")),
            (None, Decimal("0.123")),
        ],
        FilingStatus.JOINT: [
            (Decimal("20824"), Decimal("0.01")),
            (Decimal("49368"), Decimal("0.02")),
            (Decimal("77918"), Decimal("0.04")),
            (Decimal("108162"), Decimal("0.06")),
            (Decimal("136700"), Decimal("0.08")),
            (Decimal("698274"), Decimal("0.093")),
            (Decimal("837922"), Decimal("0.103")),
            (Decimal("1396542"), Decimal("0.113")),
            (None, Decimal("0.123")),
        ],
    },
    2025: {
        FilingStatus.SINGLE: [
            (Decimal("10756"), Decimal("0.01")),
            (Decimal("25499"), Decimal("0.02")),
            (Decimal("40245"), Decimal("0.04")),
            (Decimal("55866"), Decimal("0.06")),
            (Decimal("70606"), Decimal("0.08")),
            (Decimal("360659"), Decimal("0.093")),
            (Decimal("432787"), Decimal("0.103")),
            (Decimal("721314"), Decimal("0.113")),
            (None, Decimal("0.123")),
        ],
        FilingStatus.JOINT: [
            (Decimal("21512"), Decimal("0.01")),
            (Decimal("50998"), Decimal("0.02")),
            (Decimal("80490"), Decimal("0.04")),
            (Decimal("111732"), Decimal("0.06")),
            (Decimal("141212"), Decimal("0.08")),
            (Decimal("721318"), Decimal("0.093")),
            (Decimal("865574"), Decimal("0.103")),
            (Decimal("1442628"), Decimal("0.113")),
            (None, Decimal("0.123")),
        ],
    },
}

STATE_STANDARD_DEDUCTION: dict[int, dict[FilingStatus, Decimal]] = {
    2024: {
        FilingStatus.SINGLE: Decimal("5540"),
        FilingStatus.JOINT: Decimal("11080"),
    },
    2025: {
        FilingStatus.SINGLE: Decimal("5540"),
        FilingStatus.JOINT: Decimal("11080"),
    },
}

# ---------------------------------------------------------------------------
# California Mental Health Services Tax: 1% on taxable income above $1M
# CA Revenue and Taxation Code Section 17043(a). Same threshold for all statuses.
# ---------------------------------------------------------------------------
STATE_SURTAX_THRESHOLD = Decimal("1000000")
STATE_SURTAX_RATE = Decimal("0.01")

# ---------------------------------------------------------------------------
# Deduction limits
# ---------------------------------------------------------------------------
FEDERAL_SALT_CAP = Decimal("10000")  # IRC 164(b)(6)
FEDERAL_MORTGAGE_LIMIT_BEFORE_CUTOFF = Decimal("1000000")
FEDERAL_MORTGAGE_LIMIT_AFTER_CUTOFF = Decimal("750000")
STATE_MORTGAGE_LIMIT = Decimal("1000000")  # CA never adopted the $750k limit

# Capital loss limitation per IRC Section 1211(b); both supported statuses.
CAPITAL_LOSS_LIMIT = Decimal("3000")

# Withholding assumed on future vests when no past vest is available
DEFAULT_VEST_FEDERAL_RATE = Decimal("0.24")
DEFAULT_VEST_STATE_RATE = Decimal("0.10")

# ---------------------------------------------------------------------------
# Estimated payment schedules: (quarter, due date, cumulative share of liability)
# California requires 30% / 40% / 0% / 30%; the September date needs nothing
# and is left out (a September payment counts toward January).
# ---------------------------------------------------------------------------
FEDERAL_DUE_DATES: dict[int, list[tuple[Quarter, date, Decimal]]] = {
    2024: [
        (Quarter.Q1, date(2024, 4, 15), Decimal("0.25")),
        (Quarter.Q2, date(2024, 6, 17), Decimal("0.50")),
        (Quarter.Q3, date(2024, 9, 16), Decimal("0.75")),
        (Quarter.Q4, date(2025, 1, 15), Decimal("1.00")),
    ],
    2025: [
        (Quarter.Q1, date(2025, 4, 15), Decimal("0.25")),
        (Quarter.Q2, date(2025, 6, 16), Decimal("0.50")),
        (Quarter.Q3, date(2025, 9, 15), Decimal("0.75")),
        (Quarter.Q4, date(2026, 1, 15), Decimal("1.00")),
    ],
}

STATE_DUE_DATES: dict[int, list[tuple[Quarter, date, Decimal]]] = {
    2024: [
        (Quarter.Q1, date(2024, 4, 15), Decimal("0.30")),
        (Quarter.Q2, date(2024, 6, 17), Decimal("0.70")),
        (Quarter.Q4, date(2025, 1, 15), Decimal("1.00")),
    ],
    2025: [
        (Quarter.Q1, date(2025, 4, 15), Decimal("0.30")),
        (Quarter.Q2, date(2025, 6, 16), Decimal("0.70")),
        (Quarter.Q4, date(2026, 1, 15), Decimal("1.00")),
    ],
}


def _ladder(raw: RawLadder) -> list[TaxBracket]:
    brackets = []
    lower = Decimal("0")
    for upper, rate in raw:
        brackets.append(TaxBracket(min=lower, max=upper, rate=rate))
        if upper is not None:
            lower = upper
    return brackets


def _validated(raw: dict[FilingStatus, RawLadder], label: str) -> dict[FilingStatus, list[TaxBracket]]:
    ladders = {}
    for status, ladder in raw.items():
        brackets = _ladder(ladder)
        validate_brackets(brackets, f"{label}/{status}")
        ladders[status] = brackets
    return ladders


def _load_tables() -> dict[tuple[int, Jurisdiction], YearlyTaxTable]:
    tables: dict[tuple[int, Jurisdiction], YearlyTaxTable] = {}
    for year in FEDERAL_BRACKETS:
        tables[(year, Jurisdiction.FEDERAL)] = YearlyTaxTable(
            tax_year=year,
            jurisdiction=Jurisdiction.FEDERAL,
            brackets=_validated(FEDERAL_BRACKETS[year], f"federal {year}"),
            standard_deduction=FEDERAL_STANDARD_DEDUCTION[year],
            capital_gains_brackets=_validated(
                FEDERAL_CAPITAL_GAINS_BRACKETS[year], f"federal capital gains {year}"
            ),
        )
    for year in STATE_BRACKETS:
        tables[(year, Jurisdiction.STATE)] = YearlyTaxTable(
            tax_year=year,
            jurisdiction=Jurisdiction.STATE,
            brackets=_validated(STATE_BRACKETS[year], f"state {year}"),
            standard_deduction=STATE_STANDARD_DEDUCTION[year],
            surtax_threshold=STATE_SURTAX_THRESHOLD,
            surtax_rate=STATE_SURTAX_RATE,
        )
    return tables


TAX_TABLES = _load_tables()


def supported_years() -> list[int]:
    return sorted({year for year, _ in TAX_TABLES})


def get_tax_table(tax_year: int, jurisdiction: Jurisdiction) -> YearlyTaxTable:
    """Look up reference data. An unknown year is a configuration error."""
    try:
        return TAX_TABLES[(tax_year, jurisdiction)]
    except KeyError:
        raise UnsupportedTaxYearError(tax_year, jurisdiction) from None


def get_due_dates(tax_year: int, jurisdiction: Jurisdiction) -> list[EstimatedPaymentDueDate]:
    schedule = FEDERAL_DUE_DATES if jurisdiction == Jurisdiction.FEDERAL else STATE_DUE_DATES
    if tax_year not in schedule:
        raise UnsupportedTaxYearError(tax_year, jurisdiction)
    return [
        EstimatedPaymentDueDate(quarter=quarter, due_date=due, cumulative_percentage=pct)
        for quarter, due, pct in schedule[tax_year]
    ]
