"""Enumerations for taxplan."""

from enum import StrEnum


class FilingStatus(StrEnum):
    SINGLE = "SINGLE"
    JOINT = "MARRIED_FILING_JOINTLY"


class Jurisdiction(StrEnum):
    FEDERAL = "FEDERAL"
    STATE = "STATE"


class DeductionType(StrEnum):
    STANDARD = "STANDARD"
    ITEMIZED = "ITEMIZED"


class IncomeMode(StrEnum):
    SIMPLE = "SIMPLE"
    DETAILED = "DETAILED"


class PayFrequency(StrEnum):
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"


class MortgageLoanPeriod(StrEnum):
    BEFORE_CUTOFF = "BEFORE_CUTOFF"  # originated on or before 2017-12-15
    AFTER_CUTOFF = "AFTER_CUTOFF"


class Quarter(StrEnum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
