"""Household input adapters."""

from taxplan.ingestion.household import HouseholdFileAdapter

__all__ = ["HouseholdFileAdapter"]
