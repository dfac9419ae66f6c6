"""Household tax summary report generator."""

from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from taxplan.models.reports import HouseholdTaxResult

TEMPLATE_DIR = Path(__file__).parent / "templates"


def money(value: Decimal) -> str:
    """$1,234.56, with a leading minus for negatives."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def percent(value: Decimal) -> str:
    return f"{value:.2f}%"


class TaxSummaryGenerator:
    """Generates a plain-text summary of a household tax result."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["money"] = money
        self.env.filters["percent"] = percent

    def render(self, result: HouseholdTaxResult) -> str:
        """Render the household summary report."""
        template = self.env.get_template("tax_summary.txt")
        return template.render(result=result, income=result.aggregated_income)
