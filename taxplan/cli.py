"""Typer CLI interface for taxplan."""

import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taxplan.engines.estimator import TaxEstimator
from taxplan.engines.payments import PaymentScheduler
from taxplan.engines.tax_tables import get_due_dates, get_tax_table
from taxplan.exceptions import TaxComputationError
from taxplan.ingestion.household import HouseholdFileAdapter, parse_filing_status, parse_quarter
from taxplan.models.brackets import TaxBracket
from taxplan.models.enums import Jurisdiction, Quarter
from taxplan.models.reports import HouseholdTaxResult, SuggestedPayment, TaxBreakdown
from taxplan.reports.summary import TaxSummaryGenerator

app = typer.Typer(
    name="taxplan",
    help="Federal + California household tax estimates and quarterly payment plans.",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    TEXT = "text"


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _as_of(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


@app.command()
def estimate(
    input_file: Path = typer.Argument(..., help="Household JSON file"),
    no_state: bool = typer.Option(
        False,
        "--no-state",
        help="Skip the California calculation regardless of the input file",
    ),
    as_of: datetime | None = typer.Option(
        None,
        "--as-of",
        formats=["%Y-%m-%d"],
        help="Reference date for paycheck projection and past-due quarters (default: today)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON or text report to this file instead of stdout",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Estimate federal and state tax for a household file."""
    _configure_logging(verbose)
    adapter = HouseholdFileAdapter()

    try:
        household = adapter.parse(input_file)
        if no_state:
            household = household.model_copy(update={"include_state_tax": False})
        for note in adapter.validate(household):
            typer.echo(f"Note: {note}", err=True)
        result = TaxEstimator().estimate(household, now=_as_of(as_of))
    except TaxComputationError as exc:
        _fail(str(exc))

    if output_format == OutputFormat.TABLE and output is None:
        _display_result(result, Console())
        return

    if output_format == OutputFormat.JSON:
        content = json.dumps(result.model_dump(mode="json"), indent=2)
    else:
        content = TaxSummaryGenerator().render(result)

    if output is not None:
        output.write_text(content)
        typer.echo(f"Report written to {output}")
    else:
        typer.echo(content)


@app.command()
def brackets(
    year: int = typer.Argument(..., help="Tax year"),
    filing_status: str = typer.Option(
        "SINGLE",
        "--filing-status",
        "-s",
        help="Filing status: SINGLE or MFJ",
    ),
    state: bool = typer.Option(False, "--state", help="Show California instead of federal"),
) -> None:
    """Print the bracket ladder and standard deduction for a tax year."""
    jurisdiction = Jurisdiction.STATE if state else Jurisdiction.FEDERAL
    try:
        fs = parse_filing_status(filing_status)
        table = get_tax_table(year, jurisdiction)
    except (ValueError, TaxComputationError) as exc:
        _fail(str(exc))

    console = Console()
    title = f"{jurisdiction.title()} {year} ({fs})"
    console.print(_bracket_table(f"{title} Ordinary Brackets", table.brackets_for(fs)))

    cg = table.capital_gains_brackets_for(fs)
    if cg:
        console.print(_bracket_table(f"{title} LTCG/QDiv Brackets", cg))

    console.print(f"Standard deduction: ${table.standard_deduction_for(fs):,.2f}")
    if table.surtax_threshold is not None:
        console.print(
            f"Surtax: {table.surtax_rate * 100:.0f}% above ${table.surtax_threshold:,.0f}"
        )


@app.command()
def payments(
    year: int = typer.Argument(..., help="Tax year"),
    owed: float = typer.Argument(..., help="Liability to cover (total tax minus withholding)"),
    state: bool = typer.Option(False, "--state", help="Use the California schedule"),
    paid: list[str] | None = typer.Option(
        None,
        "--paid",
        help="Payment already made, as QUARTER=AMOUNT (repeatable), e.g. --paid Q1=5000",
    ),
    as_of: datetime | None = typer.Option(
        None,
        "--as-of",
        formats=["%Y-%m-%d"],
        help="Reference date for past-due quarters (default: today)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Suggest catch-up estimated payments for one jurisdiction."""
    _configure_logging(verbose)
    jurisdiction = Jurisdiction.STATE if state else Jurisdiction.FEDERAL

    try:
        already_paid = _parse_paid(paid or [])
    except ValueError as exc:
        _fail(str(exc))

    scheduler = PaymentScheduler()
    try:
        plan = scheduler.schedule(
            Decimal(str(owed)),
            get_due_dates(year, jurisdiction),
            already_paid,
            now=_as_of(as_of),
        )
    except TaxComputationError as exc:
        _fail(str(exc))

    console = Console()
    if not plan:
        console.print("[green]Nothing owed; no estimated payments needed.[/green]")
        return
    console.print(_payments_table(f"{jurisdiction.title()} {year} Estimated Payments", plan))
    for w in scheduler.warnings:
        console.print(f"[yellow]Warning: {w}[/yellow]")


def _parse_paid(entries: list[str]) -> dict[Quarter, Decimal]:
    already_paid: dict[Quarter, Decimal] = {}
    for entry in entries:
        quarter, sep, amount = entry.partition("=")
        if not sep:
            raise ValueError(f"Invalid --paid value '{entry}'. Expected QUARTER=AMOUNT")
        try:
            value = Decimal(amount.strip())
        except InvalidOperation:
            raise ValueError(f"Invalid amount in --paid '{entry}'") from None
        q = parse_quarter(quarter)
        already_paid[q] = already_paid.get(q, Decimal("0")) + value
    return already_paid


# ---------------------------------------------------------------------------
# Rich rendering
# ---------------------------------------------------------------------------


def _bracket_table(title: str, ladder: list[TaxBracket]) -> Table:
    tbl = Table(title=title, show_header=True)
    tbl.add_column("Over", justify="right")
    tbl.add_column("Up to", justify="right")
    tbl.add_column("Rate", justify="right", style="green")
    for b in ladder:
        upper = f"${b.max:,.0f}" if b.max is not None else "-"
        tbl.add_row(f"${b.min:,.0f}", upper, f"{b.rate * 100:.1f}%")
    return tbl


def _payments_table(title: str, plan: list[SuggestedPayment]) -> Table:
    tbl = Table(title=title, show_header=True)
    tbl.add_column("Quarter", style="cyan")
    tbl.add_column("Due", style="cyan")
    tbl.add_column("Amount", justify="right", style="green")
    tbl.add_column("Status")
    for p in plan:
        if p.is_already_paid:
            status = "paid"
        elif p.is_past_due:
            status = "[red]past due[/red]"
        else:
            status = ""
        tbl.add_row(str(p.quarter), p.due_date.isoformat(), f"${p.amount:,.2f}", status)
    return tbl


def _breakdown_table(title: str, tax: TaxBreakdown) -> Table:
    tbl = Table(title=title, show_header=False, padding=(0, 1))
    tbl.add_column("", style="cyan", min_width=28)
    tbl.add_column("", justify="right", style="green")
    d = tax.deduction
    tbl.add_row(f"Deduction ({d.type.title()})", f"${d.amount:,.2f}")
    tbl.add_row("  Standard / Itemized", f"${d.standard_amount:,.2f} / ${d.itemized_amount:,.2f}")
    tbl.add_row("Taxable Income", f"${tax.taxable_income:,.2f}")
    tbl.add_row("Ordinary Tax", f"${tax.ordinary_tax:,.2f}")
    if tax.preferential_tax > 0:
        tbl.add_row("LTCG/QDiv Tax", f"${tax.preferential_tax:,.2f}")
    if tax.surtax > 0:
        tbl.add_row("Surtax", f"${tax.surtax:,.2f}")
    tbl.add_row("Total Tax", f"${tax.total_tax:,.2f}")
    tbl.add_row("Withheld", f"${tax.withholdings:,.2f}")
    if tax.estimated_payments_made > 0:
        tbl.add_row("Est. Payments", f"${tax.estimated_payments_made:,.2f}")
    label = "Balance Due" if tax.owed_or_refund > 0 else "Refund"
    tbl.add_row(label, f"${abs(tax.owed_or_refund):,.2f}")
    tbl.add_row("Marginal / Effective", f"{tax.marginal_rate:.2f}% / {tax.effective_rate:.2f}%")
    return tbl


def _display_result(result: HouseholdTaxResult, console: Console) -> None:
    """Pretty-print a HouseholdTaxResult using Rich."""
    income = result.aggregated_income

    inc = Table(title="Income", show_header=False, padding=(0, 1))
    inc.add_column("", style="cyan", min_width=28)
    inc.add_column("", justify="right", style="green")
    inc.add_row("Wages", f"${income.wages:,.2f}")
    inc.add_row("Interest Income", f"${income.interest_income:,.2f}")
    inc.add_row("Ordinary Dividends", f"${income.ordinary_dividends:,.2f}")
    inc.add_row("  (Qualified)", f"${income.qualified_dividends:,.2f}")
    inc.add_row("Short-Term Gains", f"${income.short_term_gains:,.2f}")
    inc.add_row("Long-Term Gains", f"${income.long_term_gains:,.2f}")
    if income.capital_loss_deduction < 0:
        inc.add_row("Capital Loss Deduction", f"-${abs(income.capital_loss_deduction):,.2f}")
    inc.add_row("Total Income", f"${income.total:,.2f}")
    console.print(inc)

    console.print(_breakdown_table("Federal Tax", result.federal))
    if result.state is not None:
        console.print(_breakdown_table("California Tax", result.state))

    suggested = result.suggested_payments
    if suggested.federal:
        console.print(_payments_table("Federal Estimated Payments", suggested.federal))
    if suggested.state:
        console.print(_payments_table("California Estimated Payments", suggested.state))

    balance = result.total_owed_or_refund
    style = "bold red" if balance > 0 else "bold green"
    label = "BALANCE DUE" if balance > 0 else "REFUND"
    console.print(
        Panel(
            f"[bold]Total Tax:[/bold] ${result.total_tax:,.2f}\n"
            f"[{style}]{label}: ${abs(balance):,.2f}[/{style}]",
            title="[bold]Summary[/bold]",
            border_style="cyan",
        )
    )

    for w in result.warnings:
        console.print(f"[yellow]Warning: {w}[/yellow]")


if __name__ == "__main__":
    app()
