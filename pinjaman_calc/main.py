"""Command-line interface for the loan calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can print a full repayment schedule for the flat or the
effective method, view only the summary, or compare both methods side by
side. Results can be printed to the terminal or exported to JSON, CSV, XLSX or
PDF files.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Optional

import click

from .config import (
    DEFAULT_AMOUNT,
    DEFAULT_METHOD,
    DEFAULT_RATE,
    DEFAULT_TERM,
    DEFAULT_TERM_UNIT,
    MAX_PREVIEW_ROWS,
)
from .data_models import METHODS, TERM_UNITS, CalculationState, Invalid, RawLoanInput
from .export import default_filename, export_to_csv, export_to_json, export_to_pdf, export_to_xlsx
from .formatter import print_comparison, print_schedule, print_summary
from .summary import compute_loan_summaries, select_summary
from .utils import parse_currency_input

_GROUPED_AMOUNT = re.compile(r"^\d{1,3}(\.\d{3})+$")
_GROUPED_DECIMAL_COMMA = re.compile(r"^\d{1,3}(\.\d{3})+,\d+$")
_GROUPED_DECIMAL_POINT = re.compile(r"^\d{1,3}(,\d{3})*\.\d+$")


def parse_amount(value: str) -> float:
    """Parse a loan amount string.

    Accepts plain numbers ("150000000"), an optional ``Rp`` prefix,
    dot-grouped Rupiah ("150.000.000", "1.000,50"), comma-grouped amounts
    ("1,000.50") and shorthand with ``k``/``m`` suffixes (e.g. "500k"
    meaning 500_000). Returns a float. Any other mix of ``.`` and ``,`` is
    rejected rather than guessed at.
    """
    value = value.strip().lower()
    if value.startswith("rp"):
        value = value[2:].strip()
    if _GROUPED_AMOUNT.match(value):
        return float(parse_currency_input(value))
    if _GROUPED_DECIMAL_COMMA.match(value):
        return float(value.replace(".", "").replace(",", "."))
    if "." in value and "," in value and not _GROUPED_DECIMAL_POINT.match(value):
        raise click.BadParameter(f"Ambiguous amount separators: {value}")
    value = value.replace(",", "")
    factor = 1.0
    if value.endswith("k"):
        factor = 1_000.0
        value = value[:-1]
    elif value.endswith("m"):
        factor = 1_000_000.0
        value = value[:-1]
    try:
        return float(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def build_raw_input_from_options(
    amount: str,
    rate: float,
    term: float,
    term_unit: str,
    intro_discount: bool = False,
    intro_discount_rate: float = 0.0,
    intro_discount_months: int = 0,
    provision: bool = False,
    provision_rate: float = 0.0,
) -> RawLoanInput:
    return RawLoanInput(
        amount=parse_amount(amount),
        rate=rate,
        term=term,
        term_unit=term_unit,
        include_intro_discount=intro_discount,
        intro_discount_rate=intro_discount_rate,
        intro_discount_months=intro_discount_months,
        include_provision=provision,
        provision_rate=provision_rate,
    )


def calculate_or_fail(raw: RawLoanInput) -> CalculationState:
    """Run the calculation, turning an ``Invalid`` result into a usage error."""
    state = compute_loan_summaries(raw)
    if isinstance(state, Invalid):
        raise click.UsageError(state.reason)
    return state


def loan_options(func: Callable) -> Callable:
    """Attach the loan input options shared by every command."""
    options = [
        click.option("--amount", "-a", "amount", default=str(DEFAULT_AMOUNT), show_default=True, help="Loan amount (e.g. 150000000, 150.000.000, 150m)"),
        click.option("--rate", "-r", "rate", default=DEFAULT_RATE, type=float, show_default=True, help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", default=DEFAULT_TERM, type=float, show_default=True, help="Loan term"),
        click.option("--term-unit", "term_unit", type=click.Choice(TERM_UNITS), default=DEFAULT_TERM_UNIT, show_default=True, help="Unit of --term"),
        click.option("--intro-discount/--no-intro-discount", "intro_discount", default=False, help="Apply an introductory rate discount"),
        click.option("--intro-discount-rate", "intro_discount_rate", default=0.0, type=float, help="Percentage points taken off the rate during the discount"),
        click.option("--intro-discount-months", "intro_discount_months", default=0, type=int, help="Number of leading months the discount applies to"),
        click.option("--provision/--no-provision", "provision", default=False, help="Deduct a one-time provision fee at disbursement"),
        click.option("--provision-rate", "provision_rate", default=0.0, type=float, help="Provision fee (percent of the loan)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_output(output: str, state: CalculationState, ext: str) -> Path:
    path = Path(output)
    if path.is_dir():
        return path / default_filename(state, ext)
    return path


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A command-line loan calculator comparing flat and effective interest."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@loan_options
@click.option("--method", "method", type=click.Choice(METHODS), default=DEFAULT_METHOD, show_default=True, help="Interest method")
@click.option("--output", "output", type=str, help="Output file path (.json, .csv, .xlsx or .pdf) or directory")
@click.option("--format", "fmt", type=click.Choice(["json", "csv", "xlsx", "pdf"]), default="xlsx", show_default=True, help="Format used when --output is a directory")
def schedule(
    amount: str,
    rate: float,
    term: float,
    term_unit: str,
    intro_discount: bool,
    intro_discount_rate: float,
    intro_discount_months: int,
    provision: bool,
    provision_rate: float,
    method: str,
    output: Optional[str],
    fmt: str,
) -> None:
    """Compute and print the full repayment schedule."""
    raw = build_raw_input_from_options(
        amount,
        rate,
        term,
        term_unit,
        intro_discount,
        intro_discount_rate,
        intro_discount_months,
        provision,
        provision_rate,
    )
    state = calculate_or_fail(raw)
    loan_summary = select_summary(state, method)
    if output:
        path = _resolve_output(output, state, fmt)
        suffix = path.suffix.lower()
        if suffix == ".json":
            export_to_json(path, state, method)
        elif suffix == ".csv":
            export_to_csv(path, loan_summary.schedule)
        elif suffix == ".xlsx":
            export_to_xlsx(path, state, method)
        elif suffix == ".pdf":
            export_to_pdf(path, state, method)
        else:
            raise click.BadParameter("Unsupported output format; use .json, .csv, .xlsx or .pdf")
        click.echo(f"Schedule exported to {path}")
    else:
        print_summary(state, method)
        # Limit schedule length printed to avoid flooding the terminal
        entries = loan_summary.schedule
        if len(entries) > MAX_PREVIEW_ROWS:
            click.echo(f"Schedule has {len(entries)} rows; showing first {MAX_PREVIEW_ROWS} rows.")
            print_schedule(entries[:MAX_PREVIEW_ROWS])
        else:
            print_schedule(entries)


@cli.command()
@loan_options
@click.option("--method", "method", type=click.Choice(METHODS), default=DEFAULT_METHOD, show_default=True, help="Interest method")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    amount: str,
    rate: float,
    term: float,
    term_unit: str,
    intro_discount: bool,
    intro_discount_rate: float,
    intro_discount_months: int,
    provision: bool,
    provision_rate: float,
    method: str,
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    raw = build_raw_input_from_options(
        amount,
        rate,
        term,
        term_unit,
        intro_discount,
        intro_discount_rate,
        intro_discount_months,
        provision,
        provision_rate,
    )
    state = calculate_or_fail(raw)
    if output:
        path = _resolve_output(output, state, "json")
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        export_to_json(path, state, method)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(state, method)


@cli.command()
@loan_options
def compare(
    amount: str,
    rate: float,
    term: float,
    term_unit: str,
    intro_discount: bool,
    intro_discount_rate: float,
    intro_discount_months: int,
    provision: bool,
    provision_rate: float,
) -> None:
    """Compare the flat and effective methods for the same loan.

    Example:

        pinjaman-calc compare -a 150m -r 10 -t 5
    """
    raw = build_raw_input_from_options(
        amount,
        rate,
        term,
        term_unit,
        intro_discount,
        intro_discount_rate,
        intro_discount_months,
        provision,
        provision_rate,
    )
    state = calculate_or_fail(raw)
    print_comparison(state)


if __name__ == "__main__":
    cli()
