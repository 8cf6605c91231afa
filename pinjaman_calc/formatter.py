"""Output helpers for the loan calculator.

This module provides the display formatters (Rupiah amounts, percentages)
and simple functions that render summaries and schedules in a tabular text
format. We rely only on built-in printing and string formatting; the CLI
wraps these with ``click`` where it needs to.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Iterable, List, Tuple

from .config import CURRENCY_SYMBOL, DECIMAL_SEPARATOR, THOUSANDS_SEPARATOR
from .data_models import EFFECTIVE, FLAT, CalculationState, PaymentEntry
from .summary import interest_delta, select_summary
from .utils import round_half_up

METHOD_LABELS = {FLAT: "Flat", EFFECTIVE: "Effective (Annuity)"}

Formatter = Callable[[float], str]


def _localize(text: str) -> str:
    """Swap ``1,234.5`` style separators for the configured ones."""
    return (
        text.replace(",", "\0")
        .replace(".", DECIMAL_SEPARATOR)
        .replace("\0", THOUSANDS_SEPARATOR)
    )


def format_currency(amount: float) -> str:
    """Format ``amount`` as whole Rupiah, e.g. ``Rp 1.120.000``."""
    value = int(round_half_up(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} " + _localize(f"{abs(value):,}")


def format_decimal(value: float) -> str:
    """Format a number with at most two fraction digits, e.g. ``10,5``."""
    rounded = Decimal(repr(round_half_up(value, 2))).normalize()
    if rounded == 0:
        rounded = Decimal(0)
    return _localize(f"{rounded:,f}")


def build_summary_rows(
    state: CalculationState,
    method: str,
    formatter: Formatter = format_currency,
    include_header: bool = False,
) -> List[Tuple[str, str]]:
    """Return the parameter/value rows describing one calculation.

    Provision and discount rows only appear when those features are in
    effect. A blank row separates the loan parameters from the figures of
    the selected ``method``.
    """
    rows: List[Tuple[str, str]] = [
        ("Loan principal", formatter(state.principal)),
        ("Net disbursement (after fees)", formatter(state.net_disbursement)),
        ("Term", f"{state.months} months"),
        ("Floating rate", f"{format_decimal(state.annual_rate)}% p.a."),
    ]
    if state.provision_rate > 0:
        rows.append(("Provision fee (upfront)", f"{format_decimal(state.provision_rate)}% of loan"))
    if state.has_intro_discount:
        rows.append(
            (
                "Intro rate discount",
                f"{format_decimal(state.intro_discount_rate)}% p.a. · {state.intro_discount_months} months",
            )
        )
        rows.append(("Rate during discount", f"{format_decimal(state.discounted_annual_rate)}% p.a."))

    rows.append(("", ""))

    summary = select_summary(state, method)
    rows.append(("Selected method", METHOD_LABELS[method]))
    rows.append(("Monthly payment", formatter(summary.monthly_payment)))
    rows.append(("Total interest", formatter(summary.total_interest)))
    rows.append(("Total payment", formatter(summary.total_payment)))

    if include_header:
        return [("Parameter", "Value")] + rows
    return rows


def print_summary(state: CalculationState, method: str, formatter: Formatter = format_currency) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    for label, value in build_summary_rows(state, method, formatter):
        if not label:
            print()
            continue
        print(f"{label:30s}: {value}")
    print("-" * 72)


def print_schedule(schedule: Iterable[PaymentEntry]) -> None:
    """Print the repayment schedule as a simple tab-separated table."""
    headers = [
        "Month",
        "Payment",
        "Principal",
        "Interest",
        "Balance",
        "Principal%",
        "Discount",
    ]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.month),
            f"{entry.payment:.2f}",
            f"{entry.principal_portion:.2f}",
            f"{entry.interest_portion:.2f}",
            f"{entry.remaining_balance:.2f}",
            f"{entry.principal_ratio * 100:.1f}",
            "Yes" if entry.is_discounted else "No",
        ]
        print("\t".join(row))


def print_comparison(state: CalculationState) -> None:
    """Print the flat and effective summaries side by side.

    The difference column is flat minus effective; a positive difference
    means the flat method costs more.
    """
    print("Comparison")
    print("=" * 72)
    keys = [
        "monthly_payment",
        "total_interest",
        "total_payment",
    ]
    print(f"{'Metric':20s} {'Flat':>16s} {'Effective':>16s} {'Difference':>16s}")
    for key in keys:
        v1 = getattr(state.flat, key)
        v2 = getattr(state.effective, key)
        diff = v1 - v2
        print(f"{key:20s} {v1:16.2f} {v2:16.2f} {diff:16.2f}")
    print("=" * 72)
    print(f"Interest difference (flat - effective): {format_currency(interest_delta(state.flat, state.effective))}")
