"""Data models for the loan calculator.

This module defines dataclasses for every value that flows through a
calculation: the raw (unvalidated) form input, the normalized loan
parameters, individual schedule entries, per-method summaries and the overall
calculation state. All of them except the raw input are frozen; a new set is
produced on every recalculation and nothing is mutated in place.
"""

from dataclasses import dataclass
from typing import Any, Tuple

from .config import DEFAULT_AMOUNT, DEFAULT_RATE, DEFAULT_TERM, DEFAULT_TERM_UNIT

FLAT = "flat"
EFFECTIVE = "effective"
METHODS = (FLAT, EFFECTIVE)

YEARS = "years"
MONTHS = "months"
TERM_UNITS = (YEARS, MONTHS)


@dataclass
class RawLoanInput:
    """Unvalidated loan fields as entered by the user.

    Numeric fields may hold numbers or numeric strings. The discount and
    provision fields are only honoured when their ``include_*`` toggle is on;
    otherwise whatever stale value they hold is ignored.
    """

    amount: Any = DEFAULT_AMOUNT
    rate: Any = DEFAULT_RATE
    term: Any = DEFAULT_TERM
    term_unit: str = DEFAULT_TERM_UNIT  # 'years' or 'months'
    include_intro_discount: Any = False
    intro_discount_rate: Any = 0
    intro_discount_months: Any = 0
    include_provision: Any = False
    provision_rate: Any = 0


@dataclass(frozen=True)
class LoanParameters:
    """Normalized, validated loan parameters.

    Attributes
    ----------
    principal: float
        Loan amount, always > 0.
    annual_rate: float
        Nominal annual interest rate in percent, always >= 0.
    months: int
        Term length in months, always >= 1.
    intro_discount_rate: float
        Percentage points subtracted from ``annual_rate`` during the
        introductory window; 0 when the discount is disabled.
    intro_discount_months: int
        Number of leading months the discount applies to; 0 when disabled.
    provision_rate: float
        One-time fee on the principal, in percent; 0 when disabled.
    """

    principal: float
    annual_rate: float
    months: int
    intro_discount_rate: float = 0.0
    intro_discount_months: int = 0
    provision_rate: float = 0.0


@dataclass(frozen=True)
class Invalid:
    """Result of normalizing input that cannot produce a schedule."""

    reason: str


@dataclass(frozen=True)
class PaymentEntry:
    """One month of a repayment schedule.

    Currency fields are rounded to two decimals. ``principal_ratio`` and
    ``interest_ratio`` are the shares of ``payment`` and are both zero when
    the payment is zero.
    """

    month: int
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float
    principal_ratio: float
    interest_ratio: float
    is_discounted: bool


@dataclass(frozen=True)
class LoanSummary:
    method: str  # 'flat' or 'effective'
    monthly_payment: float
    total_interest: float
    total_payment: float
    schedule: Tuple[PaymentEntry, ...]


@dataclass(frozen=True)
class CalculationState:
    """Everything a consumer needs to render or export one calculation.

    Echoes the normalized input, carries both method summaries and the net
    amount actually disbursed to the borrower.
    """

    principal: float
    annual_rate: float
    months: int
    intro_discount_rate: float
    intro_discount_months: int
    provision_rate: float
    provision_amount: float
    net_disbursement: float
    flat: LoanSummary
    effective: LoanSummary

    @property
    def discounted_annual_rate(self) -> float:
        """Annual rate in force during the introductory window."""
        return max(self.annual_rate - self.intro_discount_rate, 0.0)

    @property
    def has_intro_discount(self) -> bool:
        return self.intro_discount_rate > 0 and self.intro_discount_months > 0
