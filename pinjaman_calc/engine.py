"""Core calculation engine for the loan calculator.

This module builds month-by-month repayment schedules under two interest
conventions:

* **flat**: interest is charged every month on the *original* principal, so
  the interest cost does not fall as the loan is paid down;
* **effective** (annuity): interest is charged on the outstanding balance
  and the payment is re-sized each month so the balance reaches zero at the
  end of the term.

Both engines honour an optional introductory discount window and finish with
a remaining balance of exactly zero: the last month's principal portion is
whatever is left, not the nominal installment. They share only the rounding
rule in ``utils`` and ``applicable_annual_rate``; the loops are kept separate
on purpose so the flat-versus-declining-balance distinction stays visible.
"""

from __future__ import annotations

import logging
from typing import List

from .config import BALANCE_EPSILON
from .data_models import EFFECTIVE, FLAT, LoanParameters, LoanSummary, PaymentEntry
from .utils import round_currency

logger = logging.getLogger(__name__)


def applicable_annual_rate(params: LoanParameters, month: int) -> float:
    """Return the annual rate (percent) in force for ``month`` (1-based).

    During the first ``intro_discount_months`` months the discount is
    subtracted from the base rate; the result is never negative.
    """
    discount = params.intro_discount_rate if month <= params.intro_discount_months else 0.0
    return max(params.annual_rate - discount, 0.0)


def _calculate_annuity_payment(balance: float, rate_per_month: float, remaining_months: int) -> float:
    """Return the payment that amortizes ``balance`` over ``remaining_months``.

    The formula is:

        payment = B * i / (1 - (1 + i)^-n)

    where ``B`` is the outstanding balance, ``i`` is the monthly interest
    rate and ``n`` is the number of payments left. When the interest rate is
    zero, the payment simplifies to ``B / n``.
    """
    if remaining_months <= 0:
        raise ValueError("Remaining months must be positive")
    if rate_per_month == 0:
        return balance / remaining_months
    return balance * rate_per_month / (1 - (1 + rate_per_month) ** -remaining_months)


def _check_preconditions(params: LoanParameters) -> None:
    if params.months < 1:
        raise ValueError("Term must be at least one month")
    if params.principal <= 0:
        raise ValueError("Principal must be positive")


def compute_flat(params: LoanParameters) -> LoanSummary:
    """Compute the flat-rate schedule for ``params``.

    The principal is split evenly over the term and each month's interest is
    ``monthly rate * original principal``.

    Raises
    ------
    ValueError
        If ``params`` did not come out of ``normalize`` (e.g. zero months).
    """
    _check_preconditions(params)
    principal = params.principal
    months = params.months
    principal_installment = principal / months
    remaining_principal = principal
    schedule: List[PaymentEntry] = []

    for month in range(1, months + 1):
        is_discounted = month <= params.intro_discount_months
        rate_per_month = applicable_annual_rate(params, month) / 100 / 12
        interest_portion = round_currency(principal * rate_per_month)

        principal_portion = principal_installment
        if month == months:
            # Whatever is left, so the schedule ends at exactly zero
            principal_portion = remaining_principal

        remaining_principal -= principal_portion
        if remaining_principal < BALANCE_EPSILON:
            remaining_principal = 0.0

        rounded_principal = round_currency(principal_portion)
        rounded_payment = round_currency(rounded_principal + interest_portion)
        principal_ratio = 0.0 if rounded_payment == 0 else rounded_principal / rounded_payment
        interest_ratio = 0.0 if rounded_payment == 0 else interest_portion / rounded_payment

        schedule.append(
            PaymentEntry(
                month=month,
                payment=rounded_payment,
                principal_portion=rounded_principal,
                interest_portion=interest_portion,
                remaining_balance=round_currency(max(remaining_principal, 0.0)),
                principal_ratio=principal_ratio,
                interest_ratio=interest_ratio,
                is_discounted=is_discounted,
            )
        )

    total_interest = round_currency(sum(e.interest_portion for e in schedule))
    total_payment = round_currency(sum(e.payment for e in schedule))
    logger.debug("Flat schedule: %d months, total interest %.2f", months, total_interest)

    return LoanSummary(
        method=FLAT,
        monthly_payment=schedule[0].payment,
        total_interest=total_interest,
        total_payment=total_payment,
        schedule=tuple(schedule),
    )


def compute_effective(params: LoanParameters) -> LoanSummary:
    """Compute the effective (annuity, reducing-balance) schedule.

    The annuity payment is recomputed every month from the current balance,
    the current rate and the months left. With a constant rate this yields
    the familiar level payment; when the introductory discount expires the
    payment steps up to the amount that amortizes the balance at the base
    rate.

    Raises
    ------
    ValueError
        If ``params`` did not come out of ``normalize`` (e.g. zero months).
    """
    _check_preconditions(params)
    months = params.months
    balance = params.principal
    schedule: List[PaymentEntry] = []

    for month in range(1, months + 1):
        is_discounted = month <= params.intro_discount_months
        rate_per_month = applicable_annual_rate(params, month) / 100 / 12
        remaining_months = months - month + 1

        scheduled_payment = _calculate_annuity_payment(balance, rate_per_month, remaining_months)
        interest_portion = 0.0 if rate_per_month == 0 else balance * rate_per_month
        principal_portion = scheduled_payment - interest_portion
        if month == months:
            principal_portion = balance

        balance -= principal_portion
        if balance < BALANCE_EPSILON:
            balance = 0.0

        rounded_interest = round_currency(interest_portion)
        rounded_principal = round_currency(principal_portion)
        rounded_payment = round_currency(rounded_principal + rounded_interest)
        principal_ratio = 0.0 if rounded_payment == 0 else rounded_principal / rounded_payment
        interest_ratio = 0.0 if rounded_payment == 0 else rounded_interest / rounded_payment

        schedule.append(
            PaymentEntry(
                month=month,
                payment=rounded_payment,
                principal_portion=rounded_principal,
                interest_portion=rounded_interest,
                remaining_balance=round_currency(max(balance, 0.0)),
                principal_ratio=principal_ratio,
                interest_ratio=interest_ratio,
                is_discounted=is_discounted,
            )
        )

    total_interest = round_currency(sum(e.interest_portion for e in schedule))
    total_payment = round_currency(sum(e.payment for e in schedule))
    logger.debug("Effective schedule: %d months, total interest %.2f", months, total_interest)

    return LoanSummary(
        method=EFFECTIVE,
        monthly_payment=schedule[0].payment,
        total_interest=total_interest,
        total_payment=total_payment,
        schedule=tuple(schedule),
    )
