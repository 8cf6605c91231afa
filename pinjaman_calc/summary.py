"""Summary aggregation across both amortization methods.

``compute_loan_summaries`` is the entry point used by the CLI, the web front
end and the exporters: it normalizes raw input, runs both engines on the same
parameters and packages the results with the net disbursement. Comparisons
between methods are pure functions of two finished ``LoanSummary`` values.
"""

from __future__ import annotations

import logging
from typing import Union

from .data_models import (
    EFFECTIVE,
    FLAT,
    CalculationState,
    Invalid,
    LoanParameters,
    LoanSummary,
    RawLoanInput,
)
from .engine import compute_effective, compute_flat
from .normalizer import normalize
from .utils import round_currency

logger = logging.getLogger(__name__)


def calculate(params: LoanParameters) -> CalculationState:
    """Run both engines on already-normalized ``params``."""
    provision_amount = params.principal * params.provision_rate / 100
    flat = compute_flat(params)
    effective = compute_effective(params)
    logger.debug(
        "Calculated %d-month loan of %.2f: flat interest %.2f, effective interest %.2f",
        params.months,
        params.principal,
        flat.total_interest,
        effective.total_interest,
    )
    return CalculationState(
        principal=params.principal,
        annual_rate=params.annual_rate,
        months=params.months,
        intro_discount_rate=params.intro_discount_rate,
        intro_discount_months=params.intro_discount_months,
        provision_rate=params.provision_rate,
        provision_amount=provision_amount,
        net_disbursement=max(params.principal - provision_amount, 0.0),
        flat=flat,
        effective=effective,
    )


def compute_loan_summaries(raw: RawLoanInput) -> Union[CalculationState, Invalid]:
    """Normalize ``raw`` and compute both schedules.

    Returns the ``Invalid`` value from the normalizer unchanged when the
    input cannot produce a schedule; callers must not look for partial
    results in that case.
    """
    params = normalize(raw)
    if isinstance(params, Invalid):
        return params
    return calculate(params)


def select_summary(state: CalculationState, method: str) -> LoanSummary:
    """Return the summary for ``method`` without altering either one."""
    if method == FLAT:
        return state.flat
    if method == EFFECTIVE:
        return state.effective
    raise ValueError(f"Unknown method: {method}")


def interest_delta(flat: LoanSummary, effective: LoanSummary) -> float:
    """Extra interest paid under the flat method compared to the effective one."""
    return round_currency(flat.total_interest - effective.total_interest)


def total_payment_delta(flat: LoanSummary, effective: LoanSummary) -> float:
    return round_currency(flat.total_payment - effective.total_payment)
