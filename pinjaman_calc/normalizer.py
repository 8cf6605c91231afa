"""Validation and clamping of raw loan input.

``normalize`` is the only gate in front of the amortization engines: it turns
a ``RawLoanInput`` into ``LoanParameters`` or returns an ``Invalid`` value
explaining why no schedule can be produced. It never raises for bad input.
"""

from __future__ import annotations

import logging
import math
from typing import Union

from .config import MAX_TERM_MONTHS
from .data_models import MONTHS, TERM_UNITS, YEARS, Invalid, LoanParameters, RawLoanInput
from .utils import round_half_up, to_bool, to_number

logger = logging.getLogger(__name__)


def term_to_months(term: float, term_unit: str) -> float:
    """Convert a term field to a whole number of months (half-up).

    Returns ``nan`` when ``term`` is not finite.
    """
    months = term * 12 if term_unit == YEARS else term
    if not math.isfinite(months):
        return math.nan
    return round_half_up(months)


def _invalid(reason: str) -> Invalid:
    logger.debug("Rejected loan input: %s", reason)
    return Invalid(reason)


def normalize(raw: RawLoanInput) -> Union[LoanParameters, Invalid]:
    """Validate ``raw`` and build the parameter set for one calculation.

    Rules
    -----
    * principal must be finite and > 0;
    * annual rate must be finite and >= 0;
    * the term, converted to months and rounded, must be finite, >= 1
      and no longer than ``MAX_TERM_MONTHS``;
    * discount rate/duration and provision rate are forced to 0 when their
      toggle is off, regardless of the field contents. When a toggle is on
      its values must be finite and >= 0.
    """
    principal = to_number(raw.amount)
    if not math.isfinite(principal) or principal <= 0:
        return _invalid("Loan amount must be a positive number")

    annual_rate = to_number(raw.rate)
    if not math.isfinite(annual_rate) or annual_rate < 0:
        return _invalid("Interest rate must be zero or a positive number")

    term_unit = str(raw.term_unit or MONTHS).strip().lower()
    if term_unit not in TERM_UNITS:
        return _invalid(f"Term unit must be one of {', '.join(TERM_UNITS)}; got {raw.term_unit}")
    months = term_to_months(to_number(raw.term), term_unit)
    if not math.isfinite(months) or months <= 0:
        return _invalid("Term must be at least one month")
    if months > MAX_TERM_MONTHS:
        return _invalid(f"Term must not exceed {MAX_TERM_MONTHS} months")

    intro_rate = 0.0
    intro_months = 0
    if to_bool(raw.include_intro_discount):
        intro_rate = to_number(raw.intro_discount_rate)
        intro_duration = to_number(raw.intro_discount_months)
        if not math.isfinite(intro_rate) or intro_rate < 0:
            return _invalid("Introductory discount rate must be zero or a positive number")
        if not math.isfinite(intro_duration) or intro_duration < 0:
            return _invalid("Introductory discount duration must be zero or a positive number")
        intro_months = int(round_half_up(intro_duration))

    provision_rate = 0.0
    if to_bool(raw.include_provision):
        provision_rate = to_number(raw.provision_rate)
        if not math.isfinite(provision_rate) or provision_rate < 0:
            return _invalid("Provision rate must be zero or a positive number")

    return LoanParameters(
        principal=principal,
        annual_rate=annual_rate,
        months=int(months),
        intro_discount_rate=intro_rate,
        intro_discount_months=intro_months,
        provision_rate=provision_rate,
    )
