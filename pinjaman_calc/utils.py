"""Utility functions for the loan calculator.

This module holds the single currency-rounding rule shared by both
amortization engines, plus helpers that turn user input (numbers, numeric
strings, form checkbox values, formatted currency text) into Python values.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from .config import CURRENCY_PLACES, EPSILON

_TRUTHY = {"1", "true", "on", "yes"}


def round_half_up(value: float, places: int = 0) -> float:
    """Round ``value`` half away from zero to ``places`` fractional digits.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``),
    which is not how amounts are rounded on a loan statement. The value is
    converted through its shortest ``repr`` so that ``0.125`` is seen as
    exactly ``0.125`` rather than its binary approximation.
    """
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Wide enough for any finite float
        ctx.prec = 400
        rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def round_currency(value: float) -> float:
    """Finalize a currency amount to two decimals.

    Applies ``round((value + eps) * 100) / 100`` with half-up rounding. Every
    figure placed in a schedule entry goes through this function so the flat
    and effective engines round identically.
    """
    scale = 10 ** CURRENCY_PLACES
    return round_half_up((value + EPSILON) * scale) / scale


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas, underscores and surrounding whitespace.
    It raises ``ValueError`` if conversion fails.
    """
    try:
        cleaned = value.strip().replace(",", "").replace("_", "")
        return Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc


def to_number(value: Any) -> float:
    """Best-effort conversion of a form value to ``float``.

    Returns ``nan`` for anything that is not a number, so callers can reject
    it with a single ``math.isfinite`` check instead of catching exceptions.
    """
    if value is None:
        return math.nan
    if isinstance(value, str):
        if not value.strip():
            return math.nan
        try:
            return float(decimal_from_str(value))
        except ValueError:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def to_bool(value: Any) -> bool:
    """Interpret a toggle value; HTML checkboxes arrive as ``"on"``."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def parse_currency_input(raw: str) -> int:
    """Extract the integer amount from formatted currency text.

    Every non-digit is dropped, so ``"Rp 150.000.000"`` yields ``150000000``.
    Empty input yields 0.
    """
    digits = re.sub(r"\D", "", raw or "")
    return int(digits) if digits else 0
