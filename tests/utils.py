# tests/utils.py
from __future__ import annotations

from pinjaman_calc.data_models import LoanParameters, RawLoanInput


def make_params(principal=12_000_000, annual_rate=12, months=12, discount_rate=0, discount_months=0, provision_rate=0):
    return LoanParameters(
        principal=float(principal),
        annual_rate=float(annual_rate),
        months=months,
        intro_discount_rate=float(discount_rate),
        intro_discount_months=discount_months,
        provision_rate=float(provision_rate),
    )


def make_raw(**overrides) -> RawLoanInput:
    values = dict(amount=12_000_000, rate=12, term=12, term_unit="months")
    values.update(overrides)
    return RawLoanInput(**values)
