# tests/conftest.py
from __future__ import annotations

import pytest

from pinjaman_calc.summary import calculate
from tests.utils import make_params


# -------- Domain fixtures --------
@pytest.fixture
def twelve_percent_params():
    """12,000,000 at 12% over 12 months, no discount or provision."""
    return make_params()


@pytest.fixture
def discounted_params():
    """10,000,000 at 10% over 12 months with 4 points off for 3 months."""
    return make_params(principal=10_000_000, annual_rate=10, months=12, discount_rate=4, discount_months=3)


@pytest.fixture
def twelve_percent_state(twelve_percent_params):
    return calculate(twelve_percent_params)


@pytest.fixture
def full_featured_state():
    return calculate(
        make_params(principal=150_000_000, annual_rate=10, months=60, discount_rate=4, discount_months=12, provision_rate=1)
    )
