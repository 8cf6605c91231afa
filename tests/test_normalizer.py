# tests/test_normalizer.py
import pytest

from pinjaman_calc.data_models import Invalid, LoanParameters, RawLoanInput
from pinjaman_calc.normalizer import normalize, term_to_months
from tests.utils import make_raw


def test_valid_input_produces_parameters():
    params = normalize(make_raw())
    assert isinstance(params, LoanParameters)
    assert params.principal == 12_000_000
    assert params.annual_rate == 12
    assert params.months == 12
    assert params.intro_discount_rate == 0
    assert params.intro_discount_months == 0
    assert params.provision_rate == 0


def test_years_converted_to_months():
    assert normalize(make_raw(term=5, term_unit="years")).months == 60
    assert normalize(make_raw(term=0.5, term_unit="years")).months == 6
    assert normalize(make_raw(term="2.5", term_unit="years")).months == 30


def test_month_term_rounded_half_up():
    assert term_to_months(2.5, "months") == 3
    assert term_to_months(2.4, "months") == 2
    assert normalize(make_raw(term=2.5)).months == 3


def test_string_numbers_accepted():
    params = normalize(make_raw(amount="1,200,000", rate="7.5", term="24"))
    assert params.principal == 1_200_000
    assert params.annual_rate == 7.5
    assert params.months == 24


def test_disabled_toggles_ignore_stale_values():
    params = normalize(
        make_raw(
            include_intro_discount=False,
            intro_discount_rate=4,
            intro_discount_months=3,
            include_provision=False,
            provision_rate=2,
        )
    )
    assert params.intro_discount_rate == 0
    assert params.intro_discount_months == 0
    assert params.provision_rate == 0


def test_enabled_toggles_keep_values():
    params = normalize(
        make_raw(
            include_intro_discount="on",
            intro_discount_rate="4",
            intro_discount_months="3",
            include_provision="on",
            provision_rate="1.5",
        )
    )
    assert params.intro_discount_rate == 4
    assert params.intro_discount_months == 3
    assert params.provision_rate == 1.5


def test_zero_rate_is_valid():
    params = normalize(make_raw(rate=0))
    assert isinstance(params, LoanParameters)
    assert params.annual_rate == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": 0},
        {"amount": -5},
        {"amount": "abc"},
        {"amount": float("nan")},
        {"amount": float("inf")},
        {"amount": 10**400},
        {"rate": -1},
        {"rate": float("inf")},
        {"term": 0},
        {"term": 0.4},
        {"term": ""},
        {"term": 1e9, "term_unit": "years"},
        {"term": 1201},
        {"term_unit": "weeks"},
        {"include_intro_discount": True, "intro_discount_rate": -1, "intro_discount_months": 3},
        {"include_intro_discount": True, "intro_discount_rate": 2, "intro_discount_months": "x"},
        {"include_provision": True, "provision_rate": -0.5},
    ],
)
def test_invalid_inputs_return_invalid(overrides):
    result = normalize(make_raw(**overrides))
    assert isinstance(result, Invalid)
    assert result.reason


def test_negative_values_in_disabled_fields_are_ignored():
    params = normalize(make_raw(intro_discount_rate=-5, provision_rate=-1))
    assert isinstance(params, LoanParameters)


def test_garbage_everywhere_does_not_raise():
    result = normalize(RawLoanInput(amount=None, rate=None, term=None, term_unit=None))
    assert isinstance(result, Invalid)


def test_term_limit_is_inclusive():
    params = normalize(make_raw(term=100, term_unit="years"))
    assert isinstance(params, LoanParameters)
    assert params.months == 1200

    result = normalize(make_raw(term=1201))
    assert isinstance(result, Invalid)
    assert "1200" in result.reason
