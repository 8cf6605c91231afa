# tests/test_summary.py
import pytest

from pinjaman_calc.data_models import EFFECTIVE, FLAT, CalculationState, Invalid
from pinjaman_calc.summary import (
    calculate,
    compute_loan_summaries,
    interest_delta,
    select_summary,
    total_payment_delta,
)
from pinjaman_calc.utils import round_currency
from tests.utils import make_params, make_raw


def test_compute_loan_summaries_runs_both_methods():
    state = compute_loan_summaries(make_raw())
    assert isinstance(state, CalculationState)
    assert state.flat.method == FLAT
    assert state.effective.method == EFFECTIVE
    assert len(state.flat.schedule) == len(state.effective.schedule) == 12
    assert state.months == 12
    assert state.principal == 12_000_000


def test_invalid_input_yields_no_state():
    result = compute_loan_summaries(make_raw(amount=0))
    assert isinstance(result, Invalid)


def test_invalid_term_yields_no_state():
    assert isinstance(compute_loan_summaries(make_raw(term=0)), Invalid)


def test_net_disbursement_without_provision(twelve_percent_state):
    assert twelve_percent_state.provision_amount == 0
    assert twelve_percent_state.net_disbursement == 12_000_000


def test_net_disbursement_with_provision(full_featured_state):
    assert full_featured_state.provision_amount == pytest.approx(1_500_000)
    assert full_featured_state.net_disbursement == pytest.approx(148_500_000)


def test_net_disbursement_floored_at_zero():
    state = calculate(make_params(provision_rate=150))
    assert state.net_disbursement == 0


def test_provision_does_not_change_schedule():
    plain = calculate(make_params())
    with_fee = calculate(make_params(provision_rate=2))
    assert plain.flat == with_fee.flat
    assert plain.effective == with_fee.effective


def test_disabled_provision_toggle_keeps_full_disbursement():
    state = compute_loan_summaries(make_raw(include_provision=False, provision_rate=3))
    assert state.net_disbursement == 12_000_000


def test_state_echoes_discount(full_featured_state):
    assert full_featured_state.intro_discount_rate == 4
    assert full_featured_state.intro_discount_months == 12
    assert full_featured_state.discounted_annual_rate == 6
    assert full_featured_state.has_intro_discount


def test_select_summary(twelve_percent_state):
    assert select_summary(twelve_percent_state, FLAT) is twelve_percent_state.flat
    assert select_summary(twelve_percent_state, EFFECTIVE) is twelve_percent_state.effective
    with pytest.raises(ValueError):
        select_summary(twelve_percent_state, "balloon")


def test_interest_delta(twelve_percent_state):
    flat, effective = twelve_percent_state.flat, twelve_percent_state.effective
    delta = interest_delta(flat, effective)
    assert delta == round_currency(flat.total_interest - effective.total_interest)
    assert delta > 0


def test_total_payment_delta_matches_interest_delta(twelve_percent_state):
    flat, effective = twelve_percent_state.flat, twelve_percent_state.effective
    assert total_payment_delta(flat, effective) == pytest.approx(interest_delta(flat, effective), abs=0.12)


def test_zero_rate_has_no_delta():
    state = calculate(make_params(principal=1_200_000, annual_rate=0, months=12))
    assert interest_delta(state.flat, state.effective) == 0


def test_recalculation_is_independent():
    first = compute_loan_summaries(make_raw())
    compute_loan_summaries(make_raw(amount=1, rate=50, term=3))
    again = compute_loan_summaries(make_raw())
    assert first == again
