# tests/test_engine.py
from datetime import date

import pytest

from emi_calc.data_models import LoanSummary
from emi_calc.engine import (
    calculate_emi,
    calculate_loan,
    compute_schedule,
    compute_summary,
    total_interest_paid,
    validate_terms,
)
from emi_calc.errors import InvalidLoanInput
from emi_calc.utils import add_months, current_month

LOANS = [
    (50_000, 7.5, 5),
    (5_000, 25, 1),
    (250_000, 12.25, 20),
    (1_000_000, 1, 30),
    (100_000, 0, 10),
]


def test_emi_known_case():
    s = compute_summary(50_000, 7.5, 5)
    assert s.monthly_rate == pytest.approx(0.00625)
    assert s.period_count == 60
    # standard amortizing formula, ~1001.90 per month
    assert s.monthly_payment == pytest.approx(1001.9, abs=0.02)
    assert s.total_payable == pytest.approx(60_113.8, abs=1.5)
    assert s.total_interest == pytest.approx(10_113.8, abs=1.5)
    assert s.principal_amount == 50_000


def test_calculate_emi_matches_formula():
    r, n = 0.01, 24
    expected = 12_000 * r * (1 + r) ** n / ((1 + r) ** n - 1)
    assert calculate_emi(12_000, r, n) == pytest.approx(expected)


def test_calculate_emi_rejects_empty_term():
    with pytest.raises(InvalidLoanInput):
        calculate_emi(1_000, 0.01, 0)


def test_zero_rate_is_principal_over_periods():
    s = compute_summary(100_000, 0, 10)
    assert s.period_count == 120
    assert s.monthly_payment == pytest.approx(100_000 / 120)
    assert s.total_interest == 0.0
    assert s.total_payable == pytest.approx(100_000)


@pytest.mark.parametrize("principal,rate,tenure", LOANS)
def test_summary_totals(principal, rate, tenure):
    s = compute_summary(principal, rate, tenure)
    assert s.monthly_payment > 0
    assert s.monthly_payment * s.period_count == s.total_payable
    assert s.total_interest + s.principal_amount == pytest.approx(s.total_payable, rel=1e-6)


@pytest.mark.parametrize("principal,rate,tenure", LOANS)
def test_schedule_invariants(principal, rate, tenure):
    summary, sched = calculate_loan(principal, rate, tenure, date(2020, 6, 1))
    assert len(sched) == tenure * 12
    assert [e.period for e in sched] == list(range(1, tenure * 12 + 1))

    previous = float(principal)
    for entry in sched:
        assert entry.payment == summary.monthly_payment
        assert entry.principal_payment + entry.interest_payment == pytest.approx(entry.payment, abs=1e-9)
        assert entry.starting_balance == previous
        assert entry.ending_balance == max(0.0, previous - entry.principal_payment)
        assert entry.ending_balance >= 0.0
        previous = entry.ending_balance

    assert sched[-1].ending_balance == pytest.approx(0.0, abs=0.01)


@pytest.mark.parametrize("principal,rate,tenure", LOANS)
def test_schedule_monotonicity(principal, rate, tenure):
    _, sched = calculate_loan(principal, rate, tenure)
    for prev, cur in zip(sched, sched[1:]):
        assert cur.ending_balance <= prev.ending_balance
        assert cur.interest_payment <= prev.interest_payment
        assert cur.principal_payment >= prev.principal_payment


@pytest.mark.parametrize("principal,rate,tenure", LOANS)
def test_schedule_interest_adds_up_to_summary(principal, rate, tenure):
    summary, sched = calculate_loan(principal, rate, tenure)
    assert total_interest_paid(sched) == pytest.approx(summary.total_interest, rel=1e-6, abs=1e-6)


def test_max_rate_short_loan_retires_balance():
    _, sched = calculate_loan(5_000, 25, 1)
    assert len(sched) == 12
    assert sched[-1].ending_balance == pytest.approx(0.0, abs=0.01)
    assert sched[0].interest_payment == pytest.approx(5_000 * 25 / 1200)


def test_schedule_calendar_labels_roll_over_years():
    _, sched = calculate_loan(12_000, 6, 1, date(2024, 11, 1))
    labels = [(e.year, e.month) for e in sched]
    assert labels[0] == (2024, 12)
    assert labels[1] == (2025, 1)
    assert labels[-1] == (2025, 11)
    assert sched[1].date == date(2025, 1, 1)


def test_schedule_defaults_to_current_month():
    _, sched = calculate_loan(12_000, 6, 1)
    assert sched[0].date == add_months(current_month(), 1)


def test_schedule_uses_supplied_payment():
    summary = compute_summary(10_000, 10, 2)
    higher = summary.monthly_payment + 200
    sched = compute_schedule(10_000, 10, 2, higher, date(2024, 1, 1))
    assert len(sched) == 24
    assert {e.payment for e in sched} == {higher}
    # paid off early; the balance stays clamped at zero afterwards
    assert sched[-1].ending_balance == 0.0
    assert min(e.ending_balance for e in sched) == 0.0


def test_schedule_is_rebuilt_on_each_call(start_month):
    first = calculate_loan(20_000, 9, 3, start_month)
    second = calculate_loan(20_000, 9, 3, start_month)
    assert first == second
    assert first[1] is not second[1]


@pytest.mark.parametrize(
    "principal,rate,tenure",
    [
        (0, 7.5, 5),
        (-1_000, 7.5, 5),
        (50_000, -0.5, 5),
        (50_000, 7.5, 0),
        (50_000, 7.5, -3),
        (50_000, 7.5, 2.5),
        (50_000, 7.5, True),
        ("50000", 7.5, 5),
        (float("nan"), 7.5, 5),
        (50_000, float("inf"), 5),
    ],
)
def test_invalid_terms_are_rejected(principal, rate, tenure):
    with pytest.raises(InvalidLoanInput):
        compute_summary(principal, rate, tenure)
    with pytest.raises(InvalidLoanInput):
        compute_schedule(principal, rate, tenure, 100.0)


@pytest.mark.parametrize("payment", [0, -10.0, float("nan")])
def test_invalid_payment_is_rejected(payment):
    with pytest.raises(InvalidLoanInput, match="monthly payment"):
        compute_schedule(10_000, 5, 1, payment)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError) as excinfo:
        validate_terms(0, 5, 1)
    assert excinfo.value.field == "principal"
    assert "must be positive" in str(excinfo.value)


def test_summary_requires_a_rate():
    with pytest.raises(TypeError):
        LoanSummary(
            monthly_payment=100.0,
            total_interest=200.0,
            total_payable=1_200.0,
            principal_amount=1_000.0,
            period_count=12,
        )
