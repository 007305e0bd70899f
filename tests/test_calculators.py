import pytest
from pydantic import ValidationError

from homefinance.calculators import calculate_mortgage_payment
from homefinance.errors import InvalidInput
from homefinance.models import MortgageParams


def mortgage(principal, rate, term):
    return calculate_mortgage_payment(
        MortgageParams(principal=principal, annual_interest_rate=rate, loan_term_years=term)
    )


def test_thirty_year_six_percent():
    res = mortgage(500000, 0.06, 30)
    assert res.monthly_payment == pytest.approx(2997.75, abs=0.01)
    assert res.total_payments == pytest.approx(1079190.93, abs=1.0)
    assert res.total_interest == pytest.approx(579190.93, abs=1.0)


def test_fifteen_year_five_percent():
    res = mortgage(300000, 0.05, 15)
    assert round(res.monthly_payment, 2) == pytest.approx(2372.38, abs=0.01)


@pytest.mark.parametrize(
    "principal,rate,term",
    [(500000, 0.06, 30), (250000, 0.0375, 20), (85000, 0.12, 10), (1, 0.2, 1)],
)
def test_totals_are_consistent(principal, rate, term):
    res = mortgage(principal, rate, term)
    assert res.total_payments == pytest.approx(res.monthly_payment * term * 12, abs=0.01)
    assert res.total_interest == pytest.approx(res.total_payments - principal, abs=0.01)


def test_zero_principal_is_all_zeros():
    res = mortgage(0, 0.06, 30)
    assert res.monthly_payment == 0
    assert res.total_payments == 0
    assert res.total_interest == 0


def test_zero_rate_divides_principal_evenly():
    res = mortgage(120000, 0, 10)
    assert res.monthly_payment == 120000 / 120
    assert res.total_interest == 0
    # total_payments is the principal itself, not payment * months
    assert res.total_payments == 120000


def test_higher_rate_costs_more():
    low = mortgage(400000, 0.05, 30)
    high = mortgage(400000, 0.055, 30)
    assert high.monthly_payment > low.monthly_payment
    assert high.total_interest > low.total_interest


def test_result_is_immutable():
    res = mortgage(100000, 0.05, 30)
    with pytest.raises(Exception):
        res.monthly_payment = 1.0


@pytest.mark.parametrize(
    "principal,rate,term,message",
    [
        (-1, 0.05, 30, "Principal must be non-negative"),
        (100000, -0.01, 30, "Interest rate must be non-negative"),
        (100000, 0.05, 0, "Loan term must be positive"),
        (100000, 0.05, -5, "Loan term must be positive"),
    ],
)
def test_invalid_inputs_rejected(principal, rate, term, message):
    with pytest.raises(InvalidInput) as exc:
        mortgage(principal, rate, term)
    assert str(exc.value) == message


def test_first_failing_check_wins():
    with pytest.raises(InvalidInput, match="Principal must be non-negative"):
        mortgage(-1, -1, 0)
    with pytest.raises(InvalidInput, match="Interest rate must be non-negative"):
        mortgage(1000, -1, 0)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        mortgage(-5, 0.05, 30)


@pytest.mark.parametrize("rate", [1e-17, 1e-13])
def test_tiny_rate_matches_even_split(rate):
    res = mortgage(120000, rate, 10)
    assert res.monthly_payment == pytest.approx(1000.00, abs=0.01)
    assert res.total_interest >= 0


def test_very_long_term_approaches_interest_only():
    res = mortgage(100000, 1.0, 800)
    assert res.monthly_payment == pytest.approx(100000 * 1.0 / 12, rel=1e-9)
    assert res.total_interest > 0


@pytest.mark.parametrize("field", ["principal", "annual_interest_rate"])
@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_inputs_rejected(field, value):
    values = {"principal": 100000, "annual_interest_rate": 0.05, "loan_term_years": 30}
    values[field] = value
    with pytest.raises(ValidationError):
        MortgageParams(**values)
