import math

import pytest

from becker_irr.balance import balance_irr, outstanding_balance
from becker_irr.errors import DegenerateSeries, DomainViolation, NonConvergent
from becker_irr.solver import SolverConfig


def test_outstanding_balance_single_period():
    assert outstanding_balance([-100.0, 110.0], 0.05, 0.1) == pytest.approx(0.0, abs=1e-9)


def test_positive_balance_grows_at_external_rate():
    assert outstanding_balance([100.0, -50.0], 0.05, 0.9) == pytest.approx(55.0)


def test_negative_balance_grows_at_trial_rate():
    assert outstanding_balance([-100.0, 0.0], 0.05, 0.2) == pytest.approx(-120.0)


def test_outstanding_balance_empty():
    assert outstanding_balance([], 0.05, 0.1) == 0.0


def test_outstanding_balance_rejects_rate():
    with pytest.raises(DomainViolation):
        outstanding_balance([-100.0, 110.0], 0.05, -1.0)


def test_outstanding_balance_validates_rates_for_empty_series():
    with pytest.raises(DomainViolation):
        outstanding_balance([], -5.0, 0.1)
    with pytest.raises(DomainViolation):
        outstanding_balance([], 0.05, -5.0)


def test_balance_irr_simple():
    result = balance_irr([-100.0, 110.0], 0.05, 0.0, 6)
    assert result.rate == pytest.approx(0.1)
    assert result.method == "balance"


def test_balance_irr_matches_classic_irr_when_balance_stays_negative():
    # -100 x**2 + 50 x + 60 = 0 with x = 1 + r.
    expected = (50.0 + math.sqrt(50.0**2 + 4.0 * 100.0 * 60.0)) / 200.0 - 1.0
    result = balance_irr([-100.0, 50.0, 60.0], 0.05, 0.1, 8)
    assert abs(result.root - expected) < 1e-7
    assert abs(result.residual) < 1e-5


def test_balance_irr_walks_down_to_negative_root():
    result = balance_irr([-100.0, 5.0, 5.0], 0.05, 0.1, 6)
    assert result.rate == pytest.approx(-0.75)


def test_guess_on_root_returns_immediately():
    result = balance_irr([-100.0, 110.0], 0.05, 0.1, 6)
    assert result.iterations == 0
    assert result.rate == pytest.approx(0.1)


def test_balance_irr_deterministic():
    cashflows = [50.0, -200.0, 20.0, 40.0, 200.0, 100.0, -70.0, -100.0, 20.0, 100.0]
    assert balance_irr(cashflows, 0.07, 0.1, 6) == balance_irr(cashflows, 0.07, 0.1, 6)


def test_balance_irr_degenerate():
    with pytest.raises(DegenerateSeries):
        balance_irr([5.0, 10.0], 0.05, 0.1, 6)


def test_balance_irr_rejects_external_rate():
    with pytest.raises(DomainViolation):
        balance_irr([-100.0, 110.0], -1.5, 0.1, 6)


def test_flat_balance_walks_out_of_domain():
    with pytest.raises(DomainViolation):
        balance_irr([10.0, -100.0], 0.05, 0.1, 6)


def test_bracket_search_bounded():
    with pytest.raises(NonConvergent):
        balance_irr([-100.0, 5.0, 5.0], 0.05, 0.1, 6, config=SolverConfig(max_iterations=2))
